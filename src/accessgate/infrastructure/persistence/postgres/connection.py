"""PostgreSQL async connection pool for permission queries."""

from psycopg_pool import AsyncConnectionPool

APPLICATION_NAME = "accessgate"


def connection_kwargs(statement_timeout: float | None) -> dict[str, str]:
    """Per-connection session settings.

    A server-side statement_timeout backs the client-side query timeout so an
    abandoned query does not keep running after the caller gave up.
    """
    kwargs = {"application_name": APPLICATION_NAME}
    if statement_timeout:
        kwargs["options"] = f"-c statement_timeout={int(statement_timeout * 1000)}"
    return kwargs


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    statement_timeout: float | None = None,
) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False; PoolLifespanMiddleware opens it on ASGI
    startup. Connections are checked on checkout so a restarted server
    surfaces as a fresh connection rather than a failed query.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        kwargs=connection_kwargs(statement_timeout),
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
