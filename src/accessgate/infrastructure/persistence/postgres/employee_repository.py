"""PostgreSQL employee directory repository implementation."""

from psycopg import AsyncConnection

from accessgate.domain.entities import Employee

_EMPLOYEE_COLUMNS = "account, name, email, department, position, job_title"


def _employee_from_row(r: tuple) -> Employee:
    return Employee(
        account=r[0],
        name=r[1],
        email=r[2],
        department=r[3],
        position=r[4],
        job_title=r[5],
    )


class PostgresEmployeeRepository:
    """Employee directory repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_account(self, account: str) -> Employee | None:
        """Get active employee profile by account."""
        cur = await self._conn.execute(
            f"SELECT {_EMPLOYEE_COLUMNS} FROM employee WHERE lower(account) = %s AND is_active",
            (account,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _employee_from_row(r)

    async def list_all(self) -> list[Employee]:
        """Active directory entries ordered by name."""
        cur = await self._conn.execute(
            f"SELECT {_EMPLOYEE_COLUMNS} FROM employee WHERE is_active ORDER BY name, account"
        )
        rows = await cur.fetchall()
        return [_employee_from_row(r) for r in rows]
