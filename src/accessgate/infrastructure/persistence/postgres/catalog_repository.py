"""PostgreSQL catalog repository implementation - systems and security definitions."""

from collections.abc import Collection
from datetime import datetime

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from accessgate.application.dto.system_dto import SystemGroupInfo, SystemStats, SystemUserInfo
from accessgate.domain.entities import SecurityDefinition, System
from accessgate.domain.exceptions import DuplicateSystem

_SYSTEM_COLUMNS = (
    "id, code, name, description, icon, base_url, is_internal, requires_manager, "
    "is_active, created_date, created_by, modified_date, modified_by"
)
_DEFINITION_COLUMNS = (
    "security_id, system_id, name, description, resource_type, resource_path, "
    "category, sort_order, is_active"
)


def _system_from_row(r: tuple) -> System:
    return System(
        id=r[0],
        code=r[1],
        name=r[2],
        description=r[3],
        icon=r[4],
        base_url=r[5],
        is_internal=r[6],
        requires_manager=r[7],
        is_active=r[8],
        created_date=r[9],
        created_by=r[10],
        modified_date=r[11],
        modified_by=r[12],
    )


def _definition_from_row(r: tuple) -> SecurityDefinition:
    return SecurityDefinition(
        security_id=r[0],
        system_id=r[1],
        name=r[2],
        description=r[3],
        resource_type=r[4],
        resource_path=r[5],
        category=r[6],
        sort_order=r[7],
        is_active=r[8],
    )


def _build_definition_filter(
    security_ids: Collection[int] | None, system_id: int | None
) -> tuple[list[str], list]:
    """WHERE conditions and params for active definitions."""
    conditions = ["is_active"]
    params: list = []
    if security_ids is not None:
        conditions.append("security_id = ANY(%s)")
        params.append(sorted(security_ids))
    if system_id is not None:
        conditions.append("system_id = %s")
        params.append(system_id)
    return conditions, params


def _contains_pattern(query: str) -> str:
    """ILIKE pattern matching query as a literal substring (escape char is backslash)."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresCatalogRepository:
    """System and security definition repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_systems(self) -> list[System]:
        """List active systems."""
        cur = await self._conn.execute(
            f"SELECT {_SYSTEM_COLUMNS} FROM system WHERE is_active ORDER BY code"
        )
        rows = await cur.fetchall()
        return [_system_from_row(r) for r in rows]

    async def get_system_by_code(self, code: str) -> System | None:
        """Get system by code, active or not."""
        cur = await self._conn.execute(
            f"SELECT {_SYSTEM_COLUMNS} FROM system WHERE lower(code) = lower(%s)",
            (code,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _system_from_row(r)

    async def system_code_exists(self, code: str) -> bool:
        """Whether any system (active or not) already uses code."""
        cur = await self._conn.execute(
            "SELECT EXISTS (SELECT 1 FROM system WHERE lower(code) = lower(%s))",
            (code,),
        )
        r = await cur.fetchone()
        return bool(r[0])

    async def search_systems(self, query: str) -> list[System]:
        """Active systems whose code, name or description contains query literally."""
        pattern = _contains_pattern(query)
        cur = await self._conn.execute(
            f"SELECT {_SYSTEM_COLUMNS} FROM system "
            "WHERE is_active AND (code ILIKE %s ESCAPE '\\' OR name ILIKE %s ESCAPE '\\' "
            "OR description ILIKE %s ESCAPE '\\') "
            "ORDER BY CASE WHEN code ILIKE %s ESCAPE '\\' THEN 0 "
            "WHEN name ILIKE %s ESCAPE '\\' THEN 1 ELSE 2 END, name",
            (pattern, pattern, pattern, pattern, pattern),
        )
        rows = await cur.fetchall()
        return [_system_from_row(r) for r in rows]

    async def create_system(self, system: System) -> System:
        """Create system; the store assigns the id."""
        try:
            cur = await self._conn.execute(
                "INSERT INTO system (code, name, description, icon, base_url, is_internal, "
                "requires_manager, is_active, created_date, created_by) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, true, %s, %s) RETURNING id",
                (
                    system.code,
                    system.name,
                    system.description,
                    system.icon,
                    system.base_url,
                    system.is_internal,
                    system.requires_manager,
                    system.created_date,
                    system.created_by,
                ),
            )
        except UniqueViolation as e:
            raise DuplicateSystem(f"System code already exists: {system.code}") from e
        r = await cur.fetchone()
        system.id = r[0]
        return system

    async def update_system(self, system: System) -> None:
        """Update system."""
        await self._conn.execute(
            "UPDATE system SET name=%s, description=%s, icon=%s, base_url=%s, "
            "is_internal=%s, requires_manager=%s, modified_date=%s, modified_by=%s "
            "WHERE id=%s",
            (
                system.name,
                system.description,
                system.icon,
                system.base_url,
                system.is_internal,
                system.requires_manager,
                system.modified_date,
                system.modified_by,
                system.id,
            ),
        )

    async def deactivate_system(
        self, code: str, modified_by: str, modified_date: datetime
    ) -> bool:
        """Soft-delete an active system."""
        cur = await self._conn.execute(
            "UPDATE system SET is_active = false, modified_by = %s, modified_date = %s "
            "WHERE lower(code) = lower(%s) AND is_active",
            (modified_by, modified_date, code),
        )
        return cur.rowcount > 0

    async def list_definitions(
        self,
        *,
        security_ids: Collection[int] | None = None,
        system_id: int | None = None,
    ) -> list[SecurityDefinition]:
        """Active security definitions, optionally filtered by ids and/or system."""
        conditions, params = _build_definition_filter(security_ids, system_id)
        cur = await self._conn.execute(
            f"SELECT {_DEFINITION_COLUMNS} FROM security_definition "
            f"WHERE {' AND '.join(conditions)}",
            params,
        )
        rows = await cur.fetchall()
        return [_definition_from_row(r) for r in rows]

    async def count_definitions_by_system(self) -> dict[int, int]:
        """Number of active definitions per system."""
        cur = await self._conn.execute(
            "SELECT system_id, count(*) FROM security_definition "
            "WHERE is_active AND system_id IS NOT NULL GROUP BY system_id"
        )
        rows = await cur.fetchall()
        return {r[0]: r[1] for r in rows}

    async def stats(self) -> SystemStats:
        """Registry-wide counters."""
        cur = await self._conn.execute(
            "SELECT count(*), "
            "count(*) FILTER (WHERE is_active), "
            "count(*) FILTER (WHERE is_active AND is_internal), "
            "count(*) FILTER (WHERE is_active AND NOT is_internal), "
            "(SELECT count(*) FROM security_definition WHERE is_active), "
            "(SELECT count(DISTINCT lower(account)) FROM employee_group WHERE is_active), "
            "(SELECT count(*) FROM app_group WHERE is_active) "
            "FROM system"
        )
        r = await cur.fetchone()
        return SystemStats(
            total_systems=r[0],
            active_systems=r[1],
            internal_systems=r[2],
            external_systems=r[3],
            total_security_definitions=r[4],
            total_users=r[5],
            total_groups=r[6],
        )

    async def list_system_groups(self, code: str) -> list[SystemGroupInfo]:
        """Active groups granting active definitions of the system, by name."""
        cur = await self._conn.execute(
            "SELECT g.id, g.name, g.description, "
            "count(DISTINCT gsa.security_id), count(DISTINCT lower(eg.account)) "
            "FROM app_group g "
            "JOIN group_security_assignment gsa ON gsa.group_id = g.id AND gsa.is_active "
            "JOIN security_definition sd ON sd.security_id = gsa.security_id AND sd.is_active "
            "JOIN system s ON s.id = sd.system_id "
            "LEFT JOIN employee_group eg ON eg.group_id = g.id AND eg.is_active "
            "WHERE lower(s.code) = lower(%s) AND g.is_active "
            "GROUP BY g.id, g.name, g.description "
            "ORDER BY g.name",
            (code,),
        )
        rows = await cur.fetchall()
        return [
            SystemGroupInfo(
                group_id=r[0],
                group_name=r[1],
                group_description=r[2],
                permission_count=r[3],
                member_count=r[4],
            )
            for r in rows
        ]

    async def list_system_users(self, code: str) -> list[SystemUserInfo]:
        """Accounts with group-derived access to the system, with directory details."""
        cur = await self._conn.execute(
            "SELECT lower(eg.account), e.name, e.email, e.department, "
            "count(DISTINCT sd.security_id), array_agg(DISTINCT g.name ORDER BY g.name) "
            "FROM employee_group eg "
            "JOIN app_group g ON g.id = eg.group_id AND g.is_active "
            "JOIN group_security_assignment gsa ON gsa.group_id = g.id AND gsa.is_active "
            "JOIN security_definition sd ON sd.security_id = gsa.security_id AND sd.is_active "
            "JOIN system s ON s.id = sd.system_id "
            "LEFT JOIN employee e ON lower(e.account) = lower(eg.account) AND e.is_active "
            "WHERE lower(s.code) = lower(%s) AND eg.is_active "
            "GROUP BY lower(eg.account), e.name, e.email, e.department "
            "ORDER BY coalesce(e.name, lower(eg.account))",
            (code,),
        )
        rows = await cur.fetchall()
        return [
            SystemUserInfo(
                account=r[0],
                name=r[1] or r[0],
                email=r[2] or "",
                department=r[3] or "",
                permission_count=r[4],
                group_names=list(r[5]),
            )
            for r in rows
        ]
