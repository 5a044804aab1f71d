"""PostgreSQL group membership repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from accessgate.domain.entities import Group, GroupMembership


class PostgresGroupRepository:
    """Group and membership repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def active_group_ids_for(self, account: str) -> set[int]:
        """Ids of active groups the account is an active member of."""
        cur = await self._conn.execute(
            "SELECT eg.group_id FROM employee_group eg "
            "JOIN app_group g ON g.id = eg.group_id "
            "WHERE lower(eg.account) = %s AND eg.is_active AND g.is_active",
            (account,),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def list_groups_for(self, account: str) -> list[tuple[Group, GroupMembership]]:
        """Active memberships joined with their active groups, newest first."""
        cur = await self._conn.execute(
            "SELECT g.id, g.name, g.description, g.is_active, "
            "eg.account, eg.assigned_by, eg.assigned_date, eg.is_active "
            "FROM employee_group eg JOIN app_group g ON g.id = eg.group_id "
            "WHERE lower(eg.account) = %s AND eg.is_active AND g.is_active "
            "ORDER BY eg.assigned_date DESC",
            (account,),
        )
        rows = await cur.fetchall()
        return [
            (
                Group(id=r[0], name=r[1], description=r[2], is_active=r[3]),
                GroupMembership(
                    account=r[4],
                    group_id=r[0],
                    assigned_by=r[5],
                    assigned_date=r[6],
                    is_active=r[7],
                ),
            )
            for r in rows
        ]

    async def get_by_id(self, group_id: int) -> Group | None:
        """Get group by id."""
        cur = await self._conn.execute(
            "SELECT id, name, description, is_active FROM app_group WHERE id = %s",
            (group_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Group(id=r[0], name=r[1], description=r[2], is_active=r[3])

    async def get_by_name(self, name: str) -> Group | None:
        """Get active group by name."""
        cur = await self._conn.execute(
            "SELECT id, name, description, is_active FROM app_group "
            "WHERE name = %s AND is_active",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Group(id=r[0], name=r[1], description=r[2], is_active=r[3])

    async def has_active_membership(self, account: str, group_id: int | None = None) -> bool:
        """Whether the account has any (or one specific) active membership."""
        if group_id is None:
            cur = await self._conn.execute(
                "SELECT EXISTS (SELECT 1 FROM employee_group "
                "WHERE lower(account) = %s AND is_active)",
                (account,),
            )
        else:
            cur = await self._conn.execute(
                "SELECT EXISTS (SELECT 1 FROM employee_group "
                "WHERE lower(account) = %s AND group_id = %s AND is_active)",
                (account, group_id),
            )
        r = await cur.fetchone()
        return bool(r[0])

    async def add_membership(self, membership: GroupMembership) -> GroupMembership:
        """Insert active membership; a concurrent duplicate is ignored."""
        await self._conn.execute(
            "INSERT INTO employee_group (account, group_id, assigned_by, assigned_date, is_active) "
            "VALUES (%s, %s, %s, %s, true) "
            "ON CONFLICT (account, group_id) WHERE is_active DO NOTHING",
            (
                membership.account,
                membership.group_id,
                membership.assigned_by,
                membership.assigned_date,
            ),
        )
        return membership

    async def revoke_membership(
        self, account: str, group_id: int, removed_by: str, removed_date: datetime
    ) -> bool:
        """Deactivate the active membership in one statement."""
        cur = await self._conn.execute(
            "UPDATE employee_group SET is_active = false, removed_by = %s, removed_date = %s "
            "WHERE lower(account) = %s AND group_id = %s AND is_active",
            (removed_by, removed_date, account, group_id),
        )
        return cur.rowcount > 0
