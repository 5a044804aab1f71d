"""PostgreSQL security assignment repository implementation."""

from collections.abc import Collection
from datetime import datetime

from psycopg import AsyncConnection

from accessgate.domain.entities import (
    EmployeeSecurityAssignment,
    GroupSecurityAssignment,
)

_DIRECT_COLUMNS = (
    "account, security_id, assigned_by, assigned_date, is_active, "
    "expiry_date, notes, revoked_by, revoked_date"
)


def _direct_from_row(r: tuple) -> EmployeeSecurityAssignment:
    return EmployeeSecurityAssignment(
        account=r[0],
        security_id=r[1],
        assigned_by=r[2],
        assigned_date=r[3],
        is_active=r[4],
        expiry_date=r[5],
        notes=r[6],
        revoked_by=r[7],
        revoked_date=r[8],
    )


class PostgresAssignmentRepository:
    """Group and direct assignment repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_group_assignments(
        self, group_ids: Collection[int]
    ) -> list[GroupSecurityAssignment]:
        """Active assignments of the given groups."""
        if not group_ids:
            return []
        cur = await self._conn.execute(
            "SELECT group_id, security_id, is_active FROM group_security_assignment "
            "WHERE group_id = ANY(%s) AND is_active",
            (list(group_ids),),
        )
        rows = await cur.fetchall()
        return [
            GroupSecurityAssignment(group_id=r[0], security_id=r[1], is_active=r[2])
            for r in rows
        ]

    async def list_direct_assignments(self, account: str) -> list[EmployeeSecurityAssignment]:
        """Active direct assignments of the account; expiry is evaluated by the caller."""
        cur = await self._conn.execute(
            f"SELECT {_DIRECT_COLUMNS} FROM employee_security_assignment "
            "WHERE lower(account) = %s AND is_active",
            (account,),
        )
        rows = await cur.fetchall()
        return [_direct_from_row(r) for r in rows]

    async def get_active_direct(
        self, account: str, security_id: int
    ) -> EmployeeSecurityAssignment | None:
        """Get active direct assignment for account and security id."""
        cur = await self._conn.execute(
            f"SELECT {_DIRECT_COLUMNS} FROM employee_security_assignment "
            "WHERE lower(account) = %s AND security_id = %s AND is_active",
            (account, security_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _direct_from_row(r)

    async def create_direct(
        self, assignment: EmployeeSecurityAssignment
    ) -> EmployeeSecurityAssignment:
        """Create direct assignment; a concurrent active grant is replaced in place."""
        await self._conn.execute(
            "INSERT INTO employee_security_assignment "
            "(account, security_id, assigned_by, assigned_date, is_active, expiry_date, notes) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (account, security_id) WHERE is_active DO UPDATE SET "
            "assigned_by = EXCLUDED.assigned_by, assigned_date = EXCLUDED.assigned_date, "
            "expiry_date = EXCLUDED.expiry_date, notes = EXCLUDED.notes",
            (
                assignment.account,
                assignment.security_id,
                assignment.assigned_by,
                assignment.assigned_date,
                assignment.is_active,
                assignment.expiry_date,
                assignment.notes,
            ),
        )
        return assignment

    async def revoke_direct(
        self, account: str, security_id: int, revoked_by: str, revoked_date: datetime
    ) -> bool:
        """Deactivate the active direct assignment in one statement."""
        cur = await self._conn.execute(
            "UPDATE employee_security_assignment "
            "SET is_active = false, revoked_by = %s, revoked_date = %s "
            "WHERE lower(account) = %s AND security_id = %s AND is_active",
            (revoked_by, revoked_date, account, security_id),
        )
        return cur.rowcount > 0
