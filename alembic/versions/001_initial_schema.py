"""Initial schema - groups, systems, security catalog, assignments, employees.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "app_group",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_app_group_name", "app_group", ["name"], unique=True)

    op.create_table(
        "employee",
        sa.Column("account", sa.String(100), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("position", sa.String(255), nullable=True),
        sa.Column("job_title", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.execute("CREATE UNIQUE INDEX ix_employee_account_lower ON employee (lower(account))")

    op.create_table(
        "employee_group",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("account", sa.String(100), nullable=False),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("app_group.id"), nullable=False),
        sa.Column("assigned_by", sa.String(100), nullable=False),
        sa.Column("assigned_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("removed_by", sa.String(100), nullable=True),
        sa.Column("removed_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_employee_group_active",
        "employee_group",
        ["account", "group_id"],
        unique=True,
        postgresql_where=sa.text("is_active"),
    )

    op.create_table(
        "system",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column("base_url", sa.String(500), nullable=True),
        sa.Column("is_internal", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("requires_manager", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(100), nullable=True),
        sa.Column("modified_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("modified_by", sa.String(100), nullable=True),
    )
    op.execute("CREATE UNIQUE INDEX ix_system_code_lower ON system (lower(code))")

    op.create_table(
        "security_definition",
        sa.Column("security_id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("system_id", sa.Integer(), sa.ForeignKey("system.id"), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("resource_type", sa.String(50), nullable=False),
        sa.Column("resource_path", sa.String(500), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_security_definition_system", "security_definition", ["system_id"])

    op.create_table(
        "group_security_assignment",
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("app_group.id"), primary_key=True),
        sa.Column(
            "security_id",
            sa.Integer(),
            sa.ForeignKey("security_definition.security_id"),
            primary_key=True,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "employee_security_assignment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("account", sa.String(100), nullable=False),
        sa.Column(
            "security_id",
            sa.Integer(),
            sa.ForeignKey("security_definition.security_id"),
            nullable=False,
        ),
        sa.Column("assigned_by", sa.String(100), nullable=False),
        sa.Column("assigned_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.String(1000), nullable=True),
        sa.Column("revoked_by", sa.String(100), nullable=True),
        sa.Column("revoked_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_employee_security_assignment_active",
        "employee_security_assignment",
        ["account", "security_id"],
        unique=True,
        postgresql_where=sa.text("is_active"),
    )

    op.execute("""
        INSERT INTO app_group (name, description) VALUES
        ('Regular Users', 'Default group for every employee'),
        ('Administrators', 'Portal administration')
    """)
    op.execute("""
        INSERT INTO system (code, name, description, is_internal, requires_manager, created_date, created_by)
        VALUES ('PORTAL', 'Employee Portal', 'Portal administration screens', true, false, now(), 'SYSTEM')
    """)
    op.execute("""
        INSERT INTO security_definition (security_id, system_id, name, description, resource_type, category, sort_order)
        SELECT 1, id, 'Portal Administration', 'Manage systems, groups and grants', 'Controller', 'Administration', 0
        FROM system WHERE code = 'PORTAL'
    """)
    op.execute("""
        INSERT INTO group_security_assignment (group_id, security_id)
        SELECT id, 1 FROM app_group WHERE name = 'Administrators'
    """)


def downgrade() -> None:
    op.drop_table("employee_security_assignment")
    op.drop_table("group_security_assignment")
    op.drop_table("security_definition")
    op.drop_table("system")
    op.drop_table("employee_group")
    op.drop_table("employee")
    op.drop_table("app_group")
