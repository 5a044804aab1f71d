"""JSON shapes for API responses."""

from datetime import datetime

from accessgate.application.dto.permission_dto import (
    AccessSummary,
    CatalogEntry,
    EmployeePermission,
    EmployeeSecurityId,
    GroupInfo,
    PermissionCheckResult,
    SystemAccess,
)
from accessgate.application.dto.system_dto import SystemGroupInfo, SystemStats, SystemUserInfo
from accessgate.domain.entities import Employee, EmployeeSecurityAssignment, System


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def check_result(result: PermissionCheckResult) -> dict:
    return {
        "has_access": result.has_access,
        "assignment_source": str(result.assignment_source),
        "system_code": result.system_code,
        "system_name": result.system_name,
        "display_security_id": result.display_security_id,
    }


def system_access(access: SystemAccess) -> dict:
    return {
        "system_id": access.system_id,
        "system_code": access.system_code,
        "system_name": access.system_name,
        "description": access.description,
        "icon": access.icon,
        "base_url": access.base_url,
        "is_internal": access.is_internal,
        "requires_manager": access.requires_manager,
        "total_permissions": access.total_permissions,
        "screen_permissions": access.screen_permissions,
        "button_permissions": access.button_permissions,
        "controller_permissions": access.controller_permissions,
        "access_level": str(access.access_level),
    }


def employee_permission(permission: EmployeePermission) -> dict:
    return {
        "security_id": permission.security_id,
        "permission_name": permission.permission_name,
        "description": permission.description,
        "resource_type": permission.resource_type,
        "resource_path": permission.resource_path,
        "category": permission.category,
        "display_security_id": permission.display_security_id,
        "assignment_source": str(permission.assignment_source),
        "sort_order": permission.sort_order,
        "assigned_date": _iso(permission.assigned_date),
        "expiry_date": _iso(permission.expiry_date),
        "notes": permission.notes,
    }


def employee_security_id(item: EmployeeSecurityId) -> dict:
    return {
        "security_id": item.security_id,
        "security_name": item.security_name,
        "security_description": item.security_description,
        "resource_type": item.resource_type,
        "resource_path": item.resource_path,
        "system_name": item.system_name,
        "system_code": item.system_code,
        "category": item.category,
        "assignment_source": str(item.assignment_source),
        "display_security_id": item.display_security_id,
    }


def catalog_entry(entry: CatalogEntry) -> dict:
    definition = entry.definition
    return {
        "security_id": definition.security_id,
        "name": definition.name,
        "description": definition.description,
        "resource_type": definition.resource_type,
        "resource_path": definition.resource_path,
        "category": definition.category,
        "sort_order": definition.sort_order,
        "system_code": entry.system_code,
        "system_name": entry.system_name,
        "display_security_id": entry.display_security_id,
    }


def system(item: System) -> dict:
    return {
        "id": item.id,
        "code": item.code,
        "name": item.name,
        "description": item.description,
        "icon": item.icon,
        "base_url": item.base_url,
        "is_internal": item.is_internal,
        "requires_manager": item.requires_manager,
        "is_active": item.is_active,
        "created_date": _iso(item.created_date),
        "created_by": item.created_by,
        "modified_date": _iso(item.modified_date),
        "modified_by": item.modified_by,
    }


def system_stats(stats: SystemStats) -> dict:
    return {
        "total_systems": stats.total_systems,
        "active_systems": stats.active_systems,
        "internal_systems": stats.internal_systems,
        "external_systems": stats.external_systems,
        "total_security_definitions": stats.total_security_definitions,
        "total_users": stats.total_users,
        "total_groups": stats.total_groups,
    }


def system_group(info: SystemGroupInfo) -> dict:
    return {
        "group_id": info.group_id,
        "group_name": info.group_name,
        "group_description": info.group_description,
        "permission_count": info.permission_count,
        "member_count": info.member_count,
    }


def system_user(info: SystemUserInfo) -> dict:
    return {
        "account": info.account,
        "name": info.name,
        "email": info.email,
        "department": info.department,
        "permission_count": info.permission_count,
        "group_names": info.group_names,
    }


def group_info(info: GroupInfo) -> dict:
    return {
        "group_id": info.group_id,
        "group_name": info.group_name,
        "group_description": info.group_description,
        "assigned_date": _iso(info.assigned_date),
        "assigned_by": info.assigned_by,
    }


def direct_grant(assignment: EmployeeSecurityAssignment) -> dict:
    return {
        "account": assignment.account,
        "security_id": assignment.security_id,
        "assigned_by": assignment.assigned_by,
        "assigned_date": _iso(assignment.assigned_date),
        "expiry_date": _iso(assignment.expiry_date),
        "notes": assignment.notes,
    }


def employee(item: Employee | None) -> dict | None:
    if item is None:
        return None
    return {
        "account": item.account,
        "name": item.name,
        "email": item.email,
        "department": item.department,
        "position": item.position,
        "job_title": item.job_title,
    }


def access_summary(summary: AccessSummary) -> dict:
    return {
        "account": summary.account,
        "employee": employee(summary.employee),
        "is_manager": summary.is_manager,
        "groups": summary.groups,
        "available_systems": [system_access(s) for s in summary.available_systems],
        "security_ids": summary.security_ids,
        "system_permissions": [
            {
                "system_id": group.system_id,
                "system_code": group.system_code,
                "system_name": group.system_name,
                "permissions": [employee_permission(p) for p in group.permissions],
            }
            for group in summary.system_permissions
        ],
    }
