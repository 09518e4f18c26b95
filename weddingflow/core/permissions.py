"""
RBAC (Role-Based Access Control) permission system
"""

from enum import Enum
from typing import Set
from fastapi import Depends, HTTPException, status

from weddingflow.core.dependencies import get_user_role


class Permission(str, Enum):
    """Permission definitions"""
    # Floor plans, tables and assignments
    SEATING_VIEW = "seating:view"
    SEATING_EDIT = "seating:edit"

    # Saved versions
    VERSIONS_MANAGE = "versions:manage"

    # Conflict / preference catalog
    RELATIONSHIPS_EDIT = "relationships:edit"


# Role permission mapping
ROLE_PERMISSIONS = {
    "admin": {
        Permission.SEATING_VIEW,
        Permission.SEATING_EDIT,
        Permission.VERSIONS_MANAGE,
        Permission.RELATIONSHIPS_EDIT,
    },
    "planner": {
        # Planners arrange seating but do not prune version history
        Permission.SEATING_VIEW,
        Permission.SEATING_EDIT,
        Permission.RELATIONSHIPS_EDIT,
    },
    "viewer": {
        Permission.SEATING_VIEW,
    },
}


def get_permissions_for_role(role: str) -> Set[Permission]:
    """Get permissions for a given role"""
    if not role:
        return set()
    return ROLE_PERMISSIONS.get(role.lower(), set())


def has_permission(required_permission: Permission, user_permissions: Set[Permission]) -> bool:
    """Check if user has required permission"""
    return required_permission in user_permissions


def require_permission(required_permission: Permission):
    """Dependency factory to check permissions"""
    async def check_permission(role: str = Depends(get_user_role)) -> bool:
        if not has_permission(required_permission, get_permissions_for_role(role)):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission required: {required_permission.value}",
            )
        return True
    return check_permission
