"""
Unit tests for RBAC permission system
"""

from weddingflow.core.permissions import (
    Permission,
    get_permissions_for_role,
    has_permission,
    require_permission
)


def test_get_permissions_for_role():
    """Test permission retrieval for all roles"""
    # Admin has all permissions
    admin_perms = get_permissions_for_role("admin")
    assert admin_perms == set(Permission)

    # Planner edits seating but cannot prune versions
    planner_perms = get_permissions_for_role("planner")
    assert Permission.SEATING_EDIT in planner_perms
    assert Permission.RELATIONSHIPS_EDIT in planner_perms
    assert Permission.VERSIONS_MANAGE not in planner_perms

    # Viewer is read-only
    viewer_perms = get_permissions_for_role("viewer")
    assert viewer_perms == {Permission.SEATING_VIEW}


def test_unknown_or_missing_role_has_no_permissions():
    assert get_permissions_for_role("bartender") == set()
    assert get_permissions_for_role(None) == set()


def test_role_lookup_is_case_insensitive():
    assert get_permissions_for_role("ADMIN") == get_permissions_for_role("admin")


def test_has_permission():
    """Test permission checking logic"""
    viewer_perms = get_permissions_for_role("viewer")

    assert has_permission(Permission.SEATING_VIEW, viewer_perms)
    assert not has_permission(Permission.SEATING_EDIT, viewer_perms)


def test_require_permission_decorator():
    """Test permission requirement decorator"""
    checker = require_permission(Permission.SEATING_VIEW)
    assert callable(checker)

    admin_checker = require_permission(Permission.VERSIONS_MANAGE)
    assert callable(admin_checker)
