"""
Role policy shared by every page.

Roles are ordered employee < boss < admin. Screens never compare role strings
themselves; they ask ``can(role, capability)`` or use the DRF permission
classes below.
"""
from rest_framework.permissions import BasePermission

EMPLOYEE = 'employee'
BOSS = 'boss'
ADMIN = 'admin'

ROLE_HIERARCHY = [EMPLOYEE, BOSS, ADMIN]

# Roles allowed on admin-only routes
ADMIN_ROLES = frozenset({BOSS, ADMIN})

# capability -> lowest role holding it
CAPABILITIES = {
    'order.create': EMPLOYEE,
    'order.update_status': EMPLOYEE,
    'order.convert': EMPLOYEE,
    'order.edit': BOSS,
    'order.delete': BOSS,
    'order.manage_any': BOSS,
    'customer.create': EMPLOYEE,
    'customer.update': BOSS,
    'customer.view_detail': BOSS,
    'customer.delete': BOSS,
    'inventory.create': EMPLOYEE,
    'inventory.update': EMPLOYEE,
    'inventory.delete': BOSS,
    'inventory.import': BOSS,
    'inventory.export': EMPLOYEE,
    'employee.manage': BOSS,
    'user.approve': ADMIN,
}


def normalize_role(role):
    return role if role in ROLE_HIERARCHY else EMPLOYEE


def has_permission(role, required_role):
    """True when role ranks at or above required_role"""
    return ROLE_HIERARCHY.index(normalize_role(role)) >= ROLE_HIERARCHY.index(required_role)


def is_admin_role(role):
    return normalize_role(role) in ADMIN_ROLES


def can(role, capability):
    if capability not in CAPABILITIES:
        raise KeyError(f'Unknown capability: {capability}')
    return has_permission(role, CAPABILITIES[capability])


def capabilities_for(role):
    """All capabilities granted to a role, used by pages to show controls"""
    return sorted(name for name in CAPABILITIES if can(role, name))


class HasSession(BasePermission):
    """Allow access only with a reconstructed login session"""
    message = 'Please log in first.'

    def has_permission(self, request, view):
        user = getattr(request, 'user', None)
        return bool(user is not None and user.is_authenticated)


class IsAdminOrBoss(HasSession):
    message = 'Only admin or boss can perform this action.'

    def has_permission(self, request, view):
        return super().has_permission(request, view) and is_admin_role(request.user.role)


def capability_required(capability):
    """Build a DRF permission class checking a single capability"""

    class HasCapability(HasSession):
        message = 'You do not have permission to perform this action.'

        def has_permission(self, request, view):
            return super().has_permission(request, view) and can(request.user.role, capability)

    HasCapability.__name__ = f'HasCapability[{capability}]'
    return HasCapability
