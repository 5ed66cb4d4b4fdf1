"""
Route table and guard deciding where a request may go.

Two layers: authenticated-only routes send anonymous users to the login page,
admin-only routes send everyone outside admin/boss to the 403 page.
"""
import re
from urllib.parse import urlencode

from django.conf import settings

from .permissions import is_admin_role, can

PUBLIC = 'public'
AUTHENTICATED = 'authenticated'
ADMIN_ONLY = 'admin'

# First matching rule wins; anything unmatched is AUTHENTICATED
ROUTE_RULES = [
    (re.compile(r'^/(login|signup|logout|403)/$'), PUBLIC),
    (re.compile(r'^/static/'), PUBLIC),
    (re.compile(r'^/employees/'), ADMIN_ONLY),
    (re.compile(r'^/profile/$'), ADMIN_ONLY),
    (re.compile(r'^/orders/\d+/edit/'), ADMIN_ONLY),
]

CUSTOMER_DETAIL_RE = re.compile(r'^/customers/\d+/$')
CUSTOMER_LIST_URL = '/customers/'


def route_access(path):
    for pattern, access in ROUTE_RULES:
        if pattern.match(path):
            return access
    return AUTHENTICATED


def login_redirect_url(next_path):
    login_url = getattr(settings, 'LOGIN_URL', '/login/')
    if not next_path or next_path == login_url:
        return login_url
    return f'{login_url}?{urlencode({"next": next_path})}'


def guard_redirect(auth_session, path):
    """
    Return the URL the request must be redirected to, or None to let it through.

    Args:
        auth_session: AuthSession rebuilt from the request session
        path: request path
    """
    access = route_access(path)
    if access == PUBLIC:
        return None
    if not auth_session.is_authenticated:
        return login_redirect_url(path)
    if access == ADMIN_ONLY and not is_admin_role(auth_session.role):
        return getattr(settings, 'FORBIDDEN_URL', '/403/')
    # employees only get the customer list, never a customer detail page
    if CUSTOMER_DETAIL_RE.match(path) and not can(auth_session.role, 'customer.view_detail'):
        return CUSTOMER_LIST_URL
    return None
