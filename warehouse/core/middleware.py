import logging

from django.shortcuts import redirect

from .navigation import guard_redirect
from .session import AuthSession

logger = logging.getLogger(__name__)


class NavigationGuardMiddleware:
    """Rebuild the login session and apply the route guard before any view"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.auth_session = AuthSession.from_session(request.session)
        target = guard_redirect(request.auth_session, request.path)
        if target is not None:
            logger.info(f'Redirecting {request.path} to {target} (role={request.auth_session.role})')
            return redirect(target)
        return self.get_response(request)
