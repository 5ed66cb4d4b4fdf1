from rest_framework.authentication import SessionAuthentication

from .session import AuthSession


class SessionTokenAuthentication(SessionAuthentication):
    """
    Authenticate DRF requests from the login state kept in the session.

    The login rides on the session cookie, so unsafe methods go through the
    same CSRF check as DRF's SessionAuthentication.
    """

    def authenticate(self, request):
        django_request = request._request
        auth_session = getattr(django_request, 'auth_session', None)
        if auth_session is None:
            auth_session = AuthSession.from_session(django_request.session)
            django_request.auth_session = auth_session
        if not auth_session.is_authenticated:
            return None
        self.enforce_csrf(request)
        return auth_session.user, auth_session.token
