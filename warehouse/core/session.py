"""
Login session kept in the Django session.

The remote API issues a token and a user blob at login; both are persisted
under TOKEN_KEY / USER_KEY and rebuilt into an AuthSession on every request.
"""
import json
import logging

from .permissions import normalize_role, EMPLOYEE

logger = logging.getLogger(__name__)

TOKEN_KEY = 'token'
USER_KEY = 'user'
THEME_KEY = 'theme'
LANGUAGE_KEY = 'language'


class SessionUser:
    """User as seen by views and DRF permissions"""

    def __init__(self, data):
        self.data = data
        self.id = data.get('userId')
        self.username = data.get('username', '')
        self.role = normalize_role(data.get('userRole') or EMPLOYEE)
        self.status = data.get('status', 'active')

    @property
    def is_authenticated(self):
        return True

    def __str__(self):
        return self.username or str(self.id)


class AuthSession:
    """Current token, user and role; unauthenticated when token is None"""

    def __init__(self, token=None, user=None):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self):
        return self.token is not None and self.user is not None

    @property
    def role(self):
        return self.user.role if self.user is not None else EMPLOYEE

    @classmethod
    def anonymous(cls):
        return cls()

    @classmethod
    def from_session(cls, session):
        """
        Rebuild the login state from the persisted token and user JSON.

        Anything malformed (missing half, unparsable JSON, user without
        userId) is cleared from the session and treated as logged out.
        """
        stored_token = session.get(TOKEN_KEY)
        stored_user = session.get(USER_KEY)
        if not stored_token and not stored_user:
            return cls.anonymous()
        try:
            if not stored_token or not stored_user:
                raise ValueError('incomplete session')
            parsed_user = json.loads(stored_user)
            if not isinstance(parsed_user, dict) or not parsed_user.get('userId'):
                raise ValueError('user has no userId')
        except (TypeError, ValueError) as e:
            logger.warning(f'Failed to read the stored session: {e}')
            clear_session(session)
            return cls.anonymous()
        return cls(token=stored_token, user=SessionUser(parsed_user))


def store_login(session, token, user):
    session[TOKEN_KEY] = token
    session[USER_KEY] = json.dumps(user)


def clear_session(session):
    for key in (TOKEN_KEY, USER_KEY):
        session.pop(key, None)


def get_preferences(session):
    return {
        'theme': session.get(THEME_KEY, 'light'),
        'language': session.get(LANGUAGE_KEY, 'en'),
    }


def set_preferences(session, theme=None, language=None):
    if theme is not None:
        session[THEME_KEY] = theme
    if language is not None:
        session[LANGUAGE_KEY] = language
    return get_preferences(session)
