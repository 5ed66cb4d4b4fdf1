import logging

from django.middleware.csrf import get_token, rotate_token
from django.utils.http import url_has_allowed_host_and_scheme
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from . import api
from .errors import result_response
from .permissions import capabilities_for, is_admin_role
from .serializers import LoginSerializer, SignupSerializer, PreferencesSerializer
from .session import AuthSession, store_login, clear_session, get_preferences, set_preferences

logger = logging.getLogger(__name__)


def session_payload(request):
    """What the page shell needs to know about the logged-in user"""
    auth_session = request.auth_session
    # sent back as X-CSRFToken on unsafe requests
    csrf_token = get_token(request)
    if not auth_session.is_authenticated:
        return {'is_authenticated': False, 'role': auth_session.role, 'csrf_token': csrf_token}
    return {
        'csrf_token': csrf_token,
        'is_authenticated': True,
        'user': auth_session.user.data,
        'role': auth_session.role,
        'is_admin': is_admin_role(auth_session.role),
        'capabilities': capabilities_for(auth_session.role),
    }


def _login(request, username, password):
    result = api.login(username, password)
    if result.get('success'):
        token = result.get('token')
        user = result.get('user') or {}
        store_login(request.session, token, user)
        rotate_token(request)
        request.auth_session = AuthSession.from_session(request.session)
        logger.info(f'User {username} logged in as {request.auth_session.role}')
    else:
        logger.warning(f"Login failed for {username}: {result.get('msg', 'Error')}")
    return result


def _safe_next(request):
    """Post-login target; anything pointing off this site falls back to the dashboard"""
    next_url = request.query_params.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure(),
    ):
        return next_url
    return '/'


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Show login state or log in against the remote API"""
    if request.method == 'GET':
        return Response(session_payload(request))

    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    result = _login(request, serializer.validated_data['username'], serializer.validated_data['password'])
    if not result.get('success'):
        return result_response(result)
    payload = session_payload(request)
    payload['success'] = True
    payload['redirect'] = _safe_next(request)
    return Response(payload)


@api_view(['POST'])
@permission_classes([AllowAny])
def signup_view(request):
    """Register, then log straight in with the same credentials"""
    serializer = SignupSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    username = serializer.validated_data['username']
    password = serializer.validated_data['password']

    result = api.signup(username, password)
    if not result.get('success'):
        return result_response(result)

    login_result = _login(request, username, password)
    payload = session_payload(request)
    payload['success'] = True
    payload['msg'] = result.get('msg', 'Registration successful')
    if not login_result.get('success'):
        # accounts may wait for admin approval before they can log in
        payload['pending'] = True
        payload['msg'] = login_result.get('msg') or payload['msg']
    return Response(payload, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    clear_session(request.session)
    request.auth_session = AuthSession.anonymous()
    return Response({'success': True, 'redirect': '/login/'})


@api_view(['GET'])
def profile_view(request):
    """Current user with role, capabilities and UI preferences"""
    payload = session_payload(request)
    payload['preferences'] = get_preferences(request.session)
    return Response(payload)


@api_view(['GET', 'PUT'])
def preferences_view(request):
    if request.method == 'GET':
        return Response(get_preferences(request.session))
    serializer = PreferencesSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return Response(set_preferences(request.session, **serializer.validated_data))


@api_view(['GET'])
@permission_classes([AllowAny])
def forbidden_view(request):
    return Response(
        {'success': False, 'msg': 'You do not have permission to access this page.'},
        status=status.HTTP_403_FORBIDDEN,
    )
