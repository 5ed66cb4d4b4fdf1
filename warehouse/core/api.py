"""User endpoints of the remote API: login and registration"""
import logging

import requests

from .api_client import ApiClient

logger = logging.getLogger(__name__)


def _auth_failure(error, default_message):
    response = getattr(error, 'response', None)
    if response is not None:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            return {
                'success': data.get('success') or False,
                'msg': data.get('msg') or default_message,
                'status': response.status_code,
            }
    return {'success': False, 'msg': 'Internet error', 'status': 0}


def login(username, password, client=None):
    """POST /users; success carries token and user"""
    client = client or ApiClient()
    try:
        return client.post('/users', json={'username': username, 'password': password})
    except requests.RequestException as e:
        logger.error(f'Login failed for {username}: {e}')
        return _auth_failure(e, 'Login failed')


def signup(username, password, client=None):
    """POST /users?action=register"""
    client = client or ApiClient()
    try:
        return client.post(
            '/users',
            json={'username': username, 'password': password},
            params={'action': 'register'},
        )
    except requests.RequestException as e:
        logger.error(f'Registration failed for {username}: {e}')
        return _auth_failure(e, 'Register failed')
