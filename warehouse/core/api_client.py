"""
HTTP client for the remote warehouse REST API.

Every call goes through one ``requests.Session`` per client. The session token
stored at login is attached as a bearer token to each request.
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin wrapper around requests.Session bound to the API base URL"""

    def __init__(self, token=None, base_url=None, timeout=None):
        config = getattr(settings, 'WAREHOUSE_API', {})
        self.base_url = (base_url or config.get('BASE_URL', '')).rstrip('/')
        self.timeout = timeout if timeout is not None else config.get('TIMEOUT')
        self.token = token
        self.session = requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if token:
            self.session.headers.update({'Authorization': f'Bearer {token}'})

    def build_url(self, path):
        if not path.startswith('/'):
            path = f'/{path}'
        return f'{self.base_url}{path}'

    def request(self, method, path, params=None, json=None):
        """Send a request and return the decoded JSON body.

        Raises requests.HTTPError for non-2xx answers and other
        requests.RequestException subclasses for transport failures.
        """
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        response = self.session.request(
            method,
            self.build_url(path),
            params=params or None,
            json=json,
            timeout=self.timeout,
        )
        logger.debug(f'{method} {path} -> {response.status_code}')
        response.raise_for_status()
        if not response.content:
            return {'success': True}
        return response.json()

    def get(self, path, params=None):
        return self.request('GET', path, params=params)

    def post(self, path, json=None, params=None):
        return self.request('POST', path, params=params, json=json)

    def put(self, path, json=None):
        return self.request('PUT', path, json=json)

    def delete(self, path):
        return self.request('DELETE', path)

    def download(self, path, params=None):
        """Fetch a binary resource, returning (content, content_type)"""
        response = self.session.get(
            self.build_url(path),
            params=params,
            timeout=self.timeout,
        )
        response.raise_for_status()
        content_type = response.headers.get('Content-Type', 'application/octet-stream')
        return response.content, content_type


def get_api_client(request):
    """Build an API client carrying the token of the current session"""
    auth_session = getattr(request, 'auth_session', None)
    token = auth_session.token if auth_session is not None else None
    return ApiClient(token=token)
