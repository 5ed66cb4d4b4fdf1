"""
Test utilities and factories for creating test data
"""
import copy
import json
import random
import string

import requests
from rest_framework.test import APIClient

from warehouse.core.session import store_login


class TestDataFactory:
    """Factory class for building remote API payloads"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def user(user_id=1, username=None, role='employee', status='active'):
        """User blob as returned by the login endpoint"""
        return {
            'userId': user_id,
            'username': username or f'user_{TestDataFactory.random_string(6)}',
            'userRole': role,
            'status': status,
        }

    @staticmethod
    def inventory_item(item_id=1, material='201', specification='1.0*1219*C', quantity=100, density=None):
        """Create a test inventory row"""
        return {
            'id': item_id,
            'material': material,
            'specification': specification,
            'quantity': str(quantity),
            'density': density,
        }

    @staticmethod
    def customer(customer_id=1, name=None, phone='13800000000', address='Test Address'):
        """Create a test customer"""
        return {
            'id': customer_id,
            'name': name or f'Customer_{TestDataFactory.random_string(6)}',
            'phone': phone,
            'address': address,
            'remark': '',
        }

    @staticmethod
    def order_item(item_id=1, material='201', specification='1.0*1219*C', quantity=5, weight=0, unit_price='10.00', unit='piece'):
        """Create a test order line"""
        return {
            'id': item_id,
            'material': material,
            'specification': specification,
            'quantity': str(quantity),
            'unit': unit,
            'weight': str(weight),
            'unit_price': unit_price,
            'remark': '',
        }

    @staticmethod
    def order(order_id=1, order_type='QUOTE', is_paid=False, is_completed=False, user_id=1, customer=None, items=None):
        """Create a test order as returned by GET /orders/{id}"""
        customer = customer or TestDataFactory.customer()
        return {
            'id': order_id,
            'order_number': f'ORD{order_id:06d}',
            'order_type': order_type,
            'customer_id': customer['id'],
            'user_id': user_id,
            'is_paid': is_paid,
            'is_completed': is_completed,
            'remark': '',
            'created_at': '2024-05-01T10:00:00Z',
            'Customer': customer,
            'OrderItems': items if items is not None else [TestDataFactory.order_item()],
        }


def fake_response(status_code=200, body=None, content_type='application/json'):
    """Build a real requests.Response carrying a JSON body"""
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        response._content = json.dumps(body).encode('utf-8')
    else:
        response._content = b''
    response.headers['Content-Type'] = content_type
    return response


def http_error(status_code, body=None):
    """HTTPError as raised by raise_for_status() for a server answer"""
    return requests.HTTPError(f'{status_code} Error', response=fake_response(status_code, body))


class FakeApiClient:
    """
    Stand-in for ApiClient answering from a route table.

    Routes map (method, path) to a response body, an exception to raise or a
    callable receiving params and json. Every call is recorded in ``calls``.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def add(self, method, path, response):
        self.routes[(method, path)] = response
        return self

    def calls_to(self, method, path):
        return [call for call in self.calls if call[0] == method and call[1] == path]

    def _respond(self, method, path, params=None, json=None):
        self.calls.append((method, path, params, json))
        if (method, path) not in self.routes:
            raise AssertionError(f'Unexpected API call: {method} {path}')
        response = self.routes[(method, path)]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params=params, json=json)
        return copy.deepcopy(response)

    def get(self, path, params=None):
        return self._respond('GET', path, params=params)

    def post(self, path, json=None, params=None):
        return self._respond('POST', path, params=params, json=json)

    def put(self, path, json=None):
        return self._respond('PUT', path, json=json)

    def delete(self, path):
        return self._respond('DELETE', path)

    def download(self, path, params=None):
        return self._respond('DOWNLOAD', path, params=params)


class AuthenticatedAPIClient(APIClient):
    """APIClient with session login helper"""

    def authenticate_user(self, user, token='test-token'):
        """Store a login session for the given user blob"""
        session = self.session
        store_login(session, token, user)
        session.save()
        return self

    def logout(self):
        """Remove the stored login"""
        session = self.session
        session.flush()
