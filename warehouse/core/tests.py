"""
Test suite for Core module
Tests: API client, error normalization, roles, session, navigation guard, auth pages
"""
import json
from decimal import Decimal
from unittest import mock

import requests
from django.test import SimpleTestCase, override_settings
from rest_framework import status

from warehouse.core import navigation
from warehouse.core.api_client import ApiClient
from warehouse.core.errors import handle_error, call_api, result_response, PASSWORD_STRENGTH_MESSAGE
from warehouse.core.permissions import has_permission, can, is_admin_role, capabilities_for
from warehouse.core.session import AuthSession, TOKEN_KEY, USER_KEY
from warehouse.core.test_utils import TestDataFactory, AuthenticatedAPIClient, fake_response, http_error
from warehouse.core.utils import parse_bool, to_decimal, paginate, json_ready


class ApiClientTests(SimpleTestCase):
    """Test the requests-based API client"""

    def test_build_url_joins_base_and_path(self):
        client = ApiClient(base_url='http://api.test/api/')
        self.assertEqual(client.build_url('/orders'), 'http://api.test/api/orders')
        self.assertEqual(client.build_url('orders'), 'http://api.test/api/orders')

    def test_bearer_token_header(self):
        client = ApiClient(token='abc', base_url='http://api.test')
        self.assertEqual(client.session.headers['Authorization'], 'Bearer abc')
        self.assertNotIn('Authorization', ApiClient(base_url='http://api.test').session.headers)

    def test_request_drops_empty_params(self):
        client = ApiClient(base_url='http://api.test')
        with mock.patch.object(client.session, 'request', return_value=fake_response(200, {'success': True})) as sent:
            result = client.get('/inventory', {'material': '201', 'spec': None})
        self.assertEqual(result, {'success': True})
        self.assertEqual(sent.call_args.kwargs['params'], {'material': '201'})

    def test_empty_body_counts_as_success(self):
        client = ApiClient(base_url='http://api.test')
        with mock.patch.object(client.session, 'request', return_value=fake_response(200)):
            self.assertEqual(client.delete('/orders/1'), {'success': True})

    def test_error_status_raises(self):
        client = ApiClient(base_url='http://api.test')
        with mock.patch.object(client.session, 'request', return_value=fake_response(400, {'success': False, 'msg': 'Bad'})):
            with self.assertRaises(requests.HTTPError):
                client.post('/orders', {})


class ErrorHandlingTests(SimpleTestCase):
    """Test normalization of API failures"""

    @override_settings(WAREHOUSE_ENV='development')
    def test_server_message_shown_in_development(self):
        result = handle_error(http_error(400, {'success': False, 'msg': 'Customer not found'}), 'Failed to fetch customer')
        self.assertFalse(result['success'])
        self.assertEqual(result['msg'], 'Customer not found')
        self.assertEqual(result['status'], 400)
        self.assertIn('debug', result)

    @override_settings(WAREHOUSE_ENV='production')
    def test_server_message_hidden_in_production(self):
        result = handle_error(http_error(500, {'success': False, 'msg': 'SQL error near SELECT'}), 'Failed to fetch orders')
        self.assertEqual(result['msg'], 'Failed to fetch orders')
        self.assertNotIn('debug', result)

    @override_settings(WAREHOUSE_ENV='production')
    def test_password_message_rewritten(self):
        result = handle_error(http_error(400, {'msg': 'Password is invalid'}), 'Register failed')
        self.assertEqual(result['msg'], PASSWORD_STRENGTH_MESSAGE)

    @override_settings(WAREHOUSE_ENV='production')
    def test_import_row_errors_always_shown(self):
        result = handle_error(http_error(400, {'msg': 'Row 3: quantity missing'}), 'Failed to import inventory')
        self.assertEqual(result['msg'], 'Row 3: quantity missing')

    @override_settings(WAREHOUSE_ENV='production')
    def test_network_failure_in_production(self):
        result = handle_error(requests.ConnectionError('refused'), 'Failed to fetch orders')
        self.assertEqual(result, {'success': False, 'msg': 'Network error', 'status': 0})

    @override_settings(WAREHOUSE_ENV='development')
    def test_network_failure_in_development(self):
        result = handle_error(requests.ConnectionError('refused'), 'Failed to fetch orders')
        self.assertEqual(result['msg'], 'Internet error: refused')

    @override_settings(WAREHOUSE_ENV='production')
    def test_call_api_merges_default_data(self):
        def fail():
            raise requests.Timeout('slow')

        result = call_api('fetching orders', 'Failed to fetch orders', fail, orders=[])
        self.assertFalse(result['success'])
        self.assertEqual(result['orders'], [])

    def test_result_response_status_codes(self):
        self.assertEqual(result_response({'success': True}).status_code, status.HTTP_200_OK)
        self.assertEqual(result_response({'success': False, 'status': 0}).status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(result_response({'success': False, 'status': 404}).status_code, status.HTTP_400_BAD_REQUEST)


class PermissionTests(SimpleTestCase):
    """Test the role hierarchy"""

    def test_hierarchy(self):
        self.assertTrue(has_permission('admin', 'boss'))
        self.assertTrue(has_permission('boss', 'boss'))
        self.assertFalse(has_permission('employee', 'boss'))

    def test_unknown_role_is_employee(self):
        self.assertFalse(is_admin_role('superuser'))
        self.assertTrue(has_permission('superuser', 'employee'))

    def test_capabilities(self):
        self.assertTrue(can('employee', 'order.create'))
        self.assertFalse(can('employee', 'order.delete'))
        self.assertTrue(can('boss', 'order.delete'))
        self.assertFalse(can('boss', 'user.approve'))
        self.assertTrue(can('admin', 'user.approve'))
        self.assertNotIn('employee.manage', capabilities_for('employee'))

    def test_unknown_capability(self):
        with self.assertRaises(KeyError):
            can('admin', 'order.fly')


class SessionTests(SimpleTestCase):
    """Test rebuilding the login state from the session"""

    def test_valid_session(self):
        session = {TOKEN_KEY: 't', USER_KEY: json.dumps(TestDataFactory.user(user_id=7, role='boss'))}
        auth = AuthSession.from_session(session)
        self.assertTrue(auth.is_authenticated)
        self.assertEqual(auth.role, 'boss')
        self.assertEqual(auth.user.id, 7)

    def test_malformed_user_is_cleared(self):
        session = {TOKEN_KEY: 't', USER_KEY: '{not json'}
        auth = AuthSession.from_session(session)
        self.assertFalse(auth.is_authenticated)
        self.assertEqual(session, {})

    def test_token_without_user_is_cleared(self):
        session = {TOKEN_KEY: 't'}
        self.assertFalse(AuthSession.from_session(session).is_authenticated)
        self.assertNotIn(TOKEN_KEY, session)

    def test_user_without_id_is_cleared(self):
        session = {TOKEN_KEY: 't', USER_KEY: json.dumps({'username': 'x'})}
        self.assertFalse(AuthSession.from_session(session).is_authenticated)
        self.assertEqual(session, {})


class NavigationGuardTests(SimpleTestCase):
    """Test route access decisions"""

    def auth(self, role):
        session = {TOKEN_KEY: 't', USER_KEY: json.dumps(TestDataFactory.user(role=role))}
        return AuthSession.from_session(session)

    def test_public_routes(self):
        self.assertIsNone(navigation.guard_redirect(AuthSession.anonymous(), '/login/'))
        self.assertIsNone(navigation.guard_redirect(AuthSession.anonymous(), '/signup/'))

    def test_anonymous_goes_to_login(self):
        target = navigation.guard_redirect(AuthSession.anonymous(), '/orders/')
        self.assertEqual(target, '/login/?next=%2Forders%2F')

    def test_employee_blocked_from_admin_routes(self):
        self.assertEqual(navigation.guard_redirect(self.auth('employee'), '/employees/'), '/403/')
        self.assertEqual(navigation.guard_redirect(self.auth('employee'), '/orders/5/edit/'), '/403/')

    def test_profile_is_admin_only(self):
        self.assertEqual(navigation.guard_redirect(self.auth('employee'), '/profile/'), '/403/')
        self.assertIsNone(navigation.guard_redirect(self.auth('boss'), '/profile/'))
        self.assertIsNone(navigation.guard_redirect(self.auth('employee'), '/profile/preferences/'))

    def test_boss_and_admin_allowed_on_admin_routes(self):
        self.assertIsNone(navigation.guard_redirect(self.auth('boss'), '/employees/'))
        self.assertIsNone(navigation.guard_redirect(self.auth('admin'), '/orders/5/edit/'))

    def test_employee_sent_back_from_customer_detail(self):
        self.assertEqual(navigation.guard_redirect(self.auth('employee'), '/customers/3/'), '/customers/')
        self.assertIsNone(navigation.guard_redirect(self.auth('employee'), '/customers/'))
        self.assertIsNone(navigation.guard_redirect(self.auth('boss'), '/customers/3/'))


class UtilsTests(SimpleTestCase):
    """Test shared helpers"""

    def test_parse_bool(self):
        self.assertIsNone(parse_bool(''))
        self.assertTrue(parse_bool('true'))
        self.assertTrue(parse_bool(1))
        self.assertFalse(parse_bool('false'))

    def test_to_decimal(self):
        self.assertEqual(to_decimal('2.50'), Decimal('2.50'))
        self.assertIsNone(to_decimal(''))
        self.assertIsNone(to_decimal('abc'))
        self.assertIsNone(to_decimal('NaN'))

    def test_paginate(self):
        page = paginate(list(range(25)), page=3, page_size=10)
        self.assertEqual(page['results'], [20, 21, 22, 23, 24])
        self.assertEqual(page['total_pages'], 3)
        self.assertEqual(page['count'], 25)

    def test_paginate_rejects_unknown_page_size(self):
        self.assertEqual(paginate(list(range(5)), page_size=7)['page_size'], 10)

    def test_json_ready(self):
        self.assertEqual(json_ready({'quantity': Decimal('1.50'), 'name': 'x'}), {'quantity': '1.50', 'name': 'x'})


class AuthViewTests(SimpleTestCase):
    """Test login, signup, logout and the guard on real requests"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_anonymous_request_redirected_to_login(self):
        response = self.client.get('/orders/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/login/?next=%2Forders%2F')

    def test_employee_request_to_admin_route_redirected(self):
        self.client.authenticate_user(TestDataFactory.user(role='employee'))
        response = self.client.get('/employees/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/403/')

    @mock.patch('warehouse.core.views.api.login')
    def test_login_stores_session(self, login):
        login.return_value = {'success': True, 'token': 'abc', 'user': TestDataFactory.user(user_id=3, username='amy', role='boss')}
        response = self.client.post('/login/?next=/orders/', {'username': 'amy', 'password': 'secret'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['redirect'], '/orders/')
        self.assertEqual(response.data['role'], 'boss')

        profile = self.client.get('/profile/')
        self.assertEqual(profile.status_code, status.HTTP_200_OK)
        self.assertEqual(profile.data['user']['username'], 'amy')
        self.assertTrue(profile.data['is_admin'])

    @mock.patch('warehouse.core.views.api.login')
    def test_login_ignores_offsite_next(self, login):
        login.return_value = {'success': True, 'token': 'abc', 'user': TestDataFactory.user(user_id=3)}
        for target in ('https://evil.example/', '//evil.example/orders/', 'javascript:alert(1)'):
            response = self.client.post(f'/login/?next={target}', {'username': 'amy', 'password': 'secret'})
            self.assertEqual(response.data['redirect'], '/')

    @mock.patch('warehouse.core.views.api.login')
    def test_login_failure(self, login):
        login.return_value = {'success': False, 'msg': 'Invalid username or password', 'status': 401}
        response = self.client.post('/login/', {'username': 'amy', 'password': 'bad'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['msg'], 'Invalid username or password')

    @mock.patch('warehouse.core.views.api.signup')
    def test_signup_password_mismatch_makes_no_call(self, signup):
        response = self.client.post('/signup/', {
            'username': 'amy', 'password': 'Secret1!', 'confirm_password': 'Secret2!',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('confirm_password', response.data)
        signup.assert_not_called()

    @mock.patch('warehouse.core.views.api.login')
    @mock.patch('warehouse.core.views.api.signup')
    def test_signup_pending_approval(self, signup, login):
        signup.return_value = {'success': True, 'msg': 'Registered'}
        login.return_value = {'success': False, 'msg': 'Account pending approval', 'status': 403}
        response = self.client.post('/signup/', {
            'username': 'amy', 'password': 'Secret1!', 'confirm_password': 'Secret1!',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['pending'])
        self.assertFalse(response.data['is_authenticated'])

    def test_logout_clears_session(self):
        self.client.authenticate_user(TestDataFactory.user())
        response = self.client.post('/logout/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get('/profile/').status_code, status.HTTP_302_FOUND)

    def test_employee_profile_redirected(self):
        self.client.authenticate_user(TestDataFactory.user(role='employee'))
        response = self.client.get('/profile/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/403/')

    def test_preferences(self):
        self.client.authenticate_user(TestDataFactory.user())
        response = self.client.put('/profile/preferences/', {'theme': 'dark'})
        self.assertEqual(response.data, {'theme': 'dark', 'language': 'en'})
        self.assertEqual(self.client.get('/profile/preferences/').data['theme'], 'dark')
