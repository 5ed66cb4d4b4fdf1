"""
Test suite for Parties module
Tests: Customer Debt, Customer Views
"""
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase
from rest_framework import status

from warehouse.core.test_utils import TestDataFactory, AuthenticatedAPIClient, FakeApiClient
from warehouse.parties.utils import customer_total_debt, format_customer_orders, payment_status


class CustomerDebtTests(SimpleTestCase):
    """Test figures derived from customer orders"""

    def test_only_unpaid_sales_count(self):
        orders = [
            TestDataFactory.order(order_id=1, order_type='SALES', is_paid=False),
            TestDataFactory.order(order_id=2, order_type='SALES', is_paid=True),
            TestDataFactory.order(order_id=3, order_type='QUOTE'),
            dict(TestDataFactory.order(order_id=4, order_type='SALES'), total_price='12.345'),
        ]
        # 50.00 from the item subtotal plus the reported 12.345
        self.assertEqual(customer_total_debt(orders), Decimal('62.34'))

    def test_payment_status(self):
        self.assertEqual(payment_status(TestDataFactory.order(order_type='QUOTE', is_paid=True)), 'quote')
        self.assertEqual(payment_status(TestDataFactory.order(order_type='SALES', is_paid=1)), 'paid')

    def test_format_customer_orders(self):
        rows = format_customer_orders([TestDataFactory.order(order_id=8, order_type='SALES', is_completed=True)])
        self.assertEqual(rows[0]['type'], 'sale')
        self.assertEqual(rows[0]['status'], 'unpaid')
        self.assertEqual(rows[0]['total'], Decimal('50.00'))
        self.assertTrue(rows[0]['is_completed'])


class CustomerViewTests(SimpleTestCase):
    """Test customer pages against a fake remote API"""

    def setUp(self):
        self.api = FakeApiClient()
        patcher = mock.patch('warehouse.parties.views.get_api_client', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.user(role='employee'))

    def login_as(self, role):
        self.client.authenticate_user(TestDataFactory.user(role=role))

    def test_list_with_search(self):
        self.api.add('GET', '/customers', {'success': True, 'customers': [
            TestDataFactory.customer(customer_id=1, name='Acme Steel'),
            TestDataFactory.customer(customer_id=2, name='Blue Metals'),
        ]})
        response = self.client.get('/customers/', {'search': 'acme'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['id'] for c in response.data['results']], [1])

    def test_employee_creates_customer(self):
        self.api.add('POST', '/customers', {'success': True, 'msg': 'Customer added'})
        response = self.client.post('/customers/', {'name': 'Acme Steel', 'phone': '123'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.api.calls_to('POST', '/customers')[0][3], {'name': 'Acme Steel', 'phone': '123'})

    def test_create_requires_name(self):
        response = self.client.post('/customers/', {'phone': '123'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.api.calls, [])

    def test_employee_redirected_from_detail(self):
        response = self.client.get('/customers/1/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/customers/')

    def test_detail_with_debt(self):
        self.login_as('boss')
        self.api.add('GET', '/customers/1', {'success': True, 'customer': TestDataFactory.customer(customer_id=1, name='Acme')})
        self.api.add('GET', '/orders', {'success': True, 'orders': [
            TestDataFactory.order(order_id=1, order_type='SALES'),
            TestDataFactory.order(order_id=2, order_type='QUOTE'),
        ]})
        response = self.client.get('/customers/1/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['customer']['total_debt'], Decimal('50.00'))
        self.assertEqual(len(response.data['orders']), 2)
        self.assertEqual(self.api.calls_to('GET', '/orders')[0][2], {'customer_id': 1})

    def test_detail_falls_back_to_customer_name(self):
        self.login_as('boss')
        self.api.add('GET', '/customers/1', {'success': True, 'customer': TestDataFactory.customer(customer_id=1, name='Acme')})

        def orders(params=None, json=None):
            if 'customer_id' in params:
                return {'success': False, 'msg': 'Unsupported filter', 'status': 400}
            return {'success': True, 'orders': [TestDataFactory.order(order_type='SALES')]}

        self.api.add('GET', '/orders', orders)
        response = self.client.get('/customers/1/')
        self.assertEqual(response.data['customer']['total_debt'], Decimal('50.00'))
        self.assertEqual(self.api.calls_to('GET', '/orders')[1][2], {'customerName': 'Acme'})

    def test_boss_updates_customer(self):
        self.login_as('boss')
        self.api.add('PUT', '/customers/1', {'success': True})
        response = self.client.put('/customers/1/', {'phone': '555'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.api.calls_to('PUT', '/customers/1')[0][3], {'phone': '555'})

    def test_delete_requires_confirmation(self):
        self.login_as('admin')
        self.api.add('DELETE', '/customers/1', {'success': True})
        response = self.client.delete('/customers/1/')
        self.assertTrue(response.data['confirm_required'])
        self.assertEqual(self.api.calls, [])
        response = self.client.delete('/customers/1/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(self.api.calls_to('DELETE', '/customers/1')), 1)
