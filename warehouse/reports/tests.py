"""
Test suite for Reports module
Tests: Month-over-month Change, Inventory Chart, Dashboard, Sales Chart
"""
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase
from rest_framework import status

from warehouse.core.test_utils import TestDataFactory, AuthenticatedAPIClient, FakeApiClient
from warehouse.reports.api import get_sales_stats
from warehouse.reports.utils import (
    month_over_month_change, change_indicator, inventory_chart,
    price_series, price_series_by_material, real_time_prices,
)


class ReportUtilsTests(SimpleTestCase):
    """Test figures computed for the dashboard"""

    def test_month_over_month_change(self):
        self.assertEqual(month_over_month_change(15, 10), Decimal('50.00'))
        self.assertEqual(month_over_month_change(5, 10), Decimal('-50.00'))
        self.assertEqual(month_over_month_change(1, 3), Decimal('-66.67'))

    def test_no_previous_month(self):
        self.assertEqual(month_over_month_change(4, 0), Decimal('100.00'))
        self.assertEqual(month_over_month_change(0, 0), Decimal('0.00'))
        self.assertEqual(month_over_month_change(None, None), Decimal('0.00'))

    def test_change_indicator(self):
        self.assertEqual(change_indicator(Decimal('50.00'))['amount'], '+50.00%')
        self.assertEqual(change_indicator(Decimal('-5.00'))['color'], 'error')

    def test_inventory_chart(self):
        rows = [
            TestDataFactory.inventory_item(material='201', specification='2mm', quantity=30),
            TestDataFactory.inventory_item(material='201', specification='3mm', quantity=10),
            TestDataFactory.inventory_item(material='304', specification='1mm', quantity=5),
        ]
        chart = inventory_chart(rows)
        self.assertEqual([entry['material'] for entry in chart], ['201', '304'])
        steel = chart[0]
        self.assertEqual(steel['total_quantity'], Decimal('40'))
        self.assertEqual(steel['low_stock'], 1)
        self.assertEqual(steel['in_stock'], 1)
        self.assertEqual(steel['top_items'][0]['specification'], '2mm')
        self.assertEqual(steel['top_items'][0]['share'], Decimal('75.00'))

    def test_sales_stats_validation(self):
        client = FakeApiClient()
        self.assertEqual(get_sales_stats(client, period='daily'), {
            'success': False, 'msg': 'Unknown sales period: daily', 'status': 400,
        })
        self.assertFalse(get_sales_stats(client, period='quarterly', quarter=5)['success'])
        self.assertEqual(get_sales_stats(client, period='monthly', month=13)['msg'], 'Month must be between 1 and 12')
        self.assertEqual(client.calls, [])

    def test_price_series_sorted_by_date(self):
        series = price_series([
            {'date': '2024-03-02', 'price_per_ton': '14250.00'},
            {'date': '2024-02-28T00:00:00.000Z', 'price_per_ton': '14100.50'},
            {'date': None, 'price_per_ton': '99'},
        ])
        self.assertEqual(series['dates'], ['2/28', '3/2'])
        self.assertEqual(series['prices'], [Decimal('14100.50'), Decimal('14250.00')])
        self.assertEqual(price_series(None), {'dates': [], 'prices': []})

    def test_price_series_by_material(self):
        chart = price_series_by_material([
            {'material': 'stainless_steel', 'date': '2024-03-01', 'price_per_ton': '14000'},
            {'material': 'hot_rolled_coil', 'date': '2024-03-01', 'price_per_ton': '3800'},
        ])
        self.assertEqual(list(chart), ['hot_rolled_coil', 'stainless_steel'])
        self.assertEqual(chart['hot_rolled_coil']['prices'], [Decimal('3800')])

    def test_real_time_prices_both_shapes(self):
        rows = [{'material': 'stainless_steel', 'price': 14300}, {'material': 'hot_rolled_coil', 'price': None}]
        expected = {'stainless_steel': Decimal('14300'), 'hot_rolled_coil': None}
        self.assertEqual(real_time_prices({'success': True, 'data': rows}), expected)
        self.assertEqual(real_time_prices({'success': True, 'data': {'data': rows}}), expected)
        self.assertEqual(real_time_prices({'success': True}), {})


class ReportViewTests(SimpleTestCase):
    """Test dashboard pages against a fake remote API"""

    def setUp(self):
        self.api = FakeApiClient()
        patcher = mock.patch('warehouse.reports.views.get_api_client', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.user(username='emma', role='employee'))

    def test_dashboard(self):
        self.api.add('GET', '/stats/dashboard', {'success': True, 'data': {
            'orders': {'total': 40, 'previousMonth': 8, 'currentMonth': 10},
            'inventory': {'total': 900, 'newItems': 3},
        }})
        response = self.client.get('/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['order_change'], Decimal('25.00'))
        self.assertEqual(response.data['user']['username'], 'emma')
        self.assertNotIn('order.delete', response.data['capabilities'])

    def test_dashboard_requires_login(self):
        self.client.logout()
        response = self.client.get('/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/login/?next=%2F')

    def test_sales_chart(self):
        self.api.add('GET', '/stats/sales', {'success': True, 'data': {'labels': ['Q1'], 'sales': [100]}})
        response = self.client.get('/reports/sales/', {'period': 'quarterly', 'year': 2024, 'quarter': 1})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        params = self.api.calls_to('GET', '/stats/sales')[0][2]
        self.assertEqual(params, {'period': 'quarterly', 'year': 2024, 'quarter': 1, 'month': None})

    def test_sales_chart_rejects_bad_month(self):
        response = self.client.get('/reports/sales/', {'period': 'monthly', 'month': 13})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.api.calls, [])

    def test_inventory_chart(self):
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(material='201', quantity=25),
        ]})
        response = self.client.get('/reports/inventory/', {'material': '201'})
        self.assertEqual(response.data['materials'][0]['in_stock'], 1)

    def test_statistics_by_kind(self):
        self.api.add('GET', '/stats/customers', {'success': True, 'data': {'total': 12, 'newThisMonth': 2}})
        response = self.client.get('/reports/stats/customers/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['total'], 12)

    def test_statistics_unknown_kind(self):
        response = self.client.get('/reports/stats/suppliers/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.api.calls, [])

    def test_statistics_upstream_down(self):
        self.api.add('GET', '/stats/orders', {'success': False, 'msg': 'Failed to fetch order statistics', 'status': 0})
        response = self.client.get('/reports/stats/orders/')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)

    def test_material_price_history(self):
        self.api.add('GET', '/material-prices/stainless_steel', {'success': True, 'data': [
            {'material': 'stainless_steel', 'date': '2024-03-02', 'price_per_ton': '14250'},
            {'material': 'stainless_steel', 'date': '2024-03-01', 'price_per_ton': '14100'},
        ]})
        response = self.client.get('/reports/material-prices/', {'material': 'stainless_steel'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['series']['dates'], ['3/1', '3/2'])

    def test_all_material_prices(self):
        self.api.add('GET', '/material-prices', {'success': True, 'data': [
            {'material': 'hot_rolled_coil', 'date': '2024-03-01', 'price_per_ton': '3800'},
        ]})
        response = self.client.get('/reports/material-prices/')
        self.assertEqual(response.data['materials']['hot_rolled_coil']['prices'], [Decimal('3800')])

    def test_unknown_material_rejected(self):
        response = self.client.get('/reports/material-prices/', {'material': 'copper'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.api.calls, [])

    def test_real_time_prices(self):
        self.api.add('GET', '/material-prices/real-time', {
            'success': True,
            'data': [{'material': 'stainless_steel', 'price': '14300'}],
            'fetchTime': '2024-03-02T08:00:00.000Z',
        })
        response = self.client.get('/reports/material-prices/real-time/')
        self.assertEqual(response.data['prices'], {'stainless_steel': Decimal('14300')})
        self.assertEqual(response.data['fetch_time'], '2024-03-02T08:00:00.000Z')

    def test_real_time_prices_unreachable(self):
        self.api.add('GET', '/material-prices/real-time', {'success': False, 'msg': 'Network error', 'status': 0})
        response = self.client.get('/reports/material-prices/real-time/')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
