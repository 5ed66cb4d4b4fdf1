"""
Test suite for Inventory module
Tests: Stock Status, Spreadsheet Import, Inventory Views
"""
from io import BytesIO
from unittest import mock

import openpyxl
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, override_settings
from rest_framework import status

from warehouse.core.test_utils import TestDataFactory, AuthenticatedAPIClient, FakeApiClient
from warehouse.inventory.importer import parse_inventory_workbook, SpreadsheetImportError
from warehouse.inventory.stock import get_stock_status, annotate_stock_status


def workbook_bytes(rows):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class StockStatusTests(SimpleTestCase):
    """Test the low stock boundary"""

    def test_boundary_at_twenty(self):
        self.assertEqual(get_stock_status(19), {'label': 'Low Stock', 'severity': 'error'})
        self.assertEqual(get_stock_status(20), {'label': 'In Stock', 'severity': 'success'})

    def test_string_and_missing_quantities(self):
        self.assertEqual(get_stock_status('19.99')['label'], 'Low Stock')
        self.assertEqual(get_stock_status('120')['label'], 'In Stock')
        self.assertEqual(get_stock_status(None)['label'], 'Low Stock')

    @override_settings(LOW_STOCK_THRESHOLD=5)
    def test_threshold_from_settings(self):
        self.assertEqual(get_stock_status(10)['label'], 'In Stock')

    def test_annotate_rows(self):
        rows = annotate_stock_status([TestDataFactory.inventory_item(quantity=3)])
        self.assertEqual(rows[0]['stock_status']['label'], 'Low Stock')


class SpreadsheetImportTests(SimpleTestCase):
    """Test parsing uploaded workbooks"""

    def test_header_and_incomplete_rows_skipped(self):
        content = workbook_bytes([
            ('Material', 'Specification', 'Quantity', 'Density'),
            ('201', '2mm', 10, 7.93),
            ('304', None, 5, None),
            ('316', '3mm', None, None),
            ('  ', '4mm', 2, None),
            ('201', '1.0*1219*C', 3),
        ])
        rows = parse_inventory_workbook(BytesIO(content))
        self.assertEqual(rows, [
            {'material': '201', 'specification': '2mm', 'quantity': 10, 'density': 7.93},
            {'material': '201', 'specification': '1.0*1219*C', 'quantity': 3, 'density': None},
        ])

    def test_not_a_workbook(self):
        with self.assertRaises(SpreadsheetImportError):
            parse_inventory_workbook(BytesIO(b'material,specification\n201,2mm\n'))


class InventoryViewTests(SimpleTestCase):
    """Test inventory pages against a fake remote API"""

    def setUp(self):
        self.api = FakeApiClient()
        patcher = mock.patch('warehouse.inventory.views.get_api_client', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.user(role='employee'))

    def login_as(self, role):
        self.client.authenticate_user(TestDataFactory.user(role=role))

    def test_list_with_stock_status(self):
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(item_id=1, quantity=19),
            TestDataFactory.inventory_item(item_id=2, quantity=20),
        ]})
        response = self.client.get('/inventory/', {'low_stock': 'true', 'material': '201'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        labels = [row['stock_status']['label'] for row in response.data['results']]
        self.assertEqual(labels, ['Low Stock', 'In Stock'])
        params = self.api.calls_to('GET', '/inventory')[0][2]
        self.assertEqual(params['lowStock'], 'true')
        self.assertEqual(params['material'], '201')

    def test_list_pagination(self):
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(item_id=i) for i in range(12)
        ]})
        response = self.client.get('/inventory/', {'page': 2, 'page_size': 5})
        self.assertEqual(response.data['page'], 2)
        self.assertEqual([row['id'] for row in response.data['results']], [5, 6, 7, 8, 9])

    def test_add_item(self):
        self.api.add('POST', '/inventory', {'success': True, 'msg': 'Added'})
        response = self.client.post('/inventory/', {'material': '201', 'specification': '2mm', 'quantity': '8'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        payload = self.api.calls_to('POST', '/inventory')[0][3]
        self.assertEqual(payload['quantity'], '8.00')
        self.assertIsNone(payload['density'])

    def test_update_refetches_listing(self):
        self.api.add('PUT', '/inventory/5', {'success': True})
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(item_id=5, quantity=12),
        ]})
        response = self.client.put('/inventory/5/', {'quantity': '12'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['results'][0]['quantity'], '12')
        self.assertEqual(len(self.api.calls_to('GET', '/inventory')), 1)

    def test_failed_update_does_not_refetch(self):
        self.api.add('PUT', '/inventory/5', {'success': False, 'msg': 'Item not found', 'status': 404})
        response = self.client.put('/inventory/5/', {'quantity': '12'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.api.calls_to('GET', '/inventory'), [])

    def test_employee_cannot_delete(self):
        response = self.client.delete('/inventory/5/?confirm=true')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.api.calls, [])

    def test_delete_requires_confirmation(self):
        self.login_as('boss')
        self.api.add('DELETE', '/inventory/5', {'success': True})
        response = self.client.delete('/inventory/5/')
        self.assertTrue(response.data['confirm_required'])
        self.assertEqual(self.api.calls, [])
        response = self.client.delete('/inventory/5/?confirm=true')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_specifications(self):
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(item_id=1, specification='2mm'),
            TestDataFactory.inventory_item(item_id=2, specification='3mm'),
            TestDataFactory.inventory_item(item_id=3, specification='2mm'),
        ]})
        response = self.client.get('/inventory/specifications/', {'material': '201'})
        self.assertEqual(response.data['specifications'], ['2mm', '3mm'])

    def test_import_requires_boss(self):
        upload = SimpleUploadedFile('stock.xlsx', workbook_bytes([('m', 's', 'q', 'd')]))
        response = self.client.post('/inventory/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_import_posts_parsed_rows(self):
        self.login_as('boss')
        self.api.add('POST', '/inventory/import', {'success': True, 'msg': 'Imported'})
        content = workbook_bytes([('m', 's', 'q', 'd'), ('201', '2mm', 10, None)])
        upload = SimpleUploadedFile('stock.xlsx', content)
        response = self.client.post('/inventory/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['imported'], 1)
        payload = self.api.calls_to('POST', '/inventory/import')[0][3]
        self.assertEqual(payload, {'inventory': [{'material': '201', 'specification': '2mm', 'quantity': 10, 'density': None}]})

    def test_import_rejects_other_files(self):
        self.login_as('boss')
        upload = SimpleUploadedFile('stock.csv', b'201,2mm,10')
        response = self.client.post('/inventory/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.api.calls, [])

    def test_export_attachment(self):
        xlsx = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        self.api.add('DOWNLOAD', '/inventory/export', (b'PK\x03\x04', xlsx))
        response = self.client.get('/inventory/export/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Disposition'], 'attachment; filename="inventory_export.xlsx"')
