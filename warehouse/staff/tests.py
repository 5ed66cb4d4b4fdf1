"""
Test suite for Staff module
Tests: Employees, Leave and Overtime Records, Pending User Approval
"""
from unittest import mock

from django.test import SimpleTestCase
from rest_framework import status

from warehouse.core.test_utils import TestDataFactory, AuthenticatedAPIClient, FakeApiClient


class StaffViewTests(SimpleTestCase):
    """Test admin staff pages against a fake remote API"""

    def setUp(self):
        self.api = FakeApiClient()
        patcher = mock.patch('warehouse.staff.views.get_api_client', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.user(role='boss'))

    def login_as(self, role):
        self.client.authenticate_user(TestDataFactory.user(role=role))

    def test_employee_role_redirected(self):
        self.login_as('employee')
        for path in ('/employees/', '/employees/leaves/', '/employees/pending/'):
            response = self.client.get(path)
            self.assertEqual(response.status_code, status.HTTP_302_FOUND)
            self.assertEqual(response['Location'], '/403/')
        self.assertEqual(self.api.calls, [])

    def test_list_employees(self):
        self.api.add('GET', '/employees', {'success': True, 'employees': [{'id': 1, 'name': 'Li Lei'}]})
        response = self.client.get('/employees/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['employees'][0]['name'], 'Li Lei')

    def test_add_employee(self):
        self.api.add('POST', '/employees', {'success': True, 'employee': {'id': 2}})
        response = self.client.post('/employees/', {'name': 'Han Meimei', 'hire_date': '2024-03-01'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.api.calls_to('POST', '/employees')[0][3], {'name': 'Han Meimei', 'hire_date': '2024-03-01'})

    def test_delete_employee_requires_confirmation(self):
        self.api.add('DELETE', '/employees/2', {'success': True})
        response = self.client.delete('/employees/2/')
        self.assertTrue(response.data['confirm_required'])
        self.assertEqual(self.api.calls, [])
        response = self.client.delete('/employees/2/?confirm=true')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_leave_dates_validated(self):
        response = self.client.post('/employees/leaves/', {
            'employee_id': 1, 'start_date': '2024-05-10', 'end_date': '2024-05-01',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.api.calls, [])

    def test_add_leave(self):
        self.api.add('POST', '/employee-leaves', {'success': True})
        response = self.client.post('/employees/leaves/', {
            'employee_id': 1, 'start_date': '2024-05-01', 'end_date': '2024-05-03', 'reason': 'Family',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        payload = self.api.calls_to('POST', '/employee-leaves')[0][3]
        self.assertEqual(payload['start_date'], '2024-05-01')

    def test_add_overtime(self):
        self.api.add('POST', '/employee-overtimes', {'success': True})
        response = self.client.post('/employees/overtimes/', {
            'employee_id': 1, 'overtime_date': '2024-05-01', 'hours': '2.5',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.api.calls_to('POST', '/employee-overtimes')[0][3]['hours'], '2.50')

    def test_delete_overtime(self):
        self.api.add('DELETE', '/employee-overtimes/4', {'success': True, 'msg': 'Overtime record deleted.'})
        response = self.client.delete('/employees/overtimes/4/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_overtime_pdf(self):
        self.api.add('DOWNLOAD', '/employee-overtimes/employee/3/pdf', (b'%PDF-1.4', 'application/pdf'))
        response = self.client.get('/employees/3/overtime-pdf/', {'start_date': '2024-05-01'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        params = self.api.calls_to('DOWNLOAD', '/employee-overtimes/employee/3/pdf')[0][2]
        self.assertEqual(params, {'startDate': '2024-05-01', 'endDate': None})

    def test_pending_users(self):
        self.api.add('GET', '/admin/pending-users', {'success': True, 'users': [{'id': 7, 'username': 'new'}]})
        response = self.client.get('/employees/pending/')
        self.assertEqual(response.data['users'][0]['id'], 7)

    def test_boss_cannot_approve(self):
        response = self.client.post('/employees/pending/7/approve/', {'approved': True})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.api.calls, [])

    def test_admin_approves_and_rejects(self):
        self.login_as('admin')
        self.api.add('PUT', '/admin/approve-user/7', {'success': True})
        self.client.post('/employees/pending/7/approve/', {'approved': True})
        self.client.post('/employees/pending/7/approve/', {'approved': False})
        bodies = [call[3] for call in self.api.calls_to('PUT', '/admin/approve-user/7')]
        self.assertEqual(bodies, [{'status': 'active'}, {'status': 'inactive'}])
