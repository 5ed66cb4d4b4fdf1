"""Employee, attendance and user-approval endpoints of the remote API"""
from warehouse.core.errors import call_api


# Employees

def get_employees(client):
    return call_api('fetching employees', 'Failed to fetch employees', client.get, '/employees', None, employees=[])


def add_employee(client, employee_data):
    return call_api('adding employee', 'Failed to add employee', client.post, '/employees', employee_data)


def delete_employee(client, employee_id):
    return call_api('deleting employee', 'Failed to delete employee', client.delete, f'/employees/{employee_id}')


# Leave records

def get_leaves(client):
    return call_api('fetching leave records', 'Failed to fetch leave records', client.get, '/employee-leaves', None, leaves=[])


def add_leave(client, leave_data):
    return call_api('adding leave record', 'Failed to add leave record', client.post, '/employee-leaves', leave_data)


def delete_leave(client, leave_id):
    return call_api(
        'deleting leave record', 'Failed to delete leave record',
        client.delete, f'/employee-leaves/{leave_id}',
    )


# Overtime records

def get_overtimes(client):
    return call_api(
        'fetching overtime records', 'Failed to fetch overtime records',
        client.get, '/employee-overtimes', None, overtimes=[],
    )


def add_overtime(client, overtime_data):
    return call_api(
        'adding overtime record', 'Failed to add overtime record',
        client.post, '/employee-overtimes', overtime_data,
    )


def delete_overtime(client, overtime_id):
    return call_api(
        'deleting overtime record', 'Failed to delete overtime record',
        client.delete, f'/employee-overtimes/{overtime_id}',
    )


def download_overtime_pdf(client, employee_id, start_date=None, end_date=None):
    """Overtime report of one employee, optionally limited to a date range"""
    def _download():
        params = {'startDate': start_date, 'endDate': end_date}
        content, content_type = client.download(f'/employee-overtimes/employee/{employee_id}/pdf', params)
        return {'success': True, 'content': content, 'content_type': content_type}

    return call_api('downloading overtime report', 'Failed to download overtime report', _download)


# Pending users

def get_pending_users(client):
    return call_api(
        'fetching pending users', 'Failed to fetch pending users',
        client.get, '/admin/pending-users', None, users=[],
    )


def approve_user(client, user_id, approved):
    """Activate (approved) or deactivate a registered user"""
    payload = {'status': 'active' if approved else 'inactive'}
    return call_api(
        'approving user', 'Failed to update user status',
        client.put, f'/admin/approve-user/{user_id}', payload,
    )
