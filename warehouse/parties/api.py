"""Customer endpoints of the remote API"""
from warehouse.core.errors import call_api


def get_customers(client):
    return call_api('fetching customers', 'Failed to fetch customers', client.get, '/customers', None, customers=[])


def get_customer(client, customer_id):
    return call_api(
        'fetching customer details', 'Failed to fetch customer details',
        client.get, f'/customers/{customer_id}',
    )


def add_customer(client, customer_data):
    return call_api('adding customer', 'Failed to add customer', client.post, '/customers', customer_data)


def update_customer(client, customer_id, updated_data):
    return call_api(
        'updating customer', 'Failed to update customer',
        client.put, f'/customers/{customer_id}', updated_data,
    )


def delete_customer(client, customer_id):
    return call_api('deleting customer', 'Failed to delete customer', client.delete, f'/customers/{customer_id}')


def customer_rows(result):
    if not result.get('success'):
        return []
    return result.get('customers') or result.get('data') or []
