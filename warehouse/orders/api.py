"""Order endpoints of the remote API"""
from warehouse.core.errors import call_api


def fetch_orders(client, order_type=None, paid=None, completed=None, customer_name=None, customer_id=None):
    """GET /orders with optional filters"""
    params = {}
    if order_type:
        params['order_type'] = order_type
    if paid is not None:
        params['is_paid'] = 'true' if paid else 'false'
    if completed is not None:
        params['is_completed'] = 'true' if completed else 'false'
    if customer_name:
        params['customerName'] = customer_name
    if customer_id:
        params['customer_id'] = customer_id
    return call_api('fetching orders', 'Failed to fetch orders', client.get, '/orders', params, orders=[])


def fetch_order(client, order_id):
    return call_api('fetching order details', 'Failed to fetch order details', client.get, f'/orders/{order_id}')


def create_order(client, order_data):
    return call_api('creating order', 'Failed to create order', client.post, '/orders', order_data)


def update_order_status(client, order_id, status_data):
    """PUT /orders/{id}: paid/completed flags, remark, or QUOTE -> SALES conversion"""
    return call_api(
        'updating order status', 'Failed to update order status',
        client.put, f'/orders/{order_id}', status_data,
    )


def update_order(client, order_id, order_data):
    """PUT /orders/{id}/edit: full edit of customer and items"""
    return call_api('updating order', 'Failed to update order', client.put, f'/orders/{order_id}/edit', order_data)


def delete_order(client, order_id):
    return call_api('deleting order', 'Failed to delete order', client.delete, f'/orders/{order_id}')


def download_order_pdf(client, order_id):
    """GET /orders/{id}/pdf; success carries content and content_type"""
    def _download():
        content, content_type = client.download(f'/orders/{order_id}/pdf')
        return {'success': True, 'content': content, 'content_type': content_type}

    return call_api('downloading order pdf', 'Failed to export order PDF', _download)
