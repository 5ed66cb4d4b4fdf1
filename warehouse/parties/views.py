import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from warehouse.core.api_client import get_api_client
from warehouse.core.errors import result_response, error_response
from warehouse.core.permissions import can
from warehouse.core.utils import is_confirmed, paginate
from warehouse.orders.api import fetch_orders
from .api import get_customers, get_customer, add_customer, update_customer, delete_customer, customer_rows
from .serializers import CustomerSerializer
from .utils import customer_total_debt, format_customer_orders

logger = logging.getLogger(__name__)


# Customer views
@api_view(['GET', 'POST'])
def customer_list_create(request):
    """List customers (optionally searched by name) or create a new customer"""
    client = get_api_client(request)
    if request.method == 'GET':
        result = get_customers(client)
        if not result.get('success'):
            return result_response(result)
        customers = customer_rows(result)
        search = request.query_params.get('search', '').strip().lower()
        if search:
            customers = [c for c in customers if search in str(c.get('name', '')).lower()]
        page = paginate(customers, request.query_params.get('page'), request.query_params.get('page_size'))
        page['success'] = True
        return Response(page)

    if not can(request.user.role, 'customer.create'):
        return error_response('You do not have permission to add customers.', status.HTTP_403_FORBIDDEN)
    serializer = CustomerSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    return result_response(add_customer(client, serializer.validated_data), status.HTTP_201_CREATED)


def _customer_orders(client, customer):
    """Orders of a customer: by id first, then by name if that lookup fails"""
    result = fetch_orders(client, customer_id=customer.get('id'))
    if not result.get('success') and customer.get('name'):
        logger.warning(f"Order lookup by customer id {customer.get('id')} failed, retrying by name")
        result = fetch_orders(client, customer_name=customer['name'])
    if not result.get('success'):
        return []
    return result.get('orders') or []


@api_view(['GET', 'PUT', 'DELETE'])
def customer_detail(request, pk):
    """Retrieve a customer with orders and debt, update it, or delete it"""
    client = get_api_client(request)
    user = request.user

    if request.method == 'GET':
        if not can(user.role, 'customer.view_detail'):
            return error_response('You do not have permission to view customer details.', status.HTTP_403_FORBIDDEN)
        result = get_customer(client, pk)
        if not result.get('success'):
            return result_response(result)
        customer = dict(result.get('customer') or {})
        orders = _customer_orders(client, customer)
        customer['total_debt'] = customer_total_debt(orders)
        return Response({
            'success': True,
            'customer': customer,
            'orders': format_customer_orders(orders),
        })

    if request.method == 'PUT':
        if not can(user.role, 'customer.update'):
            return error_response('You do not have permission to update customers.', status.HTTP_403_FORBIDDEN)
        serializer = CustomerSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        return result_response(update_customer(client, pk, serializer.validated_data))

    # DELETE
    if not can(user.role, 'customer.delete'):
        return error_response('Only admin or boss can delete customers.', status.HTTP_403_FORBIDDEN)
    if not is_confirmed(request):
        return Response({'success': False, 'confirm_required': True, 'msg': 'Deleting this customer cannot be undone.'})
    result = delete_customer(client, pk)
    if result.get('success'):
        logger.info(f'Customer {pk} deleted by {user}')
    return result_response(result)
