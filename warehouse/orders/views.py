import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from warehouse.core.api_client import get_api_client
from warehouse.core.errors import result_response, error_response
from warehouse.core.permissions import can, IsAdminOrBoss
from warehouse.core.utils import is_confirmed, paginate, parse_bool
from warehouse.inventory.api import fetch_materials
from warehouse.parties.api import get_customers, customer_rows
from . import api
from .domain import Order
from .lifecycle import (
    InvalidTransition, CONVERT_WARNING, DELETE_WARNING,
    order_state, convert_to_sales_payload, status_update_payload,
    can_mutate_order, allowed_actions,
)
from .serializers import (
    OrderHeaderSerializer, ItemFieldSerializer, SubmitSerializer,
    StatusUpdateSerializer, OrderFilterSerializer,
)
from .workflow import (
    OrderDraft, EditOrderDraft, OrderDraftError, InventoryLookup,
    OrderSubmission, EditOrderSubmission,
)

logger = logging.getLogger(__name__)

DRAFT_SESSION_KEY = 'order_draft'


def edit_session_key(order_id):
    return f'order_edit_{order_id}'


def _order_summary(data):
    order = Order.from_api(data)
    summary = dict(data)
    summary['state'] = order_state(order)
    summary['total_price'] = data.get('total_price', order.total_price)
    return summary


def _load_order(client, pk):
    """Fetch and parse an order; returns (order, raw, failure_result)"""
    result = api.fetch_order(client, pk)
    if not result.get('success') or not result.get('order'):
        if result.get('success'):
            result = {'success': False, 'msg': 'Order not found', 'status': 404}
        return None, None, result
    return Order.from_api(result['order']), result['order'], None


# Order list / detail views
@api_view(['GET'])
def order_list(request):
    """List orders with optional type / paid / completed / customer / number filters"""
    filters = OrderFilterSerializer(data=request.query_params)
    if not filters.is_valid():
        return Response(filters.errors, status=status.HTTP_400_BAD_REQUEST)
    params = filters.validated_data

    result = api.fetch_orders(
        get_api_client(request),
        order_type=params.get('type'),
        paid=parse_bool(params.get('paid')),
        completed=parse_bool(params.get('completed')),
        customer_name=params.get('customer_name') or None,
    )
    if not result.get('success'):
        return result_response(result)

    orders = result.get('orders') or []
    order_number = (params.get('order_number') or '').strip().lower()
    if order_number:
        orders = [o for o in orders if order_number in str(o.get('order_number', '')).lower()]

    page = paginate(
        [_order_summary(o) for o in orders],
        request.query_params.get('page'),
        request.query_params.get('page_size'),
    )
    page['success'] = True
    return Response(page)


@api_view(['GET', 'PUT', 'DELETE'])
def order_detail(request, pk):
    """Retrieve an order, update its paid/completed status, or delete it"""
    client = get_api_client(request)
    user = request.user
    order, raw, failure = _load_order(client, pk)
    if failure is not None:
        return result_response(failure)

    if request.method == 'GET':
        return Response({
            'success': True,
            'order': raw,
            'state': order_state(order),
            'total_price': order.total_price,
            'actions': allowed_actions(user, order),
        })

    if request.method == 'PUT':
        if not can_mutate_order(user, order):
            return error_response('You can only update your own orders.', status.HTTP_403_FORBIDDEN)
        serializer = StatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            payload = status_update_payload(order, **serializer.validated_data)
        except InvalidTransition as e:
            return error_response(str(e))
        return result_response(api.update_order_status(client, pk, payload))

    # DELETE
    if not can(user.role, 'order.delete'):
        return error_response('Only admin or boss can delete orders.', status.HTTP_403_FORBIDDEN)
    if not is_confirmed(request):
        return Response({'success': False, 'confirm_required': True, 'msg': DELETE_WARNING})
    result = api.delete_order(client, pk)
    if result.get('success'):
        logger.info(f'Order {order.order_number} deleted by {user}')
        result['redirect'] = '/orders/'
    return result_response(result)


@api_view(['POST'])
def order_convert(request, pk):
    """Convert a quote into a sales order (one-way)"""
    client = get_api_client(request)
    order, raw, failure = _load_order(client, pk)
    if failure is not None:
        return result_response(failure)
    if not can_mutate_order(request.user, order):
        return error_response('You can only convert your own orders.', status.HTTP_403_FORBIDDEN)
    try:
        payload = convert_to_sales_payload(order)
    except InvalidTransition as e:
        return error_response(str(e))
    if not is_confirmed(request):
        return Response({'success': False, 'confirm_required': True, 'msg': CONVERT_WARNING})

    result = api.update_order_status(client, pk, payload)
    if result.get('success'):
        logger.info(f'Order {order.order_number} converted to SALES by {request.user}')
    return result_response(result)


@api_view(['GET'])
def order_pdf(request, pk):
    result = api.download_order_pdf(get_api_client(request), pk)
    if not result.get('success'):
        return result_response(result)
    response = HttpResponse(result['content'], content_type=result['content_type'])
    response['Content-Disposition'] = f'attachment; filename="order_{pk}.pdf"'
    return response


# Draft helpers

def _load_create_draft(request):
    data = request.session.get(DRAFT_SESSION_KEY)
    return OrderDraft.from_dict(data) if data else OrderDraft()


def _load_edit_draft(request, pk, reload=False):
    """Edit draft for an order, loading it from the API the first time"""
    data = request.session.get(edit_session_key(pk))
    if data and not reload:
        return EditOrderDraft.from_dict(data), None
    order, raw, failure = _load_order(get_api_client(request), pk)
    if failure is not None:
        return None, failure
    draft = EditOrderDraft.from_order(order)
    _save_draft(request, draft)
    return draft, None


def _save_draft(request, draft):
    if isinstance(draft, EditOrderDraft):
        request.session[edit_session_key(draft.order_id)] = draft.to_dict()
    else:
        request.session[DRAFT_SESSION_KEY] = draft.to_dict()
    request.session.modified = True


def _persist_now(request):
    def persist(draft):
        _save_draft(request, draft)
        request.session.save()
    return persist


def _discard_draft(request, draft):
    if isinstance(draft, EditOrderDraft):
        request.session.pop(edit_session_key(draft.order_id), None)
    else:
        request.session.pop(DRAFT_SESSION_KEY, None)


def _form_options(client):
    customers = get_customers(client)
    materials = fetch_materials(client)
    return {
        'customers': customer_rows(customers),
        'materials': materials.get('materials', []) if materials.get('success') else [],
    }


def _draft_page(draft, extra=None):
    payload = {'success': True, 'draft': draft.as_page()}
    if extra:
        payload.update(extra)
    return payload


def _handle_draft(request, draft, submission_class, success_status=status.HTTP_200_OK):
    """Shared PATCH / POST / DELETE handling of create and edit drafts"""
    if request.method == 'PATCH':
        serializer = OrderHeaderSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            draft.set_header(**serializer.validated_data)
        except OrderDraftError as e:
            return error_response(str(e))
        _save_draft(request, draft)
        return Response(_draft_page(draft))

    if request.method == 'DELETE':
        _discard_draft(request, draft)
        return Response({'success': True})

    # POST submits
    serializer = SubmitSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    client = get_api_client(request)
    submission = submission_class(
        client, draft,
        user_id=request.user.id,
        persist=_persist_now(request),
    )
    result = submission.submit(confirm=serializer.validated_data['confirm'])
    if result.get('success'):
        _discard_draft(request, draft)
        return Response(result, status=success_status)
    if result.get('confirm_required'):
        return Response(result)
    if result.get('stage') == 'submit' or (result.get('stage') == 'inventory' and 'shortfalls' not in result):
        return result_response(result)
    return Response(result, status=status.HTTP_400_BAD_REQUEST)


def _handle_items(request, draft, index=None):
    """Add, change or remove a draft line item"""
    try:
        if index is None:
            draft.add_item()
        elif request.method == 'DELETE':
            draft.remove_item(index)
        else:
            serializer = ItemFieldSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            draft.set_item_field(
                index,
                serializer.validated_data['field'],
                serializer.validated_data['value'],
                lookup=InventoryLookup(get_api_client(request)),
            )
    except OrderDraftError as e:
        return error_response(str(e))
    _save_draft(request, draft)
    return Response(_draft_page(draft))


# Create order views
@api_view(['GET', 'PATCH', 'POST', 'DELETE'])
def order_create(request):
    """
    New order form.

    GET returns the draft with customers and materials, PATCH updates the
    header, POST submits (confirm=true to actually create), DELETE resets.
    """
    draft = _load_create_draft(request)
    if request.method == 'GET':
        _save_draft(request, draft)
        return Response(_draft_page(draft, _form_options(get_api_client(request))))
    return _handle_draft(request, draft, OrderSubmission, status.HTTP_201_CREATED)


@api_view(['POST'])
def order_create_items(request):
    return _handle_items(request, _load_create_draft(request))


@api_view(['PATCH', 'DELETE'])
def order_create_item(request, index):
    return _handle_items(request, _load_create_draft(request), index)


# Edit order views
@api_view(['GET', 'PATCH', 'POST', 'DELETE'])
@permission_classes([IsAdminOrBoss])
def order_edit(request, pk):
    """Edit form of an existing order; same verbs as the create form"""
    draft, failure = _load_edit_draft(request, pk, reload=request.method == 'GET' and parse_bool(request.query_params.get('reload')))
    if failure is not None:
        return result_response(failure)
    if request.method == 'GET':
        return Response(_draft_page(draft, _form_options(get_api_client(request))))
    return _handle_draft(request, draft, EditOrderSubmission)


@api_view(['POST'])
@permission_classes([IsAdminOrBoss])
def order_edit_items(request, pk):
    draft, failure = _load_edit_draft(request, pk)
    if failure is not None:
        return result_response(failure)
    return _handle_items(request, draft)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAdminOrBoss])
def order_edit_item(request, pk, index):
    draft, failure = _load_edit_draft(request, pk)
    if failure is not None:
        return result_response(failure)
    return _handle_items(request, draft, index)
