import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response

from warehouse.core.api_client import get_api_client
from warehouse.core.errors import result_response, error_response
from warehouse.core.permissions import can, capability_required
from warehouse.core.utils import is_confirmed, json_ready, paginate, parse_bool
from . import api
from .importer import parse_inventory_workbook, SpreadsheetImportError
from .serializers import (
    InventoryFilterSerializer, InventoryItemSerializer, InventoryUpdateSerializer, InventoryImportSerializer,
)
from .stock import annotate_stock_status

logger = logging.getLogger(__name__)

EXPORT_FILENAME = 'inventory_export.xlsx'


def _inventory_page(client, query_params):
    """Fetch, annotate and paginate the inventory listing"""
    filters = InventoryFilterSerializer(data=query_params)
    filters.is_valid(raise_exception=True)
    data = filters.validated_data
    result = api.fetch_inventory(
        client,
        material=data.get('material'),
        specification=data.get('specification'),
        low_stock=bool(parse_bool(data.get('low_stock'))),
    )
    if not result.get('success'):
        return result_response(result)
    rows = annotate_stock_status(api.inventory_rows(result))
    page = paginate(rows, query_params.get('page'), query_params.get('page_size'))
    page['success'] = True
    return Response(page)


# Inventory views
@api_view(['GET', 'POST'])
def inventory_list_create(request):
    """List inventory with stock status or add a new inventory item"""
    client = get_api_client(request)
    if request.method == 'GET':
        return _inventory_page(client, request.query_params)

    if not can(request.user.role, 'inventory.create'):
        return error_response('You do not have permission to add inventory.', status.HTTP_403_FORBIDDEN)
    serializer = InventoryItemSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = json_ready(serializer.validated_data)
    result = api.add_inventory_item(
        client, data['material'], data['specification'], data['quantity'], data.get('density'),
    )
    return result_response(result, status.HTTP_201_CREATED)


@api_view(['PUT', 'DELETE'])
def inventory_detail(request, pk):
    """Update an inventory item (then refetch the listing) or delete it"""
    client = get_api_client(request)
    user = request.user

    if request.method == 'PUT':
        if not can(user.role, 'inventory.update'):
            return error_response('You do not have permission to update inventory.', status.HTTP_403_FORBIDDEN)
        serializer = InventoryUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = json_ready(serializer.validated_data)
        result = api.update_inventory_item(client, pk, data['quantity'], data.get('density'))
        if not result.get('success'):
            return result_response(result)
        # The page only ever shows what the server holds after the update
        return _inventory_page(client, request.query_params)

    if not can(user.role, 'inventory.delete'):
        return error_response('Only admin or boss can delete inventory items.', status.HTTP_403_FORBIDDEN)
    if not is_confirmed(request):
        return Response({
            'success': False,
            'confirm_required': True,
            'msg': 'Are you sure you want to delete this inventory item?',
        })
    result = api.delete_inventory_item(client, pk)
    if result.get('success'):
        logger.info(f'Inventory item {pk} deleted by {user}')
    return result_response(result)


@api_view(['GET'])
def material_list(request):
    """Distinct materials for the inventory filters and order form"""
    result = api.fetch_materials(get_api_client(request))
    return result_response(result)


@api_view(['GET'])
def specification_list(request):
    """Specifications available for a material"""
    material = request.query_params.get('material', '').strip()
    if not material:
        return error_response('Please select a material')
    result = api.fetch_inventory(get_api_client(request), material=material)
    if not result.get('success'):
        return result_response(result)
    return Response({
        'success': True,
        'material': material,
        'specifications': api.specification_options(api.inventory_rows(result)),
    })


# Import / export views
@api_view(['POST'])
@permission_classes([capability_required('inventory.import')])
@parser_classes([MultiPartParser, FormParser])
def inventory_import(request):
    """Parse an uploaded spreadsheet and send its rows as one batch"""
    serializer = InventoryImportSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    try:
        rows = parse_inventory_workbook(serializer.validated_data['file'])
    except SpreadsheetImportError as e:
        logger.warning(f'Inventory import rejected: {e}')
        return error_response(str(e))
    if not rows:
        return error_response('No valid inventory rows found in the spreadsheet')
    result = api.import_inventory(get_api_client(request), rows)
    if result.get('success'):
        result.setdefault('imported', len(rows))
    return result_response(result)


@api_view(['GET'])
@permission_classes([capability_required('inventory.export')])
def inventory_export(request):
    """Stream the server-side export as an .xlsx attachment"""
    result = api.export_inventory(get_api_client(request))
    if not result.get('success'):
        return result_response(result)
    response = HttpResponse(result['content'], content_type=result['content_type'])
    response['Content-Disposition'] = f'attachment; filename="{EXPORT_FILENAME}"'
    return response
