import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from warehouse.core.api_client import get_api_client
from warehouse.core.errors import result_response, error_response
from warehouse.core.permissions import capabilities_for
from warehouse.inventory.api import fetch_inventory, inventory_rows
from . import api
from .serializers import SalesQuerySerializer, InventoryChartQuerySerializer, MaterialPriceQuerySerializer
from .utils import (
    month_over_month_change, change_indicator, inventory_chart,
    price_series, price_series_by_material, real_time_prices,
)

logger = logging.getLogger(__name__)


# Dashboard views
@api_view(['GET'])
def dashboard(request):
    """Landing page: headline statistics and order trend"""
    result = api.get_dashboard_stats(get_api_client(request))
    if not result.get('success'):
        return result_response(result)
    stats = result.get('data') or {}
    orders = stats.get('orders') or {}
    change = month_over_month_change(orders.get('currentMonth'), orders.get('previousMonth'))
    return Response({
        'success': True,
        'user': {'username': request.user.username, 'role': request.user.role},
        'capabilities': capabilities_for(request.user.role),
        'stats': stats,
        'order_change': change,
        'order_trend': change_indicator(change),
    })


@api_view(['GET'])
def sales_chart(request):
    """Sales totals for a weekly, monthly or quarterly period"""
    serializer = SalesQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    result = api.get_sales_stats(
        get_api_client(request),
        period=data['period'],
        year=data.get('year'),
        quarter=data.get('quarter'),
        month=data.get('month'),
    )
    return result_response(result)


@api_view(['GET'])
def inventory_chart_view(request):
    """Per-material inventory totals for the dashboard charts"""
    serializer = InventoryChartQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    result = fetch_inventory(get_api_client(request), material=data.get('material'))
    if not result.get('success'):
        return result_response(result)
    return Response({
        'success': True,
        'materials': inventory_chart(inventory_rows(result), top=data['top']),
    })


@api_view(['GET'])
def statistics(request, kind):
    """Raw statistics block for orders, inventory, customers or employees"""
    fetch = api.STATS_BY_KIND.get(kind)
    if fetch is None:
        return error_response(f'Unknown statistics: {kind}', status.HTTP_404_NOT_FOUND)
    return result_response(fetch(get_api_client(request)))


# Material price views
@api_view(['GET'])
def material_price_chart(request):
    """Daily price history, for one material or for every material"""
    serializer = MaterialPriceQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    material = serializer.validated_data.get('material')
    client = get_api_client(request)

    if material:
        result = api.get_material_prices(client, material)
        if not result.get('success'):
            return result_response(result)
        return Response({'success': True, 'material': material, 'series': price_series(result.get('data'))})

    result = api.get_all_material_prices(client)
    if not result.get('success'):
        return result_response(result)
    return Response({'success': True, 'materials': price_series_by_material(result.get('data'))})


@api_view(['GET'])
def material_real_time_prices(request):
    result = api.get_real_time_prices(get_api_client(request))
    if not result.get('success'):
        return result_response(result)
    return Response({
        'success': True,
        'prices': real_time_prices(result),
        'fetch_time': result.get('fetchTime'),
    })
