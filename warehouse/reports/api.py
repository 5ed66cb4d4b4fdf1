"""Statistics endpoints of the remote API"""
import logging

from warehouse.core.errors import call_api

logger = logging.getLogger(__name__)

SALES_PERIODS = ('weekly', 'monthly', 'quarterly')


def get_dashboard_stats(client):
    return call_api(
        'fetching dashboard statistics', 'Failed to fetch dashboard statistics',
        client.get, '/stats/dashboard',
    )


def get_order_stats(client):
    return call_api('fetching order statistics', 'Failed to fetch order statistics', client.get, '/stats/orders')


def get_inventory_stats(client):
    return call_api(
        'fetching inventory statistics', 'Failed to fetch inventory statistics',
        client.get, '/stats/inventory',
    )


def get_customer_stats(client):
    return call_api(
        'fetching customer statistics', 'Failed to fetch customer statistics',
        client.get, '/stats/customers',
    )


def get_employee_stats(client):
    return call_api(
        'fetching employee statistics', 'Failed to fetch employee statistics',
        client.get, '/stats/employees',
    )


STATS_BY_KIND = {
    'orders': get_order_stats,
    'inventory': get_inventory_stats,
    'customers': get_customer_stats,
    'employees': get_employee_stats,
}


def get_sales_stats(client, period='monthly', year=None, quarter=None, month=None):
    """
    Sales totals for a period.

    Args:
        period: weekly, monthly or quarterly
        year: calendar year, server default is the current year
        quarter: 1-4, narrows quarterly data
        month: 1-12, narrows monthly data

    An unknown period or out-of-range quarter/month is answered with a
    failure result without calling the API.
    """
    message = None
    if period not in SALES_PERIODS:
        message = f'Unknown sales period: {period}'
    elif quarter is not None and not 1 <= quarter <= 4:
        message = 'Quarter must be between 1 and 4'
    elif month is not None and not 1 <= month <= 12:
        message = 'Month must be between 1 and 12'
    if message:
        logger.warning(f'Sales statistics not requested: {message}')
        return {'success': False, 'msg': message, 'status': 400}
    params = {'period': period, 'year': year, 'quarter': quarter, 'month': month}
    return call_api('fetching sales statistics', 'Failed to fetch sales statistics', client.get, '/stats/sales', params)


# Material prices

MATERIAL_PRICE_TYPES = ('stainless_steel', 'hot_rolled_coil')


def get_material_prices(client, material):
    return call_api(
        f'fetching {material} prices', f'Failed to fetch {material} price data',
        client.get, f'/material-prices/{material}',
    )


def get_all_material_prices(client):
    return call_api(
        'fetching material prices', 'Failed to fetch material price data',
        client.get, '/material-prices',
    )


def get_real_time_prices(client):
    return call_api(
        'fetching real-time prices', 'Failed to fetch real-time price data',
        client.get, '/material-prices/real-time',
    )
