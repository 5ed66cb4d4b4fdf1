from django.conf import settings

from warehouse.core.utils import to_decimal

LOW_STOCK = {'label': 'Low Stock', 'severity': 'error'}
IN_STOCK = {'label': 'In Stock', 'severity': 'success'}


def low_stock_threshold():
    return getattr(settings, 'LOW_STOCK_THRESHOLD', 20)


def is_low_stock(quantity):
    """Quantities strictly below the threshold are low; unreadable ones count as 0"""
    value = to_decimal(quantity)
    if value is None:
        value = 0
    return value < low_stock_threshold()


def get_stock_status(quantity):
    return dict(LOW_STOCK) if is_low_stock(quantity) else dict(IN_STOCK)


def annotate_stock_status(rows):
    """Copy of inventory rows with a stock_status entry on each"""
    return [dict(row, stock_status=get_stock_status(row.get('quantity'))) for row in rows]
