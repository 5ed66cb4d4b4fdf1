from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from warehouse.core.utils import to_decimal
from warehouse.inventory.stock import is_low_stock

PERCENT = Decimal('0.01')


def month_over_month_change(current, previous):
    """
    Percentage change between this month's and last month's count.

    A month with no previous activity reports 100% growth when there is
    activity now and 0% otherwise.
    """
    current = to_decimal(current) or Decimal('0')
    previous = to_decimal(previous) or Decimal('0')
    if previous == 0:
        return Decimal('100.00') if current > 0 else Decimal('0.00')
    change = (current - previous) / previous * 100
    return change.quantize(PERCENT, rounding=ROUND_HALF_UP)


def change_indicator(change):
    """Colour and label of a dashboard card trend"""
    sign = '+' if change > 0 else ''
    return {
        'amount': f'{sign}{change}%',
        'color': 'success' if change >= 0 else 'error',
        'label': 'than last month',
    }


def inventory_chart(rows, top=5):
    """
    Aggregate an inventory listing per material.

    Each material gets its total quantity, low / in-stock counts and its
    largest specifications (by quantity) for the chart legend.
    """
    materials = {}
    for row in rows:
        material = row.get('material') or 'Unknown'
        quantity = to_decimal(row.get('quantity')) or Decimal('0')
        entry = materials.setdefault(material, {
            'material': material,
            'total_quantity': Decimal('0'),
            'low_stock': 0,
            'in_stock': 0,
            'items': [],
        })
        entry['total_quantity'] += quantity
        if is_low_stock(quantity):
            entry['low_stock'] += 1
        else:
            entry['in_stock'] += 1
        entry['items'].append({'specification': row.get('specification'), 'quantity': quantity})

    chart = []
    for entry in materials.values():
        items = sorted(entry.pop('items'), key=lambda item: item['quantity'], reverse=True)
        total = entry['total_quantity']
        for item in items[:top]:
            share = item['quantity'] / total * 100 if total else Decimal('0')
            item['share'] = share.quantize(PERCENT, rounding=ROUND_HALF_UP)
        entry['top_items'] = items[:top]
        chart.append(entry)
    return sorted(chart, key=lambda entry: entry['material'])


def _price_date(value):
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def price_series(rows):
    """
    Daily price rows as a date-sorted chart series.

    Dates are shown as month/day. Rows without a usable date are skipped.
    """
    dated = []
    for row in rows or []:
        day = _price_date(row.get('date'))
        if day is not None:
            dated.append((day, to_decimal(row.get('price_per_ton'))))
    dated.sort(key=lambda entry: entry[0])
    return {
        'dates': [f'{day.month}/{day.day}' for day, _ in dated],
        'prices': [price for _, price in dated],
    }


def price_series_by_material(rows):
    grouped = {}
    for row in rows or []:
        grouped.setdefault(row.get('material') or 'unknown', []).append(row)
    return {material: price_series(material_rows) for material, material_rows in sorted(grouped.items())}


def real_time_prices(result):
    """Latest price per material from a real-time price result"""
    data = result.get('data')
    # the price list sits one level deeper on some server versions
    if isinstance(data, dict):
        data = data.get('data')
    if not isinstance(data, list):
        return {}
    return {
        row.get('material'): to_decimal(row.get('price'))
        for row in data
        if row.get('material')
    }
