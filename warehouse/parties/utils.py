"""Figures derived from a customer's orders"""
from decimal import Decimal

from warehouse.core.utils import to_decimal, parse_bool
from warehouse.orders.domain import Order

CENT = Decimal('0.01')


def order_total(order):
    """total_price of an order payload, falling back to its item subtotals"""
    total = to_decimal(order.get('total_price'))
    if total is not None:
        return total
    return Order.from_api(order).total_price


def payment_status(order):
    if str(order.get('order_type', '')).upper() != 'SALES':
        return 'quote'
    return 'paid' if parse_bool(order.get('is_paid')) else 'unpaid'


def customer_total_debt(orders):
    """Sum of unpaid SALES order totals"""
    debt = Decimal('0')
    for order in orders:
        if payment_status(order) == 'unpaid':
            debt += order_total(order)
    return debt.quantize(CENT)


def format_customer_orders(orders):
    return [
        {
            'id': order.get('id'),
            'order_number': order.get('order_number'),
            'created_at': order.get('created_at'),
            'type': 'quote' if payment_status(order) == 'quote' else 'sale',
            'total': order_total(order),
            'status': payment_status(order),
            'is_completed': bool(parse_bool(order.get('is_completed'))),
        }
        for order in orders
    ]
