"""
Order status transitions.

    QUOTE --convert--> SALES(unpaid, pending)
    SALES: is_paid and is_completed toggle independently

Conversion is one-way and resets both flags. Deletion is allowed from any
state for users holding the order.delete capability.
"""
from warehouse.core.permissions import can
from .domain import OrderType


class InvalidTransition(Exception):
    """Requested change is not allowed from the order's current state"""


CONVERT_WARNING = (
    'Converting this quote to a sales order cannot be undone. '
    'Inventory will be deducted and the amount will be added to the customer debt.'
)
DELETE_WARNING = 'Deleting this order cannot be undone.'


def order_state(order):
    if order.order_type == OrderType.QUOTE:
        return 'QUOTE'
    paid = 'paid' if order.is_paid else 'unpaid'
    completed = 'completed' if order.is_completed else 'pending'
    return f'SALES({paid}, {completed})'


def convert_to_sales_payload(order):
    if order.order_type != OrderType.QUOTE:
        raise InvalidTransition('Only quote orders can be converted to sales orders')
    return {'order_type': OrderType.SALES.value, 'is_paid': 0, 'is_completed': 0}


def status_update_payload(order, is_paid=None, is_completed=None, remark=None):
    """PUT body for a paid/completed/remark change; flags are sent as 1/0"""
    if order.order_type != OrderType.SALES:
        raise InvalidTransition('Payment and completion status only apply to sales orders')
    if is_paid is None and is_completed is None and remark is None:
        raise InvalidTransition('Nothing to update')
    paid = order.is_paid if is_paid is None else is_paid
    completed = order.is_completed if is_completed is None else is_completed
    return {
        'is_paid': 1 if paid else 0,
        'is_completed': 1 if completed else 0,
        'remark': order.remark if remark is None else remark,
    }


def can_mutate_order(user, order):
    """Creators manage their own orders; admin and boss manage any order"""
    if user is None:
        return False
    if can(user.role, 'order.manage_any'):
        return True
    return user.id is not None and order.user_id is not None and str(user.id) == str(order.user_id)


def allowed_actions(user, order):
    """Controls a page may show for this order"""
    if user is None:
        return []
    actions = []
    if can_mutate_order(user, order):
        if order.order_type == OrderType.QUOTE:
            actions.append('convert')
        else:
            actions.append('update_status')
    if can(user.role, 'order.edit'):
        actions.append('edit')
    if can(user.role, 'order.delete'):
        actions.append('delete')
    actions.append('pdf')
    return actions
