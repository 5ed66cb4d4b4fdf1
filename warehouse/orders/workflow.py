"""
Order creation and edit workflow.

An OrderDraft is the in-progress order form: header fields plus a list of
line items. It lives in the Django session between requests, so every value
is kept as a plain string and converted to Decimal only when computing.

Submitting a draft runs, in order: field validation, the inventory
sufficiency check for SALES orders (against a freshly fetched snapshot), an
explicit confirmation step, and finally a single POST/PUT to the API. The
sufficiency check is advisory; the server enforces stock on its side.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, asdict
from decimal import Decimal
from typing import Optional

from warehouse.core.utils import to_decimal
from warehouse.inventory.api import fetch_inventory, inventory_rows, specification_options
from . import api
from .domain import Order, OrderType, InventoryItem, Shortfall, compute_subtotal
from .matching import available_quantity

logger = logging.getLogger(__name__)

ITEM_FIELDS = ('material', 'specification', 'quantity', 'unit', 'weight', 'unit_price', 'remark')
PRICING_FIELDS = ('quantity', 'weight', 'unit_price')
UNITS = ('piece', 'kg', 'm')

SUBMIT_IN_PROGRESS_MESSAGE = 'Order submission already in progress'
INSUFFICIENT_INVENTORY_MESSAGE = 'Insufficient inventory'

# customer_id not sent, as opposed to sent as null
UNSET = object()


class OrderDraftError(Exception):
    """Invalid change to an order draft"""


def _text(value):
    if value is None:
        return ''
    if isinstance(value, Decimal):
        return format(value, 'f')
    return str(value)


@dataclass
class DraftItem:
    material: str = ''
    specification: str = ''
    quantity: str = ''
    unit: str = 'piece'
    weight: str = ''
    unit_price: str = ''
    subtotal: str = ''
    remark: str = ''
    id: Optional[int] = None
    # stock shown next to the line, refreshed on material/specification change
    available: Optional[str] = None
    specification_options: list = field(default_factory=list)

    def recalculate(self):
        subtotal = compute_subtotal(self.quantity, self.weight, self.unit_price)
        self.subtotal = _text(subtotal)
        return subtotal

    def missing_fields(self):
        missing = []
        if not self.material.strip():
            missing.append('material')
        if not self.specification.strip():
            missing.append('specification')
        if to_decimal(self.quantity) is None:
            missing.append('quantity')
        if to_decimal(self.unit_price) is None:
            missing.append('unit_price')
        return missing

    def to_payload(self):
        payload = {
            'material': self.material,
            'specification': self.specification,
            'quantity': self.quantity,
            'unit': self.unit or 'piece',
            'weight': self.weight or 0,
            'unit_price': self.unit_price,
            'remark': self.remark or '',
        }
        if self.id is not None:
            payload['id'] = self.id
            payload['subtotal'] = self.subtotal
        return payload

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)


class InventoryLookup:
    """Live inventory lookups used while a line item is being filled in"""

    def __init__(self, client):
        self.client = client

    def specifications(self, material):
        return specification_options(inventory_rows(fetch_inventory(self.client, material=material)))

    def snapshot(self):
        """Fresh full inventory; returns (items, result) so failures can be reported"""
        result = fetch_inventory(self.client)
        items = [InventoryItem.from_api(row) for row in inventory_rows(result)]
        return items, result

    def available(self, material, specification):
        items, result = self.snapshot()
        if not result.get('success'):
            return None
        return available_quantity(items, material, specification)


class OrderDraft:
    """Order form state for a new order"""

    def __init__(self, order_type=OrderType.QUOTE.value, customer_id=None, remark='', items=None, submitting=False):
        self.order_type = order_type
        self.customer_id = customer_id
        self.remark = remark or ''
        self.items = items if items else [DraftItem()]
        self.submitting = submitting

    # Header

    def set_header(self, order_type=None, customer_id=UNSET, remark=None):
        if order_type is not None:
            if order_type not in (OrderType.QUOTE.value, OrderType.SALES.value):
                raise OrderDraftError(f'Unknown order type: {order_type}')
            self.order_type = order_type
        if customer_id is not UNSET:
            self.customer_id = customer_id or None
        if remark is not None:
            self.remark = remark

    @property
    def is_sales(self):
        return self.order_type == OrderType.SALES.value

    # Line items

    def _item(self, index):
        if not 0 <= index < len(self.items):
            raise OrderDraftError(f'No order item at position {index + 1}')
        return self.items[index]

    def add_item(self):
        self.items.append(DraftItem())
        return self.items[-1]

    def remove_item(self, index):
        self._item(index)
        if len(self.items) == 1:
            raise OrderDraftError('An order needs at least one item')
        del self.items[index]

    def set_item_field(self, index, field_name, value, lookup=None):
        """
        Update one field of a line item.

        Changing the material clears the specification and reloads its
        options; once both material and specification are set the displayed
        stock is refreshed; quantity, weight or unit price changes recompute
        the subtotal.
        """
        item = self._item(index)
        if field_name not in ITEM_FIELDS:
            raise OrderDraftError(f'Unknown item field: {field_name}')
        value = _text(value)
        if field_name == 'unit' and value not in UNITS:
            raise OrderDraftError(f'Unknown unit: {value}')

        setattr(item, field_name, value)

        if field_name == 'material':
            item.specification = ''
            item.specification_options = lookup.specifications(value) if lookup is not None and value else []

        if field_name in ('material', 'specification'):
            item.available = None
            if item.material and item.specification and lookup is not None:
                item.available = _text(lookup.available(item.material, item.specification)) or None

        if field_name in PRICING_FIELDS:
            item.recalculate()
        return item

    @property
    def total_price(self):
        total = Decimal('0.00')
        for item in self.items:
            subtotal = compute_subtotal(item.quantity, item.weight, item.unit_price)
            if subtotal is not None:
                total += subtotal
        return total

    # Checks

    def validate(self):
        """Blocking messages; an empty list means the draft can be submitted"""
        errors = []
        if not self.customer_id:
            errors.append('Please select a customer')
        for position, item in enumerate(self.items, start=1):
            missing = item.missing_fields()
            if missing:
                errors.append(f"Item {position}: please fill in {', '.join(missing)}")
        return errors

    def required_quantity(self, item):
        return to_decimal(item.quantity) or Decimal('0')

    @property
    def needs_stock_check(self):
        return self.is_sales

    def check_inventory_sufficiency(self, snapshot):
        """Shortfalls of every line whose stock is below what the line needs"""
        if not self.needs_stock_check:
            return []
        shortfalls = []
        for item in self.items:
            required = self.required_quantity(item)
            if required <= 0:
                continue
            available = available_quantity(snapshot, item.material, item.specification)
            if available < required:
                shortfalls.append(Shortfall(
                    material=item.material,
                    specification=item.specification,
                    required=required,
                    available=available,
                ))
        return shortfalls

    def confirmation_message(self):
        kind = 'sales' if self.is_sales else 'quote'
        message = f'Are you sure you want to create this {kind} order?'
        if self.is_sales:
            message += ' Creating this order will reduce the corresponding inventory.'
        return message

    # Serialization

    def to_payload(self, user_id=None):
        return {
            'order_type': self.order_type,
            'customer_id': self.customer_id,
            'user_id': user_id,
            'items': [item.to_payload() for item in self.items],
            'remark': self.remark,
        }

    def to_dict(self):
        return {
            'order_type': self.order_type,
            'customer_id': self.customer_id,
            'remark': self.remark,
            'items': [item.to_dict() for item in self.items],
            'submitting': self.submitting,
        }

    def as_page(self):
        data = self.to_dict()
        data['total_price'] = _text(self.total_price)
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            order_type=data.get('order_type', OrderType.QUOTE.value),
            customer_id=data.get('customer_id'),
            remark=data.get('remark', ''),
            items=[DraftItem.from_dict(item) for item in data.get('items', [])],
            submitting=data.get('submitting', False),
        )


class EditOrderDraft(OrderDraft):
    """
    Order form state for editing an existing order.

    The order type is fixed. For orders that already were SALES, stock was
    deducted when the order was created, so only the increase over each
    line's original quantity has to be available.
    """

    def __init__(self, order_id, order_number='', original_order_type=OrderType.QUOTE.value,
                 original_quantities=None, **kwargs):
        kwargs.setdefault('order_type', original_order_type)
        super().__init__(**kwargs)
        self.order_id = order_id
        self.order_number = order_number
        self.original_order_type = original_order_type
        self.original_quantities = original_quantities or {}

    @classmethod
    def from_order(cls, order: Order):
        items = []
        for order_item in order.items:
            item = DraftItem(
                id=order_item.id,
                material=order_item.material,
                specification=order_item.specification,
                quantity=_text(order_item.quantity),
                unit=order_item.unit or 'piece',
                weight=_text(order_item.weight),
                unit_price=_text(order_item.unit_price),
                remark=order_item.remark,
            )
            item.recalculate()
            items.append(item)
        return cls(
            order_id=order.id,
            order_number=order.order_number,
            original_order_type=order.order_type.value,
            original_quantities={
                str(order_item.id): _text(order_item.quantity)
                for order_item in order.items if order_item.id is not None
            },
            customer_id=order.customer_id,
            remark=order.remark,
            items=items,
        )

    def set_header(self, order_type=None, customer_id=UNSET, remark=None):
        if order_type is not None and order_type != self.order_type:
            raise OrderDraftError('Order type cannot be changed while editing')
        super().set_header(customer_id=customer_id, remark=remark)

    @property
    def needs_stock_check(self):
        return self.is_sales and self.original_order_type == OrderType.SALES.value

    def required_quantity(self, item):
        quantity = to_decimal(item.quantity) or Decimal('0')
        if item.id is None:
            return quantity
        original = to_decimal(self.original_quantities.get(str(item.id))) or Decimal('0')
        return quantity - original

    def confirmation_message(self):
        return f'Save changes to order {self.order_number}?'

    def to_payload(self, user_id=None):
        return {
            'customerId': int(self.customer_id) if str(self.customer_id).isdigit() else self.customer_id,
            'items': [item.to_payload() for item in self.items],
            'remark': self.remark,
        }

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'order_id': self.order_id,
            'order_number': self.order_number,
            'original_order_type': self.original_order_type,
            'original_quantities': self.original_quantities,
        })
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            order_id=data['order_id'],
            order_number=data.get('order_number', ''),
            original_order_type=data.get('original_order_type', OrderType.QUOTE.value),
            original_quantities=data.get('original_quantities', {}),
            order_type=data.get('order_type', data.get('original_order_type', OrderType.QUOTE.value)),
            customer_id=data.get('customer_id'),
            remark=data.get('remark', ''),
            items=[DraftItem.from_dict(item) for item in data.get('items', [])],
            submitting=data.get('submitting', False),
        )


class OrderSubmission:
    """
    Runs the submit sequence for a draft.

    ``persist`` is called whenever the draft's ``submitting`` flag flips so
    the caller can write it back to the session before the remote call.
    """

    def __init__(self, client, draft, user_id=None, persist=None, lookup=None):
        self.client = client
        self.draft = draft
        self.user_id = user_id
        self.persist = persist or (lambda draft: None)
        self.lookup = lookup or InventoryLookup(client)

    def submit(self, confirm=False):
        draft = self.draft
        if draft.submitting:
            return {'success': False, 'msg': SUBMIT_IN_PROGRESS_MESSAGE, 'stage': 'submitting'}

        errors = draft.validate()
        if errors:
            logger.info(f'Order submission blocked by validation: {errors}')
            return {'success': False, 'msg': errors[0], 'errors': errors, 'stage': 'validation'}

        if draft.needs_stock_check:
            snapshot, result = self.lookup.snapshot()
            if not result.get('success'):
                result = dict(result)
                result['stage'] = 'inventory'
                return result
            shortfalls = draft.check_inventory_sufficiency(snapshot)
            if shortfalls:
                logger.warning(
                    'Order submission blocked by insufficient inventory: '
                    + ', '.join(f'{s.material} {s.specification} missing {s.missing}' for s in shortfalls)
                )
                return {
                    'success': False,
                    'msg': INSUFFICIENT_INVENTORY_MESSAGE,
                    'shortfalls': [s.as_dict() for s in shortfalls],
                    'stage': 'inventory',
                }

        if not confirm:
            return {
                'success': False,
                'confirm_required': True,
                'msg': draft.confirmation_message(),
                'stage': 'confirm',
            }

        draft.submitting = True
        self.persist(draft)
        try:
            result = self.send()
        finally:
            draft.submitting = False
            self.persist(draft)

        if not result.get('success'):
            return {
                'success': False,
                'msg': result.get('msg') or 'Failed to submit order',
                'status': result.get('status'),
                'stage': 'submit',
            }
        return self.on_success(result)

    def send(self):
        return api.create_order(self.client, self.draft.to_payload(self.user_id))

    def on_success(self, result):
        order_number = result.get('order_number') or result.get('orderId')
        logger.info(f'Order {order_number} created')
        return {
            'success': True,
            'msg': f'Order created successfully! Order Number: {order_number}',
            'order_id': result.get('orderId'),
            'order_number': result.get('order_number'),
            'redirect': '/orders/',
        }


class EditOrderSubmission(OrderSubmission):

    def send(self):
        return api.update_order(self.client, self.draft.order_id, self.draft.to_payload())

    def on_success(self, result):
        logger.info(f'Order {self.draft.order_number} updated')
        return {
            'success': True,
            'msg': result.get('msg') or 'Order updated successfully',
            'order_id': self.draft.order_id,
            'redirect': f'/orders/{self.draft.order_id}/',
        }
