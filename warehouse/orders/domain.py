"""
Order and inventory types built from remote API payloads.

Quantities and prices are Decimals; money is rounded to two places.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from warehouse.core.utils import to_decimal, parse_bool

CENT = Decimal('0.01')


class OrderType(str, Enum):
    QUOTE = 'QUOTE'
    SALES = 'SALES'


def compute_subtotal(quantity, weight, unit_price) -> Optional[Decimal]:
    """weight x unit_price when weight > 0, otherwise quantity x unit_price"""
    price = to_decimal(unit_price)
    if price is None:
        return None
    weight = to_decimal(weight)
    base = weight if weight is not None and weight > 0 else to_decimal(quantity)
    if base is None:
        return None
    return (base * price).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class OrderItem:
    material: str
    specification: str
    quantity: Optional[Decimal]
    unit_price: Optional[Decimal]
    unit: str = 'piece'
    weight: Optional[Decimal] = None
    remark: str = ''
    id: Optional[int] = None

    @property
    def subtotal(self) -> Optional[Decimal]:
        return compute_subtotal(self.quantity, self.weight, self.unit_price)

    @classmethod
    def from_api(cls, data):
        return cls(
            id=data.get('id'),
            material=data.get('material') or '',
            specification=data.get('specification') or '',
            quantity=to_decimal(data.get('quantity')),
            unit=data.get('unit') or 'piece',
            weight=to_decimal(data.get('weight')),
            unit_price=to_decimal(data.get('unit_price')),
            remark=data.get('remark') or '',
        )


@dataclass
class Order:
    id: int
    order_number: str
    order_type: OrderType
    customer_id: Optional[int]
    user_id: Optional[int]
    is_paid: bool = False
    is_completed: bool = False
    remark: str = ''
    created_at: Optional[str] = None
    customer_name: str = ''
    items: list[OrderItem] = field(default_factory=list)

    @property
    def total_price(self) -> Decimal:
        return sum((item.subtotal or Decimal('0') for item in self.items), Decimal('0.00'))

    @property
    def is_sales(self):
        return self.order_type == OrderType.SALES

    @classmethod
    def from_api(cls, data):
        raw_items = data.get('OrderItems') or data.get('order_items') or data.get('items') or []
        customer = data.get('Customer') or {}
        return cls(
            id=data.get('id'),
            order_number=data.get('order_number') or '',
            order_type=OrderType(str(data.get('order_type', 'QUOTE')).upper()),
            customer_id=data.get('customer_id'),
            user_id=data.get('user_id'),
            is_paid=bool(parse_bool(data.get('is_paid'))),
            is_completed=bool(parse_bool(data.get('is_completed'))),
            remark=data.get('remark') or '',
            created_at=data.get('created_at'),
            customer_name=customer.get('name') or data.get('customer_name') or '',
            items=[OrderItem.from_api(item) for item in raw_items],
        )


@dataclass(frozen=True)
class InventoryItem:
    material: str
    specification: str
    quantity: Decimal
    id: Optional[int] = None
    density: Optional[Decimal] = None
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data):
        return cls(
            id=data.get('id'),
            material=data.get('material'),
            specification=data.get('specification'),
            quantity=to_decimal(data.get('quantity')) or Decimal('0'),
            density=to_decimal(data.get('density')),
            created_at=data.get('created_at'),
        )


@dataclass(frozen=True)
class Shortfall:
    material: str
    specification: str
    required: Decimal
    available: Decimal

    @property
    def missing(self) -> Decimal:
        return self.required - self.available

    def as_dict(self):
        return {
            'material': self.material,
            'specification': self.specification,
            'required': self.required,
            'available': self.available,
            'missing': self.missing,
        }
