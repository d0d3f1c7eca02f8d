"""
Shopping cart kept in the client's signed session cookie.

The cart is never stored server-side: it is rebuilt from the session on every
request and written back after each change.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from cakeshop.errors import NotFound
from cakeshop.services.pricing import items_total, line_total, to_money

SESSION_KEY = 'cart'


@dataclass
class CartItem:
    product_id: int
    name: str
    price: Decimal
    image: Optional[str]
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return line_total(self.price, self.quantity)

    def to_session(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'name': self.name,
            'price': str(self.price),
            'image': self.image,
            'quantity': self.quantity,
        }

    @classmethod
    def from_session(cls, data: Dict[str, Any]) -> 'CartItem':
        return cls(
            product_id=int(data['productId']),
            name=data['name'],
            price=Decimal(data['price']),
            image=data.get('image'),
            quantity=int(data['quantity']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'name': self.name,
            'price': float(self.price),
            'image': self.image,
            'quantity': self.quantity,
            'lineTotal': float(to_money(self.line_total)),
        }


class Cart:
    """Ordered line items keyed by product id"""

    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])

    def find(self, product_id: int) -> Optional[CartItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add(self, product_id: int, name: str, price, image: Optional[str]) -> CartItem:
        """Add one unit; an existing line is incremented instead of duplicated"""
        item = self.find(product_id)
        if item is not None:
            item.quantity += 1
            return item

        item = CartItem(product_id=product_id, name=name, price=Decimal(str(price)), image=image)
        self.items.append(item)
        return item

    def set_quantity(self, product_id: int, quantity: int) -> Optional[CartItem]:
        """Set a line's quantity; zero or less removes the line"""
        item = self.find(product_id)
        if item is None:
            raise NotFound('Item not in cart')
        if quantity <= 0:
            self.remove(product_id)
            return None
        item.quantity = quantity
        return item

    def remove(self, product_id: int) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.product_id != product_id]
        return len(self.items) < before

    def clear(self):
        self.items = []

    @property
    def subtotal(self) -> Decimal:
        return items_total(self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def summary(self, tax_rate: Decimal) -> Dict[str, Any]:
        subtotal = to_money(self.subtotal)
        tax = to_money(subtotal * tax_rate)
        return {
            'items': [item.to_dict() for item in self.items],
            'itemCount': self.item_count,
            'subtotal': float(subtotal),
            'tax': float(tax),
            'total': float(subtotal + tax),
        }

    @classmethod
    def load(cls, session) -> 'Cart':
        return cls([CartItem.from_session(data) for data in session.get(SESSION_KEY, [])])

    def save(self, session):
        session[SESSION_KEY] = [item.to_session() for item in self.items]
