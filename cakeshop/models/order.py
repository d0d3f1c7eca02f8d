from cakeshop import db
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    """Order statuses. Any status may be set from any other."""
    PENDING = 'pending'
    PROCESSING = 'processing'
    SHIPPED = 'shipped'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'


class Order(db.Model):
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    total = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING.value)
    shipping_address = db.Column(db.JSON, nullable=False)
    payment_intent_id = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship('OrderItem', backref='order', lazy=True,
                            cascade='all, delete-orphan', order_by='OrderItem.id')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'items': [item.to_dict() for item in self.items],
            'total': float(self.total),
            'status': self.status,
            'shippingAddress': dict(self.shipping_address),
            'paymentIntentId': self.payment_intent_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Order {self.id} {self.status}>'


class OrderItem(db.Model):
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    # Plain reference: the product may be deleted after the order is placed
    product_id = db.Column(db.Integer, nullable=False)
    product_name = db.Column(db.String(200), nullable=False)
    product_image = db.Column(db.String(500))
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    def to_dict(self):
        return {
            'productId': self.product_id,
            'productName': self.product_name,
            'productImage': self.product_image,
            'quantity': self.quantity,
            'price': float(self.price),
        }
