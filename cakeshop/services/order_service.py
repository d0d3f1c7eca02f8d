"""
Order placement, retrieval and status management
"""
import logging
from datetime import datetime
from typing import List, Optional

from cakeshop.errors import NotFound, Unauthorized
from cakeshop.models import Order, OrderItem, OrderStatus, Product
from cakeshop.services.auth_service import CallerIdentity, require_admin, require_identity
from cakeshop.services.pricing import items_total

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, session):
        self.session = session

    def create(self, identity: Optional[CallerIdentity], data) -> Order:
        """
        Place an order from validated line items.

        Item prices are taken as submitted and snapshotted into the order.
        Stock of each ordered product is decremented, floored at zero, in the
        same commit as the order itself.
        """
        identity = require_identity(identity)

        order = Order(
            user_id=identity.user_id,
            total=items_total(data.items),
            status=OrderStatus.PENDING.value,
            shipping_address=data.shipping_address.model_dump(by_alias=True),
            payment_intent_id=data.payment_intent_id,
        )
        for item in data.items:
            order.items.append(OrderItem(
                product_id=item.product_id,
                product_name=item.product_name,
                product_image=item.product_image,
                quantity=item.quantity,
                price=item.price,
            ))
        self.session.add(order)

        for item in data.items:
            product = self.session.get(Product, item.product_id)
            if product is None:
                logger.warning(f'Product {item.product_id} no longer exists, stock not decremented')
                continue
            product.stock = max(0, product.stock - item.quantity)

        self.session.commit()
        logger.info(f'Order {order.id} created for user {identity.user_id}')
        return order

    def list_orders(self, identity: Optional[CallerIdentity]) -> List[Order]:
        """All orders for admins, the caller's own orders otherwise; newest first"""
        identity = require_identity(identity)
        query = self.session.query(Order)
        if not identity.is_admin:
            query = query.filter(Order.user_id == identity.user_id)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def get(self, order_id: int, identity: Optional[CallerIdentity]) -> Order:
        identity = require_identity(identity)
        order = self.session.get(Order, order_id)
        if order is None:
            raise NotFound('Order not found')
        if order.user_id != identity.user_id and not identity.is_admin:
            raise Unauthorized()
        return order

    def update_status(self, order_id: int, status: OrderStatus, identity: Optional[CallerIdentity]) -> Order:
        identity = require_admin(identity)
        order = self.session.get(Order, order_id)
        if order is None:
            raise NotFound('Order not found')

        previous = order.status
        order.status = OrderStatus(status).value
        order.updated_at = datetime.utcnow()
        self.session.commit()

        logger.info(f'Order {order.id} status {previous} -> {order.status} by user {identity.user_id}')
        return order
