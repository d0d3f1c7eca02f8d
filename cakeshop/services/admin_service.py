"""
Admin dashboard: catalogue and order overview with summary statistics
"""
from decimal import Decimal
from typing import Optional

from cakeshop.models import OrderStatus, Product
from cakeshop.services.auth_service import CallerIdentity, require_admin
from cakeshop.services.catalog_service import CatalogService, MAX_PAGE_SIZE
from cakeshop.services.order_service import OrderService
from cakeshop.services.pricing import to_money

LOW_STOCK_THRESHOLD = 5


class AdminService:
    def __init__(self, session):
        self.session = session
        self.catalog = CatalogService(session)
        self.orders = OrderService(session)

    def dashboard(self, identity: Optional[CallerIdentity]):
        require_admin(identity)

        page = self.catalog.list_products(page=1, limit=MAX_PAGE_SIZE)
        orders = self.orders.list_orders(identity)
        low_stock = (self.session.query(Product)
                     .filter(Product.stock < LOW_STOCK_THRESHOLD)
                     .order_by(Product.id)
                     .all())

        status_counts = {status.value: 0 for status in OrderStatus}
        revenue = Decimal('0')
        for order in orders:
            status_counts[order.status] = status_counts.get(order.status, 0) + 1
            if order.status != OrderStatus.CANCELLED.value:
                revenue += order.total

        return {
            'products': [product.to_dict() for product in page.products],
            'orders': [order.to_dict() for order in orders],
            'stats': {
                'productCount': page.total,
                'orderCount': len(orders),
                'revenue': float(to_money(revenue)),
                'ordersByStatus': status_counts,
                'lowStock': [
                    {'id': product.id, 'name': product.name, 'stock': product.stock}
                    for product in low_stock
                ],
            },
        }
