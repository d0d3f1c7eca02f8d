from cakeshop.models.user import User, UserRole
from cakeshop.models.product import Product
from cakeshop.models.review import Review
from cakeshop.models.order import Order, OrderItem, OrderStatus

__all__ = ['User', 'UserRole', 'Product', 'Review', 'Order', 'OrderItem', 'OrderStatus']
