"""
Product catalogue: filtered listing with pagination and admin maintenance
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func, or_

from cakeshop.errors import NotFound
from cakeshop.models import Product
from cakeshop.services.auth_service import CallerIdentity, require_admin

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 8
MAX_PAGE_SIZE = 100


@dataclass
class ProductPage:
    products: List[Product]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def to_dict(self):
        return {
            'products': [product.to_dict() for product in self.products],
            'pagination': {
                'page': self.page,
                'limit': self.limit,
                'total': self.total,
                'totalPages': self.total_pages,
            },
        }


class CatalogService:
    def __init__(self, session):
        self.session = session

    def list_products(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE,
                      category: Optional[str] = None, search: Optional[str] = None) -> ProductPage:
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        query = self.session.query(Product)
        if category:
            query = query.filter(func.lower(Product.category) == category.lower())
        if search:
            query = query.filter(or_(
                Product.name.icontains(search, autoescape=True),
                Product.description.icontains(search, autoescape=True),
            ))

        total = query.count()
        offset = (page - 1) * limit
        if offset >= total:
            # Past the last page; also keeps oversized offsets away from the database
            return ProductPage(products=[], page=page, limit=limit, total=total)
        products = query.order_by(Product.id).offset(offset).limit(limit).all()
        return ProductPage(products=products, page=page, limit=limit, total=total)

    def get_product(self, product_id: int) -> Product:
        product = self.session.get(Product, product_id)
        if product is None:
            raise NotFound('Product not found')
        return product

    def _apply(self, product: Product, data):
        product.name = data.name
        product.description = data.description
        product.price = data.price
        product.category = data.category
        product.image_url = data.image
        product.images = list(data.images)
        product.stock = data.stock

    def create_product(self, identity: Optional[CallerIdentity], data) -> Product:
        require_admin(identity)
        product = Product()
        self._apply(product, data)
        self.session.add(product)
        self.session.commit()
        logger.info(f'Product {product.id} created by user {identity.user_id}')
        return product

    def update_product(self, identity: Optional[CallerIdentity], product_id: int, data) -> Product:
        require_admin(identity)
        product = self.get_product(product_id)
        self._apply(product, data)
        self.session.commit()
        logger.info(f'Product {product.id} updated by user {identity.user_id}')
        return product

    def delete_product(self, identity: Optional[CallerIdentity], product_id: int):
        require_admin(identity)
        product = self.get_product(product_id)
        self.session.delete(product)
        self.session.commit()
        logger.info(f'Product {product_id} deleted by user {identity.user_id}')
