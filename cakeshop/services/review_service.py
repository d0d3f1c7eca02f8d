"""
Product reviews. Reviews are append-only.
"""
import logging
from typing import List, Optional

from cakeshop.errors import NotFound
from cakeshop.models import Product, Review, User
from cakeshop.schemas import ReviewRequest, parse
from cakeshop.services.auth_service import CallerIdentity, require_identity

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, session):
        self.session = session

    def list_for_product(self, product_id: int) -> List[Review]:
        return (self.session.query(Review)
                .filter_by(product_id=product_id)
                .order_by(Review.id)
                .all())

    def create(self, product_id: int, payload, identity: Optional[CallerIdentity]) -> Review:
        identity = require_identity(identity)

        if self.session.get(Product, product_id) is None:
            raise NotFound('Product not found')

        data = parse(ReviewRequest, payload)

        user = self.session.get(User, identity.user_id)
        if user is None:
            raise NotFound('User not found')

        review = Review(
            product_id=product_id,
            user_id=user.id,
            user_name=user.display_name,
            rating=data.rating,
            comment=data.comment,
        )
        self.session.add(review)
        self.session.commit()

        logger.info(f'Review {review.id} added to product {product_id} by user {user.id}')
        return review
