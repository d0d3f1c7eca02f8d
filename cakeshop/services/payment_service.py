"""
Payment authorization through Stripe PaymentIntents.

The service reports whether the processor authorized the payment; what to do
when it could not is left to the caller.
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import stripe

from cakeshop.services.pricing import items_total, to_minor_units

logger = logging.getLogger(__name__)

# Stripe caps metadata values at 500 characters
METADATA_VALUE_LIMIT = 500


class PaymentOutcome(Enum):
    AUTHORIZED = 'authorized'
    PROCESSOR_UNAVAILABLE = 'processor_unavailable'


@dataclass(frozen=True)
class PaymentAuthorization:
    outcome: PaymentOutcome
    amount: int
    client_secret: Optional[str] = None
    payment_intent_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def authorized(self) -> bool:
        return self.outcome is PaymentOutcome.AUTHORIZED


def checkout_amount(items) -> int:
    """Order amount in cents: round(sum(price x quantity) x 100)"""
    return to_minor_units(items_total(items))


class PaymentService:
    def __init__(self, api_key: Optional[str] = None, currency: str = 'usd'):
        self.api_key = api_key
        self.currency = currency

    def authorize(self, items, user_id) -> PaymentAuthorization:
        amount = checkout_amount(items)

        if not self.api_key:
            logger.warning('Stripe is not configured, payment processor unavailable')
            return PaymentAuthorization(
                outcome=PaymentOutcome.PROCESSOR_UNAVAILABLE,
                amount=amount,
                error='Payment processor not configured',
            )

        metadata_items = json.dumps(
            [{'productId': item.product_id, 'quantity': item.quantity} for item in items]
        )[:METADATA_VALUE_LIMIT]

        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=self.currency,
                metadata={'userId': str(user_id), 'items': metadata_items},
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.warning(f'Stripe payment intent failed: {e}')
            return PaymentAuthorization(
                outcome=PaymentOutcome.PROCESSOR_UNAVAILABLE,
                amount=amount,
                error=str(e),
            )

        logger.info(f'Payment intent {intent.id} created for {amount} {self.currency}')
        return PaymentAuthorization(
            outcome=PaymentOutcome.AUTHORIZED,
            amount=amount,
            client_secret=intent.client_secret,
            payment_intent_id=intent.id,
        )
