import time

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required
from cakeshop.errors import PaymentUnavailable
from cakeshop.schemas import CheckoutRequest, parse
from cakeshop.services.auth_service import current_identity
from cakeshop.services.payment_service import PaymentService

bp = Blueprint('checkout', __name__, url_prefix='/checkout')

MOCK_CLIENT_SECRET = 'mock_client_secret_for_demo'


@bp.route('', methods=['POST'])
@login_required
def checkout():
    identity = current_identity()
    data = parse(CheckoutRequest, request.get_json(silent=True))

    current_app.logger.info(f'Checkout initiated by user {identity.user_id}', extra={
        'event_type': 'checkout_start',
        'user_id': identity.user_id,
        'item_count': len(data.items)
    })

    payments = PaymentService(
        api_key=current_app.config['STRIPE_SECRET_KEY'],
        currency=current_app.config['PAYMENT_CURRENCY'],
    )
    authorization = payments.authorize(data.items, identity.user_id)

    if authorization.authorized:
        return jsonify({
            'clientSecret': authorization.client_secret,
            'paymentIntentId': authorization.payment_intent_id,
            'amount': authorization.amount,
            'mock': False,
        })

    if not current_app.config['PAYMENT_MOCK_FALLBACK']:
        raise PaymentUnavailable()

    # Demo mode: let checkout continue without a live processor
    current_app.logger.warning('Payment processor unavailable, issuing mock payment intent', extra={
        'event_type': 'checkout_mock_payment',
        'user_id': identity.user_id,
        'error': authorization.error
    })

    return jsonify({
        'clientSecret': MOCK_CLIENT_SECRET,
        'paymentIntentId': f'pi_mock_{int(time.time() * 1000)}',
        'amount': authorization.amount,
        'mock': True,
    })
