from flask import Blueprint, current_app, jsonify, request
from cakeshop import db
from cakeshop.schemas import CreateOrderRequest, UpdateOrderStatusRequest, parse
from cakeshop.services.auth_service import current_identity, require_admin, require_identity
from cakeshop.services.order_service import OrderService

bp = Blueprint('orders', __name__, url_prefix='/orders')

@bp.route('', methods=['GET'])
def list_orders():
    orders = OrderService(db.session).list_orders(current_identity())
    return jsonify({'orders': [order.to_dict() for order in orders]})

@bp.route('', methods=['POST'])
def create_order():
    identity = require_identity(current_identity())
    data = parse(CreateOrderRequest, request.get_json(silent=True))

    current_app.logger.info(f'Creating order for user {identity.user_id}', extra={
        'event_type': 'order_create',
        'user_id': identity.user_id,
        'item_count': len(data.items)
    })

    order = OrderService(db.session).create(identity, data)

    current_app.logger.info('Order placed successfully', extra={
        'event_type': 'order_success',
        'user_id': identity.user_id,
        'order_id': order.id,
        'total_amount': float(order.total)
    })

    return jsonify({'order': order.to_dict()}), 201

@bp.route('/<int:order_id>', methods=['GET'])
def get_order(order_id):
    order = OrderService(db.session).get(order_id, current_identity())
    return jsonify({'order': order.to_dict()})

@bp.route('/<int:order_id>', methods=['PUT'])
def update_order_status(order_id):
    identity = require_admin(current_identity())
    data = parse(UpdateOrderStatusRequest, request.get_json(silent=True))
    order = OrderService(db.session).update_status(order_id, data.status, identity)

    current_app.logger.info(f'Order {order.id} status set to {order.status}', extra={
        'event_type': 'order_status_updated',
        'order_id': order.id,
        'status': order.status
    })

    return jsonify({'order': order.to_dict()})
