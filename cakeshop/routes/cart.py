from flask import Blueprint, current_app, jsonify, request, session
from cakeshop import db
from cakeshop.schemas import CartAddRequest, CartQuantityRequest, parse
from cakeshop.services.cart import Cart
from cakeshop.services.catalog_service import CatalogService

bp = Blueprint('cart', __name__, url_prefix='/cart')


def _summary(cart):
    return jsonify({'cart': cart.summary(current_app.config['SALES_TAX_RATE'])})


@bp.route('', methods=['GET'])
def view_cart():
    cart = Cart.load(session)

    current_app.logger.info(f'Cart contains {len(cart.items)} items, subtotal: ${cart.subtotal}', extra={
        'event_type': 'cart_viewed',
        'item_count': cart.item_count,
        'total_amount': float(cart.subtotal)
    })

    return _summary(cart)


@bp.route('/items', methods=['POST'])
def add_to_cart():
    data = parse(CartAddRequest, request.get_json(silent=True))
    product = CatalogService(db.session).get_product(data.product_id)

    cart = Cart.load(session)
    item = cart.add(product.id, product.name, product.price, product.image_url)
    cart.save(session)

    current_app.logger.info(f'Product {product.id} added to cart', extra={
        'event_type': 'cart_add',
        'product_id': product.id,
        'product_name': product.name,
        'quantity': item.quantity,
        'price': float(product.price)
    })

    return _summary(cart)


@bp.route('/items/<int:product_id>', methods=['PUT'])
def update_cart_item(product_id):
    data = parse(CartQuantityRequest, request.get_json(silent=True))

    cart = Cart.load(session)
    cart.set_quantity(product_id, data.quantity)
    cart.save(session)

    return _summary(cart)


@bp.route('/items/<int:product_id>', methods=['DELETE'])
def remove_from_cart(product_id):
    cart = Cart.load(session)
    cart.remove(product_id)
    cart.save(session)
    return _summary(cart)


@bp.route('', methods=['DELETE'])
def clear_cart():
    cart = Cart.load(session)
    cart.clear()
    cart.save(session)
    return _summary(cart)
