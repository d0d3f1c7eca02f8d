from flask import Blueprint, current_app, jsonify, request
from cakeshop import db
from cakeshop.schemas import ProductRequest, parse
from cakeshop.services.auth_service import current_identity, require_admin
from cakeshop.services.catalog_service import CatalogService, DEFAULT_PAGE_SIZE
from cakeshop.services.review_service import ReviewService

bp = Blueprint('products', __name__, url_prefix='/products')

@bp.route('', methods=['GET'])
def list_products():
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', DEFAULT_PAGE_SIZE, type=int)
    category = request.args.get('category')
    search = request.args.get('search')

    current_app.logger.info('Products list requested', extra={
        'event_type': 'page_view',
        'page': 'products_list',
        'page_number': page,
        'category': category or 'all'
    })

    result = CatalogService(db.session).list_products(page=page, limit=limit, category=category, search=search)

    current_app.logger.info(f'Displaying products page {result.page}', extra={
        'event_type': 'data_loaded',
        'product_count': len(result.products),
        'total_pages': result.total_pages
    })

    return jsonify(result.to_dict())

@bp.route('', methods=['POST'])
def create_product():
    identity = require_admin(current_identity())
    data = parse(ProductRequest, request.get_json(silent=True))
    product = CatalogService(db.session).create_product(identity, data)

    current_app.logger.info(f'Product created: {product.name}', extra={
        'event_type': 'product_created',
        'product_id': product.id
    })

    return jsonify({'product': product.to_dict()}), 201

@bp.route('/<int:product_id>', methods=['GET'])
def product_detail(product_id):
    current_app.logger.info(f'Product detail requested: {product_id}', extra={
        'event_type': 'page_view',
        'page': 'product_detail',
        'product_id': product_id
    })

    product = CatalogService(db.session).get_product(product_id)
    reviews = ReviewService(db.session).list_for_product(product_id)

    return jsonify({
        'product': product.to_dict(),
        'reviews': [review.to_dict() for review in reviews],
    })

@bp.route('/<int:product_id>', methods=['PUT'])
def update_product(product_id):
    identity = require_admin(current_identity())
    data = parse(ProductRequest, request.get_json(silent=True))
    product = CatalogService(db.session).update_product(identity, product_id, data)
    return jsonify({'product': product.to_dict()})

@bp.route('/<int:product_id>', methods=['DELETE'])
def delete_product(product_id):
    identity = require_admin(current_identity())
    CatalogService(db.session).delete_product(identity, product_id)

    current_app.logger.info(f'Product deleted: {product_id}', extra={
        'event_type': 'product_deleted',
        'product_id': product_id
    })

    return jsonify({'message': 'Product deleted'})

@bp.route('/<int:product_id>/reviews', methods=['POST'])
def create_review(product_id):
    review = ReviewService(db.session).create(product_id, request.get_json(silent=True), current_identity())

    current_app.logger.info(f'Review added to product {product_id}', extra={
        'event_type': 'review_created',
        'product_id': product_id,
        'rating': review.rating
    })

    return jsonify({'review': review.to_dict()}), 201
