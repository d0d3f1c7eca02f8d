from flask import Blueprint, current_app, jsonify
from cakeshop import db
from cakeshop.services.admin_service import AdminService
from cakeshop.services.auth_service import current_identity

bp = Blueprint('admin', __name__, url_prefix='/admin')

@bp.route('/dashboard')
def dashboard():
    """Products, orders and summary statistics for the admin dashboard"""
    identity = current_identity()
    data = AdminService(db.session).dashboard(identity)

    current_app.logger.info('Admin dashboard viewed', extra={
        'event_type': 'page_view',
        'page': 'admin_dashboard',
        'user_id': identity.user_id
    })

    return jsonify(data)
