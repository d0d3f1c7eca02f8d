from flask import Blueprint, current_app

bp = Blueprint('main', __name__)

@bp.route('/health')
def health():
    current_app.logger.debug('Health check endpoint called')
    return {'status': 'healthy'}, 200
