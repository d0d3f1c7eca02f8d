from flask import Blueprint, jsonify, request
from flask_login import login_required
from cakeshop import db
from cakeshop.schemas import ProfileUpdateRequest, parse
from cakeshop.services.auth_service import AuthService, current_identity

bp = Blueprint('profile', __name__, url_prefix='/profile')

@bp.route('', methods=['GET'])
@login_required
def get_profile():
    user = AuthService(db.session).get_profile(current_identity())
    return jsonify({'user': user.to_dict()})

@bp.route('', methods=['PUT'])
@login_required
def update_profile():
    data = parse(ProfileUpdateRequest, request.get_json(silent=True))
    user = AuthService(db.session).update_profile(current_identity(), data)
    return jsonify({'user': user.to_dict()})
