from flask import Blueprint, current_app, jsonify, request, session
from flask_login import current_user, login_user, logout_user
from cakeshop import db
from cakeshop.schemas import (LoginRequest, NewPasswordRequest, RegisterRequest,
                              ResetPasswordRequest, parse)
from cakeshop.services.auth_service import AuthService

bp = Blueprint('auth', __name__, url_prefix='/auth')


def _service():
    return AuthService(db.session, reset_token_ttl=current_app.config['RESET_TOKEN_TTL_SECONDS'])


def _start_session(user):
    session.permanent = True
    login_user(user)


@bp.route('/register', methods=['POST'])
def register():
    data = parse(RegisterRequest, request.get_json(silent=True))
    user = _service().register(data)
    _start_session(user)

    current_app.logger.info(f'User {user.id} registered', extra={
        'event_type': 'user_registered',
        'user_id': user.id
    })

    return jsonify({'message': 'Registration successful', 'user': user.to_dict()}), 201


@bp.route('/login', methods=['POST'])
def login():
    data = parse(LoginRequest, request.get_json(silent=True))
    user = _service().authenticate(data)
    _start_session(user)

    current_app.logger.info(f'Login successful for user {user.id}', extra={
        'event_type': 'user_login',
        'user_id': user.id
    })

    return jsonify({'message': 'Login successful', 'user': user.to_dict()})


@bp.route('/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'message': 'Logged out'})


@bp.route('/me')
def me():
    # Anonymous callers get a null user, not an error
    if not current_user.is_authenticated:
        return jsonify({'user': None})
    return jsonify({'user': current_user.to_dict()})


@bp.route('/reset-password', methods=['POST'])
def reset_password():
    data = parse(ResetPasswordRequest, request.get_json(silent=True))
    message = _service().request_password_reset(data.email)

    current_app.logger.info('Password reset requested', extra={
        'event_type': 'password_reset_requested'
    })

    return jsonify({'message': message})


@bp.route('/reset-password/confirm', methods=['POST'])
def confirm_reset_password():
    data = parse(NewPasswordRequest, request.get_json(silent=True))
    user = _service().reset_password(data)

    current_app.logger.info(f'Password reset completed for user {user.id}', extra={
        'event_type': 'password_reset_completed',
        'user_id': user.id
    })

    return jsonify({'message': 'Password has been reset'})
