from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager, current_user
import newrelic.agent

db = SQLAlchemy()
login_manager = LoginManager()


def create_app(config_class=None):
    app = Flask(__name__)

    # Configuration
    from cakeshop.config import Config
    app.config.from_object(config_class or Config)

    # Setup logging
    from cakeshop.logging_config import setup_logging
    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    from cakeshop.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    # New Relic Custom Attributes for User Tracking
    @app.before_request
    def add_newrelic_user_attributes():
        """Add user information as custom attributes to New Relic for error tracking"""
        if current_user.is_authenticated:
            newrelic.agent.add_custom_attribute('enduser.id', str(current_user.id))
            newrelic.agent.add_custom_attribute('userId', str(current_user.id))
            newrelic.agent.add_custom_attribute('user', current_user.email)
            newrelic.agent.add_custom_attribute('userRole', current_user.role)

    from cakeshop.errors import create_error_handlers
    create_error_handlers(app)

    # Register blueprints
    from cakeshop.routes import main, auth, products, cart, checkout, orders, profile, admin
    app.register_blueprint(main.bp)
    app.register_blueprint(auth.bp)
    app.register_blueprint(products.bp)
    app.register_blueprint(cart.bp)
    app.register_blueprint(checkout.bp)
    app.register_blueprint(orders.bp)
    app.register_blueprint(profile.bp)
    app.register_blueprint(admin.bp)

    # The store lives for the lifetime of the app; an in-memory database
    # starts empty on every process start.
    with app.app_context():
        db.create_all()
        if app.config['SEED_SAMPLE_DATA']:
            from cakeshop.seed import seed_sample_data
            seed_sample_data(db.session)

    return app
