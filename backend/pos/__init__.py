import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import ApiError
from .extensions import db, migrate, enforce_sqlite_foreign_keys



def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    with app.app_context():
        enforce_sqlite_foreign_keys(db.engine)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.categories import categories_bp
    from .routes.products import products_bp
    from .routes.coupons import coupons_bp
    from .routes.transactions import transactions_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(coupons_bp)
    app.register_blueprint(transactions_bp)

    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict()), int(err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if err.code is None or err.code < 400:
            return err
        return jsonify({
            "message": err.description,
            "error": err.name,
            "statusCode": err.code,
        }), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        db.session.rollback()
        return jsonify({
            "message": "Internal server error",
            "error": "Internal Server Error",
            "statusCode": 500,
        }), 500

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
