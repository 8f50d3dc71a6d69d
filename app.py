import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flasgger import Swagger
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Config
from extensions import db, bcrypt, mail, migrate
from utils.auth_utils import init_password_checks
from utils.errors import AppError, ServiceUnavailable

from routes.auth_routes import auth_bp
from routes.user_routes import user_bp
from routes.role_routes import role_bp
from routes.company_routes import company_bp


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        app.logger.error(f"Database error: {str(error)}", exc_info=True)
        unavailable = ServiceUnavailable()
        return jsonify(unavailable.to_dict()), unavailable.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return error
        db.session.rollback()
        app.logger.error(f"Unhandled error: {str(error)}", exc_info=True)
        return jsonify({'error': 'An internal error occurred.'}), 500


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO))

    # CORS Configuration
    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "OPTIONS", "PUT", "DELETE"],
            "allow_headers": ["Authorization", "Content-Type"],
            "supports_credentials": True,
            "expose_headers": ["Authorization"]
        }
    })

    Swagger(app)

    # Init extensions
    db.init_app(app)
    bcrypt.init_app(app)
    mail.init_app(app)
    migrate.init_app(app, db)
    init_password_checks(app)

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/users")
    app.register_blueprint(user_bp, url_prefix="/api/users")
    app.register_blueprint(role_bp, url_prefix="/api/users")
    app.register_blueprint(company_bp, url_prefix="/api/company")

    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host="localhost", port=5000)
