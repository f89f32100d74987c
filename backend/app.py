from flask import Flask, jsonify
from flask_compress import Compress
from flask_cors import CORS
from dotenv import load_dotenv
from config.routes import initialize_routes
from config.db import initialize_db as initialize_sqlalchemy, shutdown_db, db
from config.logging import get_logger, configure_quiet_logging
from config.settings import Settings
import os

# Load .env from the backend directory
basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '.env'))

DEV_ORIGINS = ["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:3000", "http://127.0.0.1:5173"]


def create_app(config_overrides=None):
    app = Flask(__name__)
    settings = Settings.from_env()
    app.config.update(settings.to_flask_config())
    if config_overrides:
        app.config.update(config_overrides)

    environment = app.config.get("ENVIRONMENT", "development")

    allowed_origins = os.getenv("CORS_ORIGINS")
    CORS(app,
         origins=allowed_origins.split(",") if allowed_origins else DEV_ORIGINS,
         allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         supports_credentials=True,
         max_age=3600)

    logger = get_logger()
    configure_quiet_logging()

    app.config['COMPRESS_MIMETYPES'] = ['application/json']
    app.config['COMPRESS_MIN_SIZE'] = 500
    Compress(app)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        if environment == "production":
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"success": False, "error": "Resource not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    initialize_sqlalchemy(app)  # Init SQLAlchemy ORM

    if app.config.get('AUTO_CREATE_TABLES'):
        import models  # noqa: F401  registers every table on db.metadata
        with app.app_context():
            db.create_all()
        logger.info("Database tables created")

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok"}), 200

    initialize_routes(app)  # Register routes

    return app


if __name__ == "__main__":
    app = create_app()
    port = int(app.config.get("PORT", 8004))
    debug = app.config.get("ENVIRONMENT") != "production"

    print(">> Starting BOQ Service")
    print(f"   Environment: {app.config.get('ENVIRONMENT')}")
    print(f"   Port: {port}")
    print(f"   Debug: {debug}")
    print("=" * 60)

    try:
        app.run(host="0.0.0.0", port=port, debug=debug)
    finally:
        shutdown_db(app)
