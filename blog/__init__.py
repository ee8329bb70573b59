import logging
import os

from flask import Flask, g, request
from flask_jwt_extended import JWTManager

from blog.config import Config
from blog.db import db
from blog.errors import register_error_handlers


jwt = JWTManager()


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=app.config["LOG_LEVEL"],
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    if app.config["BLOB_BACKEND"] == "local":
        os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    db.init_app(app)
    jwt.init_app(app)

    from blog.commands import register_commands
    from blog.routes.auth_routes import auth_bp
    from blog.routes.main_routes import main_bp
    from blog.routes.post_routes import post_bp
    from blog.services import auth_service

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(post_bp)
    register_error_handlers(app)
    register_commands(app)

    @app.before_request
    def load_current_user():
        g.current_user = auth_service.restore_session()

    @app.context_processor
    def inject_session_context():
        return {
            "current_user": g.get("current_user"),
            "csrf_token": request.cookies.get(app.config["JWT_ACCESS_CSRF_COOKIE_NAME"], ""),
        }

    with app.app_context():
        db.create_all()

    app.logger.debug("Application created and configured")
    return app
