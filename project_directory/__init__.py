"""
Application factory for the Project Directory.

This module provides a function to create and configure the Flask
application. All extensions (SQLAlchemy, Migrate, JWT) are initialised
here, and the blueprints for the directory listing, banner uploads and
image serving are registered inside the factory so that tests can build
isolated app instances.

Environment variables control the database connection, the JWT secret
and the uploads directory. In production set ``DATABASE_URL``,
``JWT_SECRET_KEY`` and ``UPLOAD_FOLDER``. A default configuration is
provided for development, using SQLite when no database URL is
available.
"""

from __future__ import annotations

import os
from datetime import timedelta

from flask import Flask
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager

# instantiate extensions without binding them to an app yet.  They will
# be bound in create_app().
from .db import db  # use shared db object from db.py
migrate = Migrate()
jwt = JWTManager()

# Largest banner image accepted, declared or observed.
MAX_BANNER_SIZE = 5_000_000


def create_app(test_config: dict | None = None) -> Flask:
    """Create and configure a Flask application.

    Parameters
    ----------
    test_config: dict | None, optional
        Optional configuration overrides used when running tests.

    Returns
    -------
    Flask
        A configured Flask application instance.
    """
    app = Flask(__name__)

    app.config.update(
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL", "sqlite:///directory.db"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JWT_SECRET_KEY=os.environ.get("JWT_SECRET_KEY", "please-change-this-secret-key"),
        JWT_ACCESS_TOKEN_EXPIRES=timedelta(days=1),
        UPLOAD_FOLDER=os.environ.get("UPLOAD_FOLDER", "./data/uploads"),
        MAX_BANNER_SIZE=MAX_BANNER_SIZE,
        UPLOAD_CHUNK_SIZE=64 * 1024,
    )

    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from .errors import register_error_handlers, register_jwt_callbacks
    from .services.session_service import register_identity_loader
    register_error_handlers(app)
    register_jwt_callbacks(jwt)
    register_identity_loader(jwt)

    # Register blueprints. Importing here avoids circular imports.
    from .routes.banner import banner_bp
    from .routes.images import images_bp
    from .routes.projects import projects_bp

    app.register_blueprint(banner_bp, url_prefix="/api")
    app.register_blueprint(images_bp, url_prefix="/api")
    app.register_blueprint(projects_bp, url_prefix="/api")

    @app.route("/api/health")
    def health_check() -> dict[str, str]:
        """Return a simple health check response."""
        return {"status": "ok"}

    return app
