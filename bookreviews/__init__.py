"""
Flask application package.
"""

import os

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from bookreviews.core.config import DATABASE, configure_logging

db = SQLAlchemy()

def create_app(test_config=None):
    app = Flask(__name__)

    # Configure the Flask application
    app.config['SQLALCHEMY_DATABASE_URI'] = DATABASE['default']['URL']
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ECHO'] = DATABASE['default']['ECHO']
    if test_config:
        app.config.update(test_config)

    configure_logging()
    _ensure_sqlite_dir(app.config['SQLALCHEMY_DATABASE_URI'])

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    from bookreviews.api.routes.auth_routes import auth_bp
    from bookreviews.api.routes.book_routes import book_bp
    from bookreviews.api.routes.review_routes import review_bp
    from bookreviews.api.routes.profile_routes import profile_bp
    from bookreviews.api.errors import register_error_handlers

    app.register_blueprint(auth_bp)
    app.register_blueprint(book_bp)
    app.register_blueprint(review_bp)
    app.register_blueprint(profile_bp)
    register_error_handlers(app)

    from bookreviews.api.context import init_services
    from bookreviews.models.database import init_db, shutdown_session

    with app.app_context():
        init_db()
        init_services(app)

    app.teardown_appcontext(shutdown_session)

    return app

def _ensure_sqlite_dir(url):
    """Create the parent directory of a file-backed SQLite database."""
    prefix = 'sqlite:///'
    if not url.startswith(prefix) or url.endswith(':memory:'):
        return
    parent = os.path.dirname(url[len(prefix):])
    if parent:
        os.makedirs(parent, exist_ok=True)
