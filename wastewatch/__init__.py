"""
WasteWatch - city waste and pollution reporting platform.

This module holds the app factory that builds and configures the
Flask application with its extensions and blueprints.
"""

import logging
import os
from datetime import timedelta

import click
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import get_config, validate_production_config
from .extensions import db, migrate, cors


def create_app(config_class=None):
    """
    App factory - builds and configures the Flask application.

    Args:
        config_class: optional config class. Defaults to the one
                      selected by FLASK_ENV.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    if config_class is None:
        config_class = get_config()
    app.config.from_object(config_class)

    validate_production_config(app)

    _configure_logging(app)

    # Number of reverse proxies in front of the app
    proxy_count = int(os.environ.get('TRUSTED_PROXY_COUNT', '1'))
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=proxy_count,
        x_proto=proxy_count,
        x_host=proxy_count,
        x_prefix=proxy_count
    )

    _init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_cli_commands(app)

    return app


def _configure_logging(app):
    """Sets the level of the app and package loggers from LOG_LEVEL."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)

    package_logger = logging.getLogger('wastewatch')
    package_logger.setLevel(level)
    if not package_logger.handlers and not app.testing:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        ))
        package_logger.addHandler(handler)


def _init_extensions(app):
    """
    Binds every Flask extension to the app.
    """
    # SQLAlchemy - ORM
    db.init_app(app)

    # Flask-Migrate - migrations
    migrate.init_app(app, db)

    # CORS
    cors.init_app(app, origins=app.config['CORS_ORIGINS'])


def _register_blueprints(app):
    """
    Registers the API blueprint.

    - /api/*   JSON API
    - /health  liveness check
    """
    from .api import bp as api_bp, register_routes
    register_routes()
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/health')
    def health_check():
        """Health check endpoint (load balancer, uptime monitors)."""
        return jsonify({
            'status': 'healthy',
            'service': 'wastewatch'
        })


def _register_error_handlers(app):
    """
    Global error handlers. Every error is returned as JSON with a
    stable error kind and no internal detail.
    """
    from .services.errors import ServiceError, StorageError

    @app.errorhandler(ServiceError)
    def service_error(error):
        if error.code >= 500:
            app.logger.error(f'{error.kind}: {error.message}')
        return jsonify(error.to_dict()), error.code

    @app.errorhandler(SQLAlchemyError)
    def storage_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled database error')
        err = StorageError()
        return jsonify(err.to_dict()), err.code

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({
            'error': error.name.lower().replace(' ', '_'),
            'message': error.description
        }), error.code

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f'Internal Server Error: {error}')
        return jsonify({
            'error': 'internal_error',
            'message': 'Internal server error'
        }), 500


def _register_cli_commands(app):
    """
    Custom Flask CLI commands.
    Usage: flask <command>
    """

    @app.cli.command('create-admin')
    @click.option('--email', prompt='User email', help='Email of an existing user')
    def create_admin_command(email):
        """Promotes an existing user to admin."""
        from .models import UserRole
        from .services.auth_service import auth_service
        from .services.errors import NotFound

        try:
            user = auth_service.set_role(email, UserRole.ADMIN)
        except NotFound:
            click.echo(f'No user with email {email}')
            return
        click.echo(f'User {user.email} is now an admin.')

    @app.cli.command('purge-content-cache')
    @click.option('--hours', default=72, show_default=True, type=int,
                  help='Delete cached content older than this many hours')
    def purge_content_cache_command(hours):
        """Deletes old cached news/pollution rows."""
        from .services.content_cache_service import content_cache_service

        deleted = content_cache_service.purge(timedelta(hours=hours))
        click.echo(f'Deleted {deleted} cached content rows.')

    @app.cli.command('seed-demo')
    def seed_demo_command():
        """Creates demo users (idempotent)."""
        from .models import User

        demo_users = [
            ('Demo Admin', 'admin@demo.com', 'Maharashtra', 'Mumbai'),
            ('Test User', 'test@demo.com', 'Karnataka', 'Bangalore'),
            ('Community User', 'community@demo.com', 'Delhi', 'New Delhi'),
        ]
        created = 0
        for name, email, state, city in demo_users:
            if User.query.filter_by(email=email).first():
                continue
            user = User(name=name, email=email, state=state, city=city)
            user.set_password('demo1234')
            db.session.add(user)
            created += 1
        db.session.commit()
        click.echo(f'Created {created} demo users.')
