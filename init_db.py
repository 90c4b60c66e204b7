"""
Database initialization script.
Creates tables without going through migrations.
Run before gunicorn starts on a fresh database.
"""
import os
import sys

os.environ.setdefault('FLASK_ENV', 'production')

from wastewatch import create_app
from wastewatch.extensions import db


def init_database():
    """Creates all tables that do not exist yet."""
    app = create_app()
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', 'NOT SET')
    print(f"App created, DB URI: {db_uri.split('@')[-1][:50]}...")

    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("Database initialization complete!")


if __name__ == '__main__':
    try:
        init_database()
    except Exception as e:
        print(f"Error initializing database: {e}")
        sys.exit(1)
