"""
Database configuration and initialization for the Academic Records Portal
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
import sqlite3

# Initialize SQLAlchemy instance
db = SQLAlchemy()

@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def init_db(app):
    """Initialize database with application context"""
    with app.app_context():
        # Import all models to ensure they are registered
        from models import User, StudentProfile, SubjectMark, FacultySubjectAssignment

        # Create all tables
        db.create_all()

        # Create default admin user if not exists
        create_default_admin_user()

def create_default_admin_user():
    """Create default admin user for initial access"""
    from models.user import User

    existing_user = User.query.filter_by(email='admin@example.com').first()

    if not existing_user:
        default_user = User(
            email='admin@example.com',
            name='Admin User',
            role=User.ROLE_ADMIN,
            status=User.STATUS_ACTIVE
        )
        default_user.set_password('admin123')

        try:
            db.session.add(default_user)
            db.session.commit()
            print("Default admin user created: admin@example.com/admin123")
        except Exception as e:
            db.session.rollback()
            print(f"Error creating default user: {e}")

def reset_database(app):
    """Reset database - WARNING: This will delete all data"""
    with app.app_context():
        db.drop_all()
        db.create_all()
        create_default_admin_user()
        print("Database reset completed!")

class DatabaseError(Exception):
    """Custom exception for database operations"""
    pass
