"""
Authentication service for the Academic Records Portal
Handles login and session utilities
"""

from sqlalchemy import func
from models.user import User
from database import db
from datetime import datetime

class AuthService:
    """Authentication service class"""

    @staticmethod
    def authenticate(email, password):
        """Authenticate a user by email. Returns (success, user, message)."""
        normalized = (email or '').strip()
        user = User.query.filter(func.lower(User.email) == func.lower(normalized)).first()

        if not user or not user.check_password(password or ''):
            return False, None, "Invalid email or password"

        if user.status == User.STATUS_PENDING:
            return False, None, "Your account is awaiting approval"
        if not user.is_active:
            return False, None, "Your account is not active"

        user.update_last_login()
        return True, user, "Login successful"

    @staticmethod
    def change_password(user_id, old_password, new_password):
        """Change user password"""
        user = db.session.get(User, user_id)
        if not user:
            return False, "User not found"

        if not user.check_password(old_password):
            return False, "Current password is incorrect"

        user.set_password(new_password)
        db.session.commit()
        return True, "Password changed successfully"

class SessionManager:
    """Session management utilities"""

    @staticmethod
    def create_session(session, user):
        """Create user session"""
        session['user_id'] = user.id
        session['role'] = user.role
        session['name'] = user.name
        session['login_time'] = datetime.utcnow().isoformat()
        session.permanent = True

    @staticmethod
    def clear_session(session):
        """Clear user session"""
        session.clear()

    @staticmethod
    def is_authenticated(session):
        """Check if user is authenticated"""
        return 'role' in session and 'user_id' in session

    @staticmethod
    def has_role(session, role):
        """Check the role of the current user"""
        return session.get('role') == role

    @staticmethod
    def get_current_user_id(session):
        """Get current user ID from session"""
        return session.get('user_id')

    @staticmethod
    def get_session_info(session):
        """Get complete session information"""
        if not SessionManager.is_authenticated(session):
            return None

        return {
            'user_id': session.get('user_id'),
            'role': session.get('role'),
            'name': session.get('name'),
            'login_time': session.get('login_time')
        }
