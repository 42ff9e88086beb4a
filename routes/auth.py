"""
Authentication routes for the Academic Records Portal
Handles login, logout, and authentication redirects
"""

from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from models.user import User
from services.auth_service import AuthService, SessionManager
from utils.validators import validate_email, validate_password

auth_bp = Blueprint('auth', __name__)

DASHBOARDS = {
    User.ROLE_ADMIN: 'admin.dashboard',
    User.ROLE_FACULTY: 'faculty.dashboard',
    User.ROLE_STUDENT: 'student.dashboard',
}

def _dashboard_for(role):
    return url_for(DASHBOARDS.get(role, 'auth.index'))

@auth_bp.route('/')
def index():
    """Landing page with the login form"""
    if SessionManager.is_authenticated(session):
        return redirect(_dashboard_for(session.get('role')))

    return render_template('auth/index.html')

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login page and handler for all roles"""
    if SessionManager.is_authenticated(session):
        return redirect(_dashboard_for(session.get('role')))

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Email and password are required', 'error')
            return render_template('auth/index.html')

        is_valid, message = validate_email(email)
        if not is_valid:
            flash(message, 'error')
            return render_template('auth/index.html')

        success, user, message = AuthService.authenticate(email, password)

        if success:
            SessionManager.create_session(session, user)
            flash('Login successful', 'success')
            return redirect(_dashboard_for(user.role))
        flash(message, 'error')

    return render_template('auth/index.html')

@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Logout handler for all roles"""
    SessionManager.clear_session(session)
    flash('You have been logged out successfully', 'success')
    return redirect(url_for('auth.index'))

@auth_bp.route('/change-password', methods=['POST'])
def change_password():
    """Change password for authenticated users"""
    if not SessionManager.is_authenticated(session):
        flash('Please log in to change your password', 'error')
        return redirect(url_for('auth.index'))

    current_password = request.form.get('current_password', '')
    new_password = request.form.get('new_password', '')
    confirm_password = request.form.get('confirm_password', '')

    if not all([current_password, new_password, confirm_password]):
        flash('All password fields are required', 'error')
    elif new_password != confirm_password:
        flash('New passwords do not match', 'error')
    else:
        is_valid, message = validate_password(new_password)
        if is_valid:
            success, message = AuthService.change_password(
                SessionManager.get_current_user_id(session), current_password, new_password
            )
            flash(message, 'success' if success else 'error')
        else:
            flash(message, 'error')

    return redirect(_dashboard_for(session.get('role')))

# Authentication decorator
def login_required(role=None):
    """Decorator to require authentication, optionally with a specific role"""
    def decorator(f):
        def decorated_function(*args, **kwargs):
            if not SessionManager.is_authenticated(session):
                flash('Please log in to access this page', 'error')
                return redirect(url_for('auth.index'))

            if role and not SessionManager.has_role(session, role):
                flash(f'Access denied. {role} login required.', 'error')
                return redirect(url_for('auth.index'))

            return f(*args, **kwargs)

        decorated_function.__name__ = f.__name__
        return decorated_function
    return decorator

# Context processor to make session info available in templates
@auth_bp.app_context_processor
def inject_user():
    """Inject user information into template context"""
    return {
        'current_user': SessionManager.get_session_info(session),
        'is_authenticated': SessionManager.is_authenticated(session),
    }
