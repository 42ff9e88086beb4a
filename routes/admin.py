"""
Admin routes for the Academic Records Portal
Handles user setup, subject assignment and semester promotion
"""

from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from routes.auth import login_required
from models.user import User
from models.student import StudentProfile
from models.assignments import FacultySubjectAssignment
from services.admin_service import AdminService

admin_bp = Blueprint('admin', __name__)

@admin_bp.route('/dashboard')
@login_required(User.ROLE_ADMIN)
def dashboard():
    """Admin dashboard with overview counts"""
    stats = {
        'total_students': StudentProfile.query.count(),
        'total_faculty': User.query.filter_by(role=User.ROLE_FACULTY).count(),
        'pending_users': User.query.filter_by(status=User.STATUS_PENDING).count(),
        'total_assignments': FacultySubjectAssignment.query.count(),
    }
    faculty = User.query.filter_by(role=User.ROLE_FACULTY).order_by(User.name.asc()).all()
    return render_template(
        'admin/dashboard.html',
        stats=stats,
        faculty=faculty,
        departments=current_app.config['DEPARTMENTS'],
        sections=current_app.config['SECTIONS']
    )

@admin_bp.route('/users/add', methods=['POST'])
@login_required(User.ROLE_ADMIN)
def add_user():
    """Create a student, faculty or admin account"""
    success, message = AdminService.create_user(request.form.to_dict())
    flash(message, 'success' if success else 'error')
    return redirect(url_for('admin.dashboard'))

@admin_bp.route('/assignments/add', methods=['POST'])
@login_required(User.ROLE_ADMIN)
def add_assignment():
    """Assign a subject to a faculty member"""
    success, message = AdminService.assign_subject_to_faculty(request.form.to_dict())
    flash(message, 'success' if success else 'error')
    return redirect(url_for('admin.dashboard'))

@admin_bp.route('/promote-students', methods=['POST'])
@login_required(User.ROLE_ADMIN)
def promote_students():
    """Promote students to their next semester"""
    success, message, _ = AdminService.promote_students(
        department=request.form.get('department') or None,
        section=request.form.get('section') or None
    )
    flash(message, 'success' if success else 'error')
    return redirect(url_for('admin.dashboard'))
