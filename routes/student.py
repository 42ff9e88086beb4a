"""
Student routes for the Academic Records Portal
"""

from flask import Blueprint, render_template, session, jsonify, flash
from routes.auth import login_required
from models.user import User
from services.tyl_service import TYLService, TYLDataError
from services.tyl_rules import UnknownSubjectCodeError

student_bp = Blueprint('student', __name__)

@student_bp.route('/dashboard')
@login_required(User.ROLE_STUDENT)
def dashboard():
    """Student dashboard with the TYL progress summary"""
    try:
        report = TYLService.get_student_tyl_report(session.get('user_id'))
    except (TYLDataError, UnknownSubjectCodeError) as e:
        flash(f'Error loading TYL report: {str(e)}', 'error')
        report = None
    return render_template('student/dashboard.html', report=report)

@student_bp.route('/tyl-report')
@login_required(User.ROLE_STUDENT)
def tyl_report():
    """The logged-in student's own TYL report"""
    try:
        report = TYLService.get_student_tyl_report(session.get('user_id'))
    except UnknownSubjectCodeError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    except TYLDataError as e:
        return jsonify({'success': False, 'message': str(e)}), 500

    if report is None:
        return jsonify({'success': False, 'message': 'Student profile not found'}), 404
    return jsonify({'success': True, 'report': report})
