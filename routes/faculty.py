"""
Faculty portal routes for the Academic Records Portal
Handles TYL marks entry, TYL analysis and report exports
"""

from flask import Blueprint, render_template, request, session, jsonify, make_response, current_app
from routes.auth import login_required
from models.user import User
from models.assignments import FacultySubjectAssignment
from services.marks_service import MarksService
from services.tyl_service import TYLService, TYLDataError, ANALYSIS_DEPARTMENT, ANALYSIS_SECTION, ANALYSIS_BATCH
from services.excel_export_service import ExcelExportService
from services.reporting_service import ReportingService
from services.tyl_rules import UnknownSubjectCodeError

faculty_bp = Blueprint('faculty', __name__)

SCOPE_TITLES = {
    ANALYSIS_DEPARTMENT: 'Department',
    ANALYSIS_SECTION: 'Section',
    ANALYSIS_BATCH: 'Year',
}

def _error(message, status):
    return jsonify({'success': False, 'message': message}), status

def _attachment(content, mimetype, filename):
    response = make_response(content)
    response.headers['Content-Type'] = mimetype
    response.headers['Content-Disposition'] = f'attachment; filename={filename}'
    return response

def _load_analysis():
    analysis_type = request.args.get('type', ANALYSIS_DEPARTMENT)
    department = request.args.get('department') or None
    return analysis_type, TYLService.run_analysis(analysis_type, department)

@faculty_bp.route('/dashboard')
@login_required(User.ROLE_FACULTY)
def dashboard():
    """Faculty dashboard listing assigned subjects"""
    faculty_id = session.get('user_id')
    assignments = FacultySubjectAssignment.query.filter_by(faculty_id=faculty_id).order_by(
        FacultySubjectAssignment.semester.asc(),
        FacultySubjectAssignment.section.asc(),
        FacultySubjectAssignment.subject_code.asc()
    ).all()
    return render_template('faculty/dashboard.html', assignments=assignments)

@faculty_bp.route('/tyl-marks-entry/subjects')
@login_required(User.ROLE_FACULTY)
def tyl_subjects():
    """TYL subjects assigned to the faculty member for a class"""
    semester = request.args.get('semester', type=int)
    section = request.args.get('section', '').strip().upper()
    if not semester or not section:
        return _error('Semester and section are required', 400)

    assignments = MarksService.get_faculty_tyl_assignments(session.get('user_id'), semester, section)
    return jsonify({
        'success': True,
        'subjects': [{'code': a.subject_code, 'name': a.subject_name} for a in assignments]
    })

@faculty_bp.route('/tyl-marks-entry/students')
@login_required(User.ROLE_FACULTY)
def tyl_marks_entry_students():
    """Students of a class with their existing marks for one TYL subject"""
    semester = request.args.get('semester', type=int)
    section = request.args.get('section', '').strip().upper()
    subject_code = request.args.get('subject_code', '').strip()
    if not semester or not section or not subject_code:
        return _error('Semester, section and subject code are required', 400)

    students = MarksService.fetch_students_for_marks_entry(semester, section, subject_code)
    return jsonify({
        'success': True,
        'students': [
            {
                'profile': item['profile'].to_dict(),
                'marks': item['marks'].to_dict() if item['marks'] else None
            }
            for item in students
        ]
    })

@faculty_bp.route('/tyl-marks-entry', methods=['POST'])
@login_required(User.ROLE_FACULTY)
def save_tyl_marks():
    """Save TYL marks for a class"""
    payload = request.get_json(silent=True) or {}
    semester = payload.get('semester')
    section = (payload.get('section') or '').strip().upper()
    subject_code = (payload.get('subject_code') or '').strip()
    if not semester or not section or not subject_code:
        return _error('Semester, section and subject code are required', 400)

    try:
        semester = int(semester)
    except (TypeError, ValueError):
        return _error('Semester must be a number', 400)

    success, message, errors = MarksService.save_tyl_marks(
        payload.get('entries'), session.get('user_id'), semester, section, subject_code
    )
    return jsonify({'success': success, 'message': message, 'errors': errors}), (200 if success else 400)

@faculty_bp.route('/tyl-analysis')
@login_required(User.ROLE_FACULTY)
def tyl_analysis():
    """Department, section or batch-wise TYL analysis"""
    try:
        analysis_type, summaries = _load_analysis()
    except ValueError as e:
        return _error(str(e), 400)
    except TYLDataError as e:
        return _error(str(e), 500)

    return jsonify({'success': True, 'analysis_type': analysis_type, 'rows': summaries})

@faculty_bp.route('/tyl-analysis/raw')
@login_required(User.ROLE_FACULTY)
def raw_tyl_marks():
    """Raw TYL marks for one subject across all semesters"""
    subject_code = request.args.get('subject_code', '').strip()
    if not subject_code:
        return _error('Subject code is required', 400)

    try:
        rows = TYLService.fetch_raw_tyl_marks(
            subject_code=subject_code,
            department=request.args.get('department') or None,
            section=request.args.get('section') or None,
            year=request.args.get('year', type=int)
        )
    except UnknownSubjectCodeError as e:
        return _error(str(e), 400)
    except TYLDataError as e:
        return _error(str(e), 500)

    if request.args.get('format') == 'excel':
        return _attachment(
            ExcelExportService.export_raw_tyl_marks(rows),
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            f'tyl_marks_{subject_code.lower()}.xlsx'
        )
    return jsonify({'success': True, 'rows': rows})

@faculty_bp.route('/tyl-analysis/export/<string:file_format>')
@login_required(User.ROLE_FACULTY)
def export_tyl_analysis(file_format):
    """Download the TYL analysis as Excel or PDF"""
    if file_format not in ('excel', 'pdf'):
        return _error('Export format must be excel or pdf', 400)

    try:
        analysis_type, summaries = _load_analysis()
    except ValueError as e:
        return _error(str(e), 400)
    except TYLDataError as e:
        return _error(str(e), 500)

    scope_title = SCOPE_TITLES[analysis_type]
    current_app.logger.info(f"Exporting {analysis_type} TYL analysis as {file_format}")
    if file_format == 'excel':
        return _attachment(
            ExcelExportService.export_tyl_analysis(summaries, scope_title),
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            f'tyl_analysis_{analysis_type}.xlsx'
        )
    return _attachment(
        ReportingService.generate_tyl_analysis_pdf(summaries, scope_title),
        'application/pdf',
        f'tyl_analysis_{analysis_type}.pdf'
    )

@faculty_bp.route('/students/<int:user_id>/tyl-report')
@login_required(User.ROLE_FACULTY)
def student_tyl_report(user_id):
    """TYL results and levels reached for one student"""
    try:
        report = TYLService.get_student_tyl_report(user_id)
    except UnknownSubjectCodeError as e:
        return _error(str(e), 400)
    except TYLDataError as e:
        return _error(str(e), 500)

    if report is None:
        return _error('Student profile not found', 404)

    if request.args.get('format') == 'pdf':
        return _attachment(
            ReportingService.generate_student_tyl_report_pdf(report),
            'application/pdf',
            f"tyl_report_{report['profile']['admission_id']}.pdf"
        )
    return jsonify({'success': True, 'report': report})
