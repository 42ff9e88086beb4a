"""
Admin service for the Academic Records Portal
Business logic for user setup, subject assignment and semester promotion
"""

from flask import current_app
from models.user import User
from models.student import StudentProfile
from models.assignments import FacultySubjectAssignment
from database import db
from utils.db_helpers import safe_add_and_commit, safe_update_and_commit
from utils.validators import (
    validate_email, validate_name, validate_password, validate_admission_id,
    validate_subject_code, validate_semester, validate_section
)

class AdminService:
    """Admin service class"""

    @staticmethod
    def create_user(user_data):
        """Create a user, plus a student profile for students. Returns (success, message)."""
        email = (user_data.get('email') or '').strip().lower()
        name = (user_data.get('name') or '').strip()
        password = user_data.get('password') or ''
        role = user_data.get('role') or User.ROLE_STUDENT
        status = user_data.get('status') or User.STATUS_ACTIVE

        for is_valid, message in (validate_email(email), validate_name(name), validate_password(password)):
            if not is_valid:
                return False, message

        if role not in User.ROLES:
            return False, f"Role must be one of: {', '.join(User.ROLES)}"
        if status not in User.STATUSES:
            return False, f"Status must be one of: {', '.join(User.STATUSES)}"

        if User.query.filter_by(email=email).first():
            return False, "A user with this email already exists"

        user = User(email=email, name=name, role=role, status=status)
        user.set_password(password)

        if role == User.ROLE_STUDENT:
            admission_id = (user_data.get('admission_id') or '').strip().upper()
            is_valid, message = validate_admission_id(admission_id)
            if not is_valid:
                return False, message

            semester = user_data.get('current_semester') or 1
            is_valid, message = validate_semester(semester)
            if not is_valid:
                return False, message

            section = (user_data.get('section') or '').strip().upper()
            is_valid, message = validate_section(section, current_app.config['SECTIONS'])
            if not is_valid:
                return False, message

            department = user_data.get('department')
            if department not in current_app.config['DEPARTMENTS']:
                return False, "Department is not recognised"

            if StudentProfile.query.filter_by(admission_id=admission_id).first():
                return False, "A student with this USN already exists"

            user.profile = StudentProfile(
                admission_id=admission_id,
                full_name=name,
                department=department,
                current_semester=int(semester),
                year=StudentProfile.year_for_semester(semester),
                section=section
            )

        success, message = safe_add_and_commit(user)
        if success:
            return True, f"{role} account created for {name}"
        return False, message

    @staticmethod
    def assign_subject_to_faculty(assignment_data):
        """Assign a subject for one semester and section to a faculty member"""
        try:
            faculty_id = int(assignment_data.get('faculty_id'))
        except (TypeError, ValueError):
            return False, "Faculty is required"

        faculty = db.session.get(User, faculty_id)
        if not faculty or not faculty.is_faculty():
            return False, "Faculty member not found"

        subject_code = (assignment_data.get('subject_code') or '').strip()
        subject_name = (assignment_data.get('subject_name') or '').strip()
        semester = assignment_data.get('semester')
        section = (assignment_data.get('section') or '').strip().upper()

        is_valid, message = validate_subject_code(subject_code)
        if not is_valid:
            return False, message
        if not subject_name:
            return False, "Subject name is required"
        is_valid, message = validate_semester(semester)
        if not is_valid:
            return False, message
        is_valid, message = validate_section(section, current_app.config['SECTIONS'])
        if not is_valid:
            return False, message

        assignment = FacultySubjectAssignment(
            faculty_id=faculty_id,
            subject_code=subject_code,
            subject_name=subject_name,
            semester=int(semester),
            section=section
        )
        success, message = safe_add_and_commit(assignment)
        if success:
            return True, f"{subject_code} assigned to {faculty.name}"
        if message == "Record with this identifier already exists":
            return False, "This subject is already assigned to the faculty member for that class"
        return False, message

    @staticmethod
    def promote_students(department=None, section=None):
        """
        Move matching students to their next semester.
        Mark records are left untouched. Returns (success, message, promoted_count).
        """
        query = StudentProfile.query
        if department:
            query = query.filter_by(department=department)
        if section:
            query = query.filter_by(section=section)

        promoted = 0
        for profile in query.all():
            if profile.promote_to_next_semester():
                promoted += 1

        success, message = safe_update_and_commit()
        if not success:
            return False, message, 0

        current_app.logger.info(f"Promoted {promoted} students (department={department}, section={section})")
        return True, f"Promoted {promoted} students to the next semester", promoted
