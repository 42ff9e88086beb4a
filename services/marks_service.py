"""
Marks service for the Academic Records Portal
Business logic for faculty marks entry
"""

from flask import current_app
from models.user import User
from models.student import StudentProfile
from models.marks import SubjectMark
from models.assignments import FacultySubjectAssignment
from database import db
from services.tyl_rules import is_tyl_subject, normalize_subject_code
from utils.db_helpers import safe_update_and_commit
from utils.sorting_helpers import SortingHelpers
from utils.validators import (
    validate_admission_id, validate_subject_code, validate_semester, validate_optional_score
)

SCORE_FIELDS = (
    ('ia1_50', SubjectMark.IA_MAX, 'IA 1'),
    ('ia2_50', SubjectMark.IA_MAX, 'IA 2'),
    ('assignment1_20', SubjectMark.ASSIGNMENT_MAX, 'Assignment 1'),
    ('assignment2_20', SubjectMark.ASSIGNMENT_MAX, 'Assignment 2'),
)

REQUIRED_TEXT_FIELDS = (
    ('usn', 'USN'),
    ('student_name', 'Student name'),
    ('subject_code', 'Subject code'),
    ('subject_name', 'Subject name'),
)


def _to_score(value):
    if value is None or value == "":
        return None
    return float(value)


class MarksService:
    """Marks entry service class"""

    @staticmethod
    def validate_mark_entry(entry):
        """
        Validate a single mark entry.
        Returns (is_valid, errors) where errors maps field name to message.
        """
        errors = {}

        try:
            student_id = int(entry.get('student_id'))
            if student_id < 1:
                errors['student_id'] = "Student ID is required"
        except (TypeError, ValueError):
            errors['student_id'] = "Student ID is required"

        for field, label in REQUIRED_TEXT_FIELDS:
            value = entry.get(field)
            if value is None or len(str(value).strip()) == 0:
                errors[field] = f"{label} is required"

        if 'usn' not in errors:
            is_valid, message = validate_admission_id(str(entry.get('usn')).strip())
            if not is_valid:
                errors['usn'] = message

        if 'subject_code' not in errors:
            is_valid, message = validate_subject_code(str(entry.get('subject_code')).strip())
            if not is_valid:
                errors['subject_code'] = message

        is_valid, message = validate_semester(entry.get('semester'))
        if not is_valid:
            errors['semester'] = message

        for field, max_marks, label in SCORE_FIELDS:
            is_valid, message = validate_optional_score(entry.get(field), max_marks, label)
            if not is_valid:
                errors[field] = message

        return len(errors) == 0, errors

    @staticmethod
    def save_multiple_student_marks(marks_entries, faculty_id):
        """
        Save or update marks for multiple students.
        Invalid entries are skipped and reported; returns (success, message, errors).
        """
        if not marks_entries:
            return False, "No marks data provided.", None

        current_app.logger.info(f"Saving {len(marks_entries)} student marks entries by faculty {faculty_id}")

        validation_errors = []
        saved_count = 0

        for entry in marks_entries:
            is_valid, errors = MarksService.validate_mark_entry(entry)
            if not is_valid:
                current_app.logger.warning(f"Invalid mark entry skipped for {entry.get('usn') or 'unknown USN'}: {errors}")
                validation_errors.append({'usn': entry.get('usn') or 'Unknown USN', 'errors': errors})
                continue

            student_id = int(entry['student_id'])
            subject_code = str(entry['subject_code']).strip()
            semester = int(entry['semester'])
            scores = {field: _to_score(entry.get(field)) for field, _, _ in SCORE_FIELDS}

            existing = SubjectMark.query.filter_by(
                student_id=student_id,
                subject_code=subject_code,
                semester=semester
            ).first()

            if existing:
                existing.usn = str(entry['usn']).strip()
                existing.student_name = str(entry['student_name']).strip()
                existing.subject_name = str(entry['subject_name']).strip()
                existing.update_scores(**scores)
            else:
                db.session.add(SubjectMark(
                    student_id=student_id,
                    usn=str(entry['usn']).strip(),
                    student_name=str(entry['student_name']).strip(),
                    subject_code=subject_code,
                    subject_name=str(entry['subject_name']).strip(),
                    semester=semester,
                    **scores
                ))
            saved_count += 1

        if saved_count == 0 and validation_errors:
            return False, "All mark entries were invalid. No data saved.", validation_errors
        if saved_count == 0:
            return True, "No valid marks entries to save.", None

        success, message = safe_update_and_commit()
        if not success:
            current_app.logger.error(f"Error saving marks: {message}")
            return False, f"An unexpected error occurred: {message}", [{'general': message}]

        current_app.logger.info(f"Saved {saved_count} marks records")
        message = f"Successfully saved/updated {saved_count} of {saved_count} student marks records."
        if validation_errors:
            message += f" {len(validation_errors)} entries had validation issues and were skipped."

        return True, message, validation_errors or None

    @staticmethod
    def get_faculty_tyl_assignments(faculty_id, semester, section):
        """TYL subjects a faculty member is assigned for one semester and section"""
        return [
            assignment for assignment in FacultySubjectAssignment.for_class(faculty_id, semester, section)
            if is_tyl_subject(normalize_subject_code(assignment.subject_code))
        ]

    @staticmethod
    def is_assigned(faculty_id, subject_code, semester, section):
        """Check if a faculty member teaches a subject for one semester and section"""
        return FacultySubjectAssignment.query.filter_by(
            faculty_id=faculty_id,
            subject_code=subject_code,
            semester=semester,
            section=section
        ).first() is not None

    @staticmethod
    def fetch_students_for_marks_entry(semester, section, subject_code):
        """
        Active students of a class (year derived from the semester) with their
        existing marks for one subject in that semester
        """
        year = StudentProfile.year_for_semester(semester)
        active_student_ids = User.get_active_student_ids()
        if not active_student_ids:
            return []

        profiles = StudentProfile.query.filter(
            StudentProfile.user_id.in_(active_student_ids),
            StudentProfile.year == year,
            StudentProfile.section == section
        ).all()
        if not profiles:
            return []

        marks = SubjectMark.query.filter(
            SubjectMark.student_id.in_([p.user_id for p in profiles]),
            SubjectMark.semester == semester,
            SubjectMark.subject_code == subject_code
        ).all()
        marks_by_student = {mark.student_id: mark for mark in marks}

        return [
            {'profile': profile, 'marks': marks_by_student.get(profile.user_id)}
            for profile in SortingHelpers.sort_profiles(profiles)
        ]

    @staticmethod
    def save_tyl_marks(marks_entries, faculty_id, semester, section, subject_code):
        """Save TYL marks for a class after checking the subject and the faculty assignment"""
        if not is_tyl_subject(normalize_subject_code(subject_code)):
            return False, f"{subject_code} is not a TYL subject", None

        if not MarksService.is_assigned(faculty_id, subject_code, semester, section):
            return False, "You are not assigned to this subject for the selected class", None

        entries = []
        for entry in marks_entries or []:
            entry = dict(entry)
            entry['subject_code'] = subject_code
            entry['semester'] = semester
            entries.append(entry)

        return MarksService.save_multiple_student_marks(entries, faculty_id)
