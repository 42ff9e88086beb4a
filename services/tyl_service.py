"""
TYL service for the Academic Records Portal
Fetches TYL marks for scoped cohorts and builds the analysis views
"""

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from database import DatabaseError
from models.user import User
from models.student import StudentProfile
from models.marks import SubjectMark
from services.tyl_rules import DEFAULT_TYL_CONFIG, is_tyl_subject, normalize_subject_code, describe_threshold
from services.tyl_evaluator import (
    SCOPE_ALL_HISTORY, StudentMarks, semester_filter_for_scope, combined_score,
    threshold_for, evaluate_student, student_levels
)
from services.tyl_cohort import summarize_cohort
from utils.sorting_helpers import SortingHelpers

ANALYSIS_DEPARTMENT = 'department'
ANALYSIS_SECTION = 'section'
ANALYSIS_BATCH = 'batch'
ANALYSIS_TYPES = (ANALYSIS_DEPARTMENT, ANALYSIS_SECTION, ANALYSIS_BATCH)


class TYLDataError(DatabaseError):
    """Raised when TYL data cannot be loaded from the database"""
    pass


class TYLService:
    """TYL analysis service class"""

    @staticmethod
    def get_config():
        """Rule tables for the current application, honouring the strict-code setting"""
        if current_app.config.get('TYL_STRICT_SUBJECT_CODES'):
            return DEFAULT_TYL_CONFIG.with_strict()
        return DEFAULT_TYL_CONFIG

    @staticmethod
    def fetch_all_tyl_marks(scope, department=None, section=None, year=None, semester=None):
        """
        Active students matching the profile filters, each with their TYL marks.

        Profiles are filtered by department, section and year only; the
        current semester is never used, so promoted students keep their
        earlier marks. Marks are narrowed to one semester only when scope is
        SCOPE_SPECIFIC_SEMESTER.
        """
        semester_filter = semester_filter_for_scope(scope, semester)

        try:
            active_student_ids = User.get_active_student_ids()
            if not active_student_ids:
                return []

            query = StudentProfile.query.filter(StudentProfile.user_id.in_(active_student_ids))
            if department:
                query = query.filter_by(department=department)
            if section:
                query = query.filter_by(section=section)
            if year:
                query = query.filter_by(year=int(year))

            profiles = SortingHelpers.sort_profiles(query.all())
            if not profiles:
                return []

            marks = SubjectMark.get_student_marks([p.user_id for p in profiles], semester_filter)

            marks_by_student = {}
            for mark in marks:
                if not is_tyl_subject(normalize_subject_code(mark.subject_code)):
                    continue
                marks_by_student.setdefault(mark.student_id, []).append(mark)

            return [
                StudentMarks(profile, marks_by_student.get(profile.user_id, []))
                for profile in profiles
            ]
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error fetching TYL marks: {e}")
            raise TYLDataError("Failed to fetch TYL marks data.") from e

    @staticmethod
    def calculate_tyl_analysis(department=None, section=None, year=None):
        """Cohort summary for one scope, always computed over all semesters"""
        data = TYLService.fetch_all_tyl_marks(
            SCOPE_ALL_HISTORY,
            department=department,
            section=section,
            year=year
        )
        return summarize_cohort(data, department, section, year, TYLService.get_config())

    @staticmethod
    def department_analysis():
        """One summary per configured department"""
        return [
            TYLService.calculate_tyl_analysis(department=department)
            for department in current_app.config['DEPARTMENTS']
        ]

    @staticmethod
    def section_analysis(department):
        """One summary per section of a department"""
        return [
            TYLService.calculate_tyl_analysis(department=department, section=section)
            for section in current_app.config['SECTIONS']
        ]

    @staticmethod
    def batch_analysis(department):
        """One summary per year (batch) of a department"""
        return [
            TYLService.calculate_tyl_analysis(department=department, year=year)
            for year in current_app.config['YEARS']
        ]

    @staticmethod
    def run_analysis(analysis_type, department=None):
        """Dispatch to the department, section or batch analysis"""
        if analysis_type not in ANALYSIS_TYPES:
            raise ValueError(f"Unknown analysis type: {analysis_type}")
        if analysis_type == ANALYSIS_DEPARTMENT:
            return TYLService.department_analysis()
        if not department:
            # Section and batch views are per department
            return []
        if analysis_type == ANALYSIS_SECTION:
            return TYLService.section_analysis(department)
        return TYLService.batch_analysis(department)

    @staticmethod
    def fetch_raw_tyl_marks(subject_code=None, department=None, section=None, year=None):
        """Flat list of TYL marks with totals and pass/fail, across all semesters"""
        config = TYLService.get_config()
        data = TYLService.fetch_all_tyl_marks(
            SCOPE_ALL_HISTORY,
            department=department,
            section=section,
            year=year
        )
        wanted_code = normalize_subject_code(subject_code)

        rows = []
        for profile, marks in data:
            for mark in marks:
                code = normalize_subject_code(mark.subject_code)
                if wanted_code and code != wanted_code:
                    continue
                total = combined_score(mark)
                passing_marks = threshold_for(code, config)
                rows.append({
                    'usn': mark.usn or profile.admission_id,
                    'student_name': mark.student_name or profile.full_name,
                    'department': profile.department,
                    'section': profile.section,
                    'subject_code': mark.subject_code,
                    'subject_name': mark.subject_name,
                    'semester': mark.semester,
                    'ia1_50': mark.ia1_50,
                    'ia2_50': mark.ia2_50,
                    'total': total,
                    'passing_marks': passing_marks,
                    'threshold_known': describe_threshold(code, config=config)[1],
                    'passed': total >= passing_marks,
                })

        return SortingHelpers.sort_mark_rows(rows)

    @staticmethod
    def get_student_tyl_report(user_id):
        """Per-subject results and levels reached for one student, or None if no profile"""
        try:
            profile = StudentProfile.query.filter_by(user_id=user_id).first()
            if not profile:
                return None
            marks = [
                mark for mark in profile.get_marks()
                if is_tyl_subject(normalize_subject_code(mark.subject_code))
            ]
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error fetching TYL report for student {user_id}: {e}")
            raise TYLDataError("Failed to fetch TYL marks data.") from e

        config = TYLService.get_config()
        return {
            'profile': profile.to_dict(),
            'subjects': evaluate_student(marks, config),
            'levels': student_levels(marks, config),
        }
