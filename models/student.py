"""
Student models for the Academic Records Portal
StudentProfile model
"""

from database import db
from datetime import datetime
import math

class StudentProfile(db.Model):
    """Academic profile attached to a student user"""
    __tablename__ = 'student_profile'

    MAX_SEMESTER = 8

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)
    admission_id = db.Column(db.String(20), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(100), nullable=False)
    department = db.Column(db.String(100), nullable=False, index=True)
    year = db.Column(db.Integer, nullable=False, default=1)
    current_semester = db.Column(db.Integer, nullable=False, default=1)
    section = db.Column(db.String(5), nullable=False)
    contact_number = db.Column(db.String(15), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @staticmethod
    def year_for_semester(semester):
        """Academic year a semester belongs to (1-2 -> 1, 3-4 -> 2, ...)"""
        return int(math.ceil(int(semester) / 2))

    def promote_to_next_semester(self):
        """Promote student to next semester. Returns False when already in the final semester."""
        if self.current_semester >= self.MAX_SEMESTER:
            return False
        self.current_semester += 1
        self.year = StudentProfile.year_for_semester(self.current_semester)
        return True

    def get_marks(self):
        """Every mark record of this student across all semesters"""
        from models.marks import SubjectMark
        return SubjectMark.query.filter_by(student_id=self.user_id).all()

    def to_dict(self):
        """Convert profile to dictionary"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'admission_id': self.admission_id,
            'full_name': self.full_name,
            'department': self.department,
            'year': self.year,
            'current_semester': self.current_semester,
            'section': self.section,
            'contact_number': self.contact_number,
            'date_of_birth': self.date_of_birth.isoformat() if self.date_of_birth else None
        }

    def __repr__(self):
        return f'<StudentProfile {self.admission_id}: {self.full_name}>'
