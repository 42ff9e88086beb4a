"""
Assignment models for the Academic Records Portal
FacultySubjectAssignment model for faculty-subject-class relationships
"""

from database import db
from datetime import datetime

class FacultySubjectAssignment(db.Model):
    """Subject taught by a faculty member for one semester and section"""
    __tablename__ = 'faculty_subject_assignment'

    id = db.Column(db.Integer, primary_key=True)
    faculty_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    subject_code = db.Column(db.String(20), nullable=False)
    subject_name = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    section = db.Column(db.String(5), nullable=False)
    assigned_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Unique constraint to prevent duplicate assignments
    __table_args__ = (db.UniqueConstraint('faculty_id', 'subject_code', 'semester', 'section', name='unique_faculty_subject_class'),)

    @staticmethod
    def for_class(faculty_id, semester, section):
        """Assignments of a faculty member for one semester and section"""
        return FacultySubjectAssignment.query.filter_by(
            faculty_id=faculty_id,
            semester=semester,
            section=section
        ).order_by(FacultySubjectAssignment.subject_code.asc()).all()

    def to_dict(self):
        """Convert assignment to dictionary"""
        return {
            'id': self.id,
            'faculty_id': self.faculty_id,
            'faculty_name': self.faculty.name if self.faculty else None,
            'subject_code': self.subject_code,
            'subject_name': self.subject_name,
            'semester': self.semester,
            'section': self.section,
            'assigned_at': self.assigned_at.isoformat() if self.assigned_at else None
        }

    def __repr__(self):
        faculty_name = self.faculty.name if self.faculty else "Unknown"
        return f'<FacultySubjectAssignment {faculty_name} -> {self.subject_code} (sem {self.semester}{self.section})>'
