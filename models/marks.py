"""
Marks models for the Academic Records Portal
SubjectMark model holding internal assessment and assignment scores
"""

from database import db
from datetime import datetime

class SubjectMark(db.Model):
    """Per-student, per-subject, per-semester score record"""
    __tablename__ = 'subject_mark'

    IA_MAX = 50
    ASSIGNMENT_MAX = 20

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    usn = db.Column(db.String(20), nullable=False)
    student_name = db.Column(db.String(100), nullable=False)
    subject_code = db.Column(db.String(20), nullable=False, index=True)
    subject_name = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    ia1_50 = db.Column(db.Float, nullable=True)
    ia2_50 = db.Column(db.Float, nullable=True)
    assignment1_20 = db.Column(db.Float, nullable=True)
    assignment2_20 = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # One record per student, subject and semester
    __table_args__ = (db.UniqueConstraint('student_id', 'subject_code', 'semester', name='unique_student_subject_semester'),)

    @property
    def record_key(self):
        """Composite identifier used by the marks entry screens"""
        return f'{self.student_id}-{self.subject_code}-{self.semester}'

    def has_internal_scores(self):
        """False when neither internal assessment has been entered"""
        return self.ia1_50 is not None or self.ia2_50 is not None

    def update_scores(self, ia1_50=None, ia2_50=None, assignment1_20=None, assignment2_20=None):
        """Overwrite all four score fields; None clears a field"""
        self.ia1_50 = ia1_50
        self.ia2_50 = ia2_50
        self.assignment1_20 = assignment1_20
        self.assignment2_20 = assignment2_20
        self.updated_at = datetime.utcnow()

    @staticmethod
    def get_student_marks(student_ids, semester=None):
        """All marks for the given students, optionally narrowed to one semester"""
        if not student_ids:
            return []
        query = SubjectMark.query.filter(SubjectMark.student_id.in_(student_ids))
        if semester is not None:
            query = query.filter(SubjectMark.semester == semester)
        return query.all()

    def to_dict(self):
        """Convert marks to dictionary"""
        return {
            'id': self.record_key,
            'student_id': self.student_id,
            'usn': self.usn,
            'student_name': self.student_name,
            'subject_code': self.subject_code,
            'subject_name': self.subject_name,
            'semester': self.semester,
            'ia1_50': self.ia1_50,
            'ia2_50': self.ia2_50,
            'assignment1_20': self.assignment1_20,
            'assignment2_20': self.assignment2_20,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<SubjectMark {self.usn} - {self.subject_code} - sem {self.semester}: {self.ia1_50}/{self.ia2_50}>'
