"""
User models for the Academic Records Portal
Single user table covering students, faculty and admins
"""

from database import db
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash

class User(db.Model):
    """Portal user with a role and an approval status"""
    __tablename__ = 'user'

    ROLE_STUDENT = 'Student'
    ROLE_FACULTY = 'Faculty'
    ROLE_ADMIN = 'Admin'
    ROLES = (ROLE_STUDENT, ROLE_FACULTY, ROLE_ADMIN)

    STATUS_PENDING = 'PendingApproval'
    STATUS_ACTIVE = 'Active'
    STATUS_REJECTED = 'Rejected'
    STATUS_DISABLED = 'Disabled'
    STATUSES = (STATUS_PENDING, STATUS_ACTIVE, STATUS_REJECTED, STATUS_DISABLED)

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_STUDENT)
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    # Relationships
    profile = db.relationship('StudentProfile', backref='user', uselist=False)
    subject_assignments = db.relationship('FacultySubjectAssignment', backref='faculty', lazy='dynamic')

    def set_password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password against hash"""
        return check_password_hash(self.password_hash, password)

    def update_last_login(self):
        """Update last login timestamp"""
        self.last_login = datetime.utcnow()
        db.session.commit()

    @property
    def is_active(self):
        return self.status == User.STATUS_ACTIVE

    def is_student(self):
        return self.role == User.ROLE_STUDENT

    def is_faculty(self):
        return self.role == User.ROLE_FACULTY

    def is_admin(self):
        return self.role == User.ROLE_ADMIN

    @staticmethod
    def get_active_student_ids():
        """Ids of every student account that is currently active"""
        rows = db.session.query(User.id).filter_by(
            role=User.ROLE_STUDENT,
            status=User.STATUS_ACTIVE
        ).all()
        return [row[0] for row in rows]

    def to_dict(self):
        """Convert user to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'last_login': self.last_login.isoformat() if self.last_login else None
        }

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
