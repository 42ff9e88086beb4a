"""
Database models package for the Academic Records Portal
"""

from .user import User
from .student import StudentProfile
from .marks import SubjectMark
from .assignments import FacultySubjectAssignment

__all__ = [
    'User', 'StudentProfile', 'SubjectMark', 'FacultySubjectAssignment'
]
