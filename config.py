"""
Configuration settings for the Academic Records Portal
"""

import os
from datetime import timedelta

class Config:
    """Base configuration class"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'academic-records-secret-key-2024'

    # Database settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///academic_records.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session settings
    PERMANENT_SESSION_LIFETIME = timedelta(hours=2)
    SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Academic structure
    DEPARTMENTS = ["Computer Science", "Electronics", "Mechanical", "Civil", "Electrical"]
    SECTIONS = ["A", "B", "C", "D"]
    YEARS = [1, 2, 3, 4]
    MAX_SEMESTER = 8

    # TYL settings
    # When True, subject codes outside the threshold table raise instead of using the default
    TYL_STRICT_SUBJECT_CODES = os.environ.get('TYL_STRICT_SUBJECT_CODES', '').lower() in ('1', 'true', 'yes')

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None


class TestingConfig(Config):
    """Configuration used by the test suite"""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
