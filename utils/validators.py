"""
Validation utilities for the Academic Records Portal
"""

import math
import re

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

def validate_email(email):
    """Validate email address format"""
    if not email or len(email.strip()) == 0:
        return False, "Email is required"

    if len(email) > 120:
        return False, "Email must be 120 characters or less"

    if not EMAIL_PATTERN.match(email.strip()):
        return False, "Email address is not valid"

    return True, "Valid email"

def validate_admission_id(admission_id):
    """Validate student admission id / USN format"""
    if not admission_id or len(admission_id.strip()) == 0:
        return False, "USN is required"

    if len(admission_id) > 20:
        return False, "USN must be 20 characters or less"

    # Allow alphanumeric and some special characters
    if not re.match(r'^[A-Za-z0-9_-]+$', admission_id):
        return False, "USN can only contain letters, numbers, hyphens, and underscores"

    return True, "Valid USN"

def validate_name(name, field_name="Name"):
    """Validate person name"""
    if not name or len(name.strip()) == 0:
        return False, f"{field_name} is required"

    if len(name) > 100:
        return False, f"{field_name} must be 100 characters or less"

    # Allow letters, spaces, and common name characters
    if not re.match(r'^[A-Za-z\s\.\-\']+$', name):
        return False, f"{field_name} can only contain letters, spaces, periods, hyphens, and apostrophes"

    return True, f"Valid {field_name.lower()}"

def validate_password(password):
    """Validate password strength"""
    if not password:
        return False, "Password is required"

    if len(password) < 6:
        return False, "Password must be at least 6 characters long"

    if len(password) > 128:
        return False, "Password must be 128 characters or less"

    return True, "Valid password"

def validate_subject_code(subject_code):
    """Validate subject code format"""
    if not subject_code or len(str(subject_code).strip()) == 0:
        return False, "Subject code is required"

    if len(subject_code) > 20:
        return False, "Subject code must be 20 characters or less"

    # Allow alphanumeric and some special characters
    if not re.match(r'^[A-Za-z0-9_-]+$', subject_code.strip()):
        return False, "Subject code can only contain letters, numbers, hyphens, and underscores"

    return True, "Valid subject code"

def validate_semester(semester):
    """Validate semester number"""
    if isinstance(semester, bool):
        return False, "Semester must be a number"
    try:
        sem_int = int(semester)
        if sem_int != float(semester):
            return False, "Semester must be a whole number"
        if sem_int < 1 or sem_int > 8:
            return False, "Semester must be between 1 and 8"
        return True, "Valid semester"
    except (ValueError, TypeError):
        return False, "Semester must be a number"

def validate_section(section, sections):
    """Validate section against the configured sections"""
    if not section or str(section).strip().upper() not in sections:
        return False, f"Section must be one of: {', '.join(sections)}"
    return True, "Valid section"

def validate_optional_score(value, max_marks, field_name):
    """Validate a nullable score between 0 and max_marks"""
    if value is None or value == "":
        return True, f"{field_name} not entered"
    if isinstance(value, bool):
        return False, f"{field_name} must be a valid number"
    try:
        score = float(value)
    except (ValueError, TypeError):
        return False, f"{field_name} must be a valid number"

    if not math.isfinite(score):
        return False, f"{field_name} must be a valid number"

    if score < 0:
        return False, f"{field_name} cannot be negative"

    if score > max_marks:
        return False, f"{field_name} cannot exceed maximum marks ({max_marks})"

    return True, f"Valid {field_name}"
