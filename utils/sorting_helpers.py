"""
Sorting helper utilities for the Academic Records Portal
Provides consistent ordering for student profiles and mark listings
"""

import re

class SortingHelpers:
    """Helper class for sorting operations"""

    @staticmethod
    def _numeric_part(identifier):
        """Trailing number of a USN/admission id, so 1CS9 sorts before 1CS10"""
        match = re.search(r'(\d+)$', identifier or '')
        if match:
            return int(match.group(1))
        return 999999  # Put non-numeric at end

    @staticmethod
    def get_usn_sort_key(identifier):
        """Sort key for a USN: prefix, then numeric suffix, then the full value"""
        identifier = (identifier or '').strip().upper()
        prefix = re.sub(r'\d+$', '', identifier)
        return (prefix, SortingHelpers._numeric_part(identifier), identifier)

    @staticmethod
    def get_profile_sort_key(profile):
        """
        Sort key for a student profile
        Order: department, year, section, then admission id
        """
        return (
            profile.department or '',
            profile.year or 0,
            (profile.section or '').upper(),
            SortingHelpers.get_usn_sort_key(profile.admission_id)
        )

    @staticmethod
    def sort_profiles(profiles):
        """Sort student profiles using the standard ordering"""
        return sorted(profiles, key=SortingHelpers.get_profile_sort_key)

    @staticmethod
    def sort_mark_rows(rows):
        """Sort flattened mark rows by USN, then subject code and semester"""
        return sorted(rows, key=lambda row: (
            SortingHelpers.get_usn_sort_key(row.get('usn')),
            (row.get('subject_code') or '').lower(),
            row.get('semester') or 0
        ))
