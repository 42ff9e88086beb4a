"""
TYL cohort aggregation for the Academic Records Portal
Summary counts for department, section and year reporting views
"""

from services.tyl_evaluator import aggregate_cohort_pass_counts, aggregate_category_reach


def summarize_cohort(students_with_marks, department=None, section=None, year=None, config=None):
    """
    Summarize an already scoped set of (profile, marks) pairs.

    Scope filters are applied to profiles by the caller, never to marks, so a
    student with no TYL marks still counts toward total_students.
    """
    students_with_marks = list(students_with_marks)
    return {
        'department': department,
        'section': section,
        'year': year,
        'total_students': len(students_with_marks),
        'passed_counts': aggregate_cohort_pass_counts(students_with_marks, config),
        'levels_reached': aggregate_category_reach(students_with_marks, config),
    }


def scope_label(summary):
    """Row label for a cohort summary in reports"""
    if summary.get('section'):
        return f"Section {summary['section']}"
    if summary.get('year'):
        return f"Year {summary['year']}"
    return summary.get('department') or 'N/A'
