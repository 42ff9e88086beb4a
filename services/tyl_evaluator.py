"""
TYL eligibility evaluator for the Academic Records Portal
Pass/fail per subject, level reached per category and cohort pass counts

Every function here works on the complete mark history it is given. The
semester a mark was recorded in and the student's current semester are never
consulted; narrowing by semester is the caller's decision (see HISTORY_SCOPES).
"""

from collections import namedtuple
from services.tyl_rules import (
    DEFAULT_TYL_CONFIG, parse_subject_code, resolve_threshold,
    get_passing_threshold, variant_from_code
)

SCOPE_ALL_HISTORY = 'all-history'
SCOPE_SPECIFIC_SEMESTER = 'specific-semester'
HISTORY_SCOPES = (SCOPE_ALL_HISTORY, SCOPE_SPECIFIC_SEMESTER)

# Level-reached keys used by the reporting views, with the category they summarize
LEVEL_KEYS = (
    ('lx', 'language'),
    ('sx', 'soft skills'),
    ('ax', 'aptitude'),
    ('px', 'programming'),
)
CORE_LEVEL_KEY = ('cx', 'core')

# Category letter -> cohort reach key
REACH_KEYS = {'l': 'lx', 's': 'sx', 'a': 'ax', 'p': 'px'}

P4_MAD_FSD = 'p4-mad/fsd'
P4_DS = 'p4-ds'

StudentMarks = namedtuple('StudentMarks', 'profile marks')


class InvalidScopeError(ValueError):
    """Raised when a history scope is missing or inconsistent"""
    pass


def semester_filter_for_scope(scope, semester=None):
    """
    Validate a history scope and return the semester to filter marks by.

    SCOPE_ALL_HISTORY always returns None, even when a semester is supplied.
    SCOPE_SPECIFIC_SEMESTER requires a semester.
    """
    if scope not in HISTORY_SCOPES:
        raise InvalidScopeError(f"Unknown history scope: {scope!r}. Expected one of {', '.join(HISTORY_SCOPES)}")
    if scope == SCOPE_ALL_HISTORY:
        return None
    if semester is None:
        raise InvalidScopeError("A semester is required for the specific-semester scope")
    return int(semester)


def _unpack(entry):
    if isinstance(entry, dict):
        return entry.get('profile'), entry.get('marks') or []
    profile, marks = entry
    return profile, marks or []


def _student_key(profile, fallback):
    user_id = getattr(profile, 'user_id', None)
    if user_id is None and isinstance(profile, dict):
        user_id = profile.get('user_id')
    return user_id if user_id is not None else fallback


def _score(value):
    return value if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


def combined_score(mark):
    """IA1 + IA2, with a missing score counting as 0"""
    return _score(getattr(mark, 'ia1_50', None)) + _score(getattr(mark, 'ia2_50', None))


def is_attempted(mark):
    """A record with both internal assessments empty was not attempted"""
    return getattr(mark, 'ia1_50', None) is not None or getattr(mark, 'ia2_50', None) is not None


def threshold_for(subject_code, config=None):
    """Passing mark for a raw or parsed code, dispatching on the parsed form when possible"""
    parsed = parse_subject_code(subject_code)
    if parsed is None:
        return get_passing_threshold(subject_code, variant_from_code(subject_code), config)
    return resolve_threshold(parsed, config=config)


def did_pass(mark, subject_code, config=None):
    """True when the combined score reaches the subject's passing mark"""
    return combined_score(mark) >= threshold_for(subject_code, config)


def _level_of(base_code):
    return int(str(base_code).strip()[1])


def _find_mark(parsed_marks, base_code):
    """
    Attempted record for a base code: exact code first, then a suffixed
    variant; latest semester wins. Records with neither IA score are ignored.
    """
    candidates = [
        (code, mark) for code, mark in parsed_marks
        if code.base == base_code and is_attempted(mark)
    ]
    if not candidates:
        return None, None
    candidates.sort(key=lambda item: (
        item[0].variant is None,
        getattr(item[1], 'semester', None) or 0
    ))
    return candidates[-1]


def _parse_marks(marks):
    parsed = []
    for mark in marks:
        code = parse_subject_code(getattr(mark, 'subject_code', None))
        if code is not None:
            parsed.append((code, mark))
    return parsed


def level_reached(all_marks, category_base_codes, config=None):
    """
    Highest level in a category passed contiguously from the bottom.

    Levels without a record, or whose record has neither IA score, are
    skipped. The first failed level forces 0, even if higher levels passed.
    """
    parsed_marks = _parse_marks(all_marks)
    base_codes = sorted(
        (str(code).strip().lower() for code in category_base_codes),
        key=_level_of
    )

    entered = []
    for base_code in base_codes:
        code, mark = _find_mark(parsed_marks, base_code)
        if mark is None:
            continue
        entered.append((code, mark))

    if not entered:
        return 0

    for code, mark in entered:
        if not did_pass(mark, code, config):
            return 0

    return entered[-1][0].level


def student_levels(marks, config=None, include_core=True):
    """Level reached per category for one student: lx, sx, ax, px and optionally cx"""
    config = config or DEFAULT_TYL_CONFIG
    level_keys = LEVEL_KEYS + (CORE_LEVEL_KEY,) if include_core else LEVEL_KEYS
    return {
        key: level_reached(marks, config.categories.get(category, ()), config)
        for key, category in level_keys
    }


def evaluate_student(marks, config=None):
    """Per-subject pass/fail rows for every TYL record of one student"""
    rows = []
    category_order = list((config or DEFAULT_TYL_CONFIG).categories)
    for code, mark in _parse_marks(marks):
        threshold = threshold_for(code, config)
        total = combined_score(mark)
        rows.append({
            'subject_code': code.code,
            'subject_name': getattr(mark, 'subject_name', None),
            'category': code.category_name,
            'level': code.level,
            'semester': getattr(mark, 'semester', None),
            'ia1_50': getattr(mark, 'ia1_50', None),
            'ia2_50': getattr(mark, 'ia2_50', None),
            'total': total,
            'passing_marks': threshold,
            'attempted': is_attempted(mark),
            'passed': total >= threshold,
        })

    def sort_key(row):
        category = row['category']
        position = category_order.index(category) if category in category_order else len(category_order)
        return (position, row['level'], row['subject_code'], row['semester'] or 0)

    return sorted(rows, key=sort_key)


def aggregate_cohort_pass_counts(students_with_marks, config=None):
    """
    Count passes per base code across a cohort.

    Suffixed codes also count under their full code (e.g. 'c2-odd'). P4 passes
    also add to a grouped counter: 'p4-mad/fsd' for MAD and FSD, and 'p4-ds'
    for DS, which shares its key with the full code and so adds 2 per pass.
    """
    config = config or DEFAULT_TYL_CONFIG
    passed_counts = {code: 0 for code in config.all_base_codes}

    for entry in students_with_marks:
        _, marks = _unpack(entry)
        for code, mark in _parse_marks(marks):
            if not did_pass(mark, code, config):
                continue

            passed_counts[code.base] = passed_counts.get(code.base, 0) + 1

            if code.variant:
                passed_counts[code.code] = passed_counts.get(code.code, 0) + 1

            if code.base == 'p4':
                if code.variant in ('mad', 'fsd'):
                    passed_counts[P4_MAD_FSD] = passed_counts.get(P4_MAD_FSD, 0) + 1
                elif code.variant == 'ds':
                    passed_counts[P4_DS] = passed_counts.get(P4_DS, 0) + 1

    return passed_counts


def aggregate_category_reach(students_with_marks, config=None):
    """Number of distinct students with at least one pass in language, soft skills, aptitude and programming"""
    reached = {key: set() for key in REACH_KEYS.values()}

    for index, entry in enumerate(students_with_marks):
        profile, marks = _unpack(entry)
        student_key = _student_key(profile, ('entry', index))
        for code, mark in _parse_marks(marks):
            key = REACH_KEYS.get(code.category)
            if key and did_pass(mark, code, config):
                reached[key].add(student_key)

    return {key: len(reached[key]) for key, _ in LEVEL_KEYS}

