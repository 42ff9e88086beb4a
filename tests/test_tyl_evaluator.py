"""
Unit tests for the TYL evaluator and cohort summaries
"""

import unittest
from collections import namedtuple
from services.tyl_rules import DEFAULT_TYL_CONFIG, UnknownSubjectCodeError
from services.tyl_evaluator import (
    SCOPE_ALL_HISTORY, SCOPE_SPECIFIC_SEMESTER, P4_MAD_FSD, P4_DS,
    InvalidScopeError, StudentMarks, semester_filter_for_scope, combined_score,
    is_attempted, did_pass, level_reached, student_levels, evaluate_student,
    aggregate_cohort_pass_counts, aggregate_category_reach
)
from services.tyl_cohort import summarize_cohort, scope_label

Mark = namedtuple('Mark', 'subject_code ia1_50 ia2_50 semester subject_name')
Profile = namedtuple('Profile', 'user_id admission_id')

def mark(code, ia1=None, ia2=None, semester=1):
    return Mark(code, ia1, ia2, semester, code.upper())

APTITUDE = DEFAULT_TYL_CONFIG.categories['aptitude']
LANGUAGE = DEFAULT_TYL_CONFIG.categories['language']

class TestPassFail(unittest.TestCase):

    def test_combined_score_treats_missing_as_zero(self):
        """A missing IA score counts as 0"""
        self.assertEqual(combined_score(mark('a1', 30, 25)), 55)
        self.assertEqual(combined_score(mark('a1', 30, None)), 30)
        self.assertEqual(combined_score(mark('a1')), 0)

    def test_is_attempted(self):
        """Only records with both IA scores empty are unattempted"""
        self.assertFalse(is_attempted(mark('a1')))
        self.assertTrue(is_attempted(mark('a1', 0, None)))
        self.assertTrue(is_attempted(mark('a1', None, 12)))

    def test_pass_at_exact_threshold(self):
        """c3-full passes at 50 and fails at 49"""
        self.assertFalse(did_pass(mark('c3-full', 25, 24), 'c3-full'))
        self.assertTrue(did_pass(mark('c3-full', 25, 25), 'c3-full'))

    def test_pass_is_monotonic_in_score(self):
        """Raising the combined score never turns a pass into a fail"""
        for code in ('a4', 'l3', 'c2-odd', 'p4-ds'):
            results = [did_pass(mark(code, total / 2, total / 2), code) for total in range(0, 101)]
            first_pass = results.index(True)
            self.assertTrue(all(results[first_pass:]), code)
            self.assertFalse(any(results[:first_pass]), code)

    def test_unknown_code_in_strict_mode(self):
        """Strict configuration raises when evaluating an unknown code"""
        with self.assertRaises(UnknownSubjectCodeError):
            did_pass(mark('zz1', 50, 50), 'zz1', DEFAULT_TYL_CONFIG.with_strict())

class TestLevelReached(unittest.TestCase):

    def test_single_entered_level(self):
        """a1 passed and a2 not entered reaches level 1"""
        marks = [mark('a1', 30, 25), mark('a2')]
        self.assertEqual(level_reached(marks, APTITUDE), 1)

    def test_lowest_level_failure_forces_zero(self):
        """l1 failed and l2 passed reaches level 0"""
        marks = [mark('l1', 30, 30), mark('l2', 35, 35)]
        self.assertEqual(level_reached(marks, LANGUAGE), 0)

    def test_contiguous_passes(self):
        """Passing l1 to l3 reaches level 3"""
        marks = [mark('l1', 35, 30), mark('l2', 35, 30, 2), mark('l3', 35, 35, 3)]
        self.assertEqual(level_reached(marks, LANGUAGE), 3)

    def test_higher_failure_forces_zero(self):
        """Any failed entered level forces 0"""
        marks = [mark('a1', 30, 25), mark('a2', 30, 25), mark('a3', 10, 10)]
        self.assertEqual(level_reached(marks, APTITUDE), 0)

    def test_unattempted_levels_are_skipped(self):
        """A level whose record has no IA scores does not break the run"""
        marks = [mark('a1', 30, 25), mark('a2'), mark('a3', 30, 25)]
        self.assertEqual(level_reached(marks, APTITUDE), 3)

    def test_empty_category(self):
        """No marks at all reaches level 0"""
        self.assertEqual(level_reached([], APTITUDE), 0)
        self.assertEqual(level_reached([mark('a1'), mark('a2')], APTITUDE), 0)

    def test_case_and_suffix_insensitive_lookup(self):
        """Stored codes in upper case or with a suffix still count for their level"""
        marks = [mark('P1-C', 30, 30), mark('p2', 30, 30), mark('P3-PYTHON', 30, 30)]
        self.assertEqual(level_reached(marks, DEFAULT_TYL_CONFIG.categories['programming']), 3)

    def test_empty_record_does_not_hide_failed_attempt(self):
        """A later empty row for a level does not replace an entered, failed one"""
        marks = [
            mark('p1-c', 30, 30, 3),
            mark('p2', 30, 30, 4),
            mark('p3-python', 10, 10, 5),
            mark('p3-java', None, None, 6),
        ]
        self.assertEqual(level_reached(marks, DEFAULT_TYL_CONFIG.categories['programming']), 0)

    def test_repeated_level_prefers_exact_code_then_latest_semester(self):
        """Among entered records the bare code wins, then the latest semester"""
        latest_fails = [mark('a1', 30, 25, 1), mark('A1', 10, 10, 2)]
        self.assertEqual(level_reached(latest_fails, APTITUDE), 0)

        latest_passes = [mark('a1', 10, 10, 1), mark('a1', 30, 25, 2)]
        self.assertEqual(level_reached(latest_passes, APTITUDE), 1)

        bare_over_variant = [mark('p1', 30, 30, 1), mark('p1-c', 5, 5, 2)]
        self.assertEqual(level_reached(bare_over_variant, DEFAULT_TYL_CONFIG.categories['programming']), 1)

    def test_other_categories_are_ignored(self):
        """Marks from other categories do not affect the level"""
        marks = [mark('a1', 30, 25), mark('l1', 0, 0)]
        self.assertEqual(level_reached(marks, APTITUDE), 1)

    def test_student_levels(self):
        """Levels are reported per category key"""
        marks = [mark('a1', 30, 25), mark('s1', 25, 25), mark('s2', 25, 25, 2)]
        levels = student_levels(marks)
        self.assertEqual(levels, {'lx': 0, 'sx': 2, 'ax': 1, 'px': 0, 'cx': 0})
        self.assertNotIn('cx', student_levels(marks, include_core=False))

class TestEvaluateStudent(unittest.TestCase):

    def test_rows_for_tyl_marks_only(self):
        """Regular subjects are left out and rows carry totals and thresholds"""
        marks = [mark('l1', 35, 35), mark('CS301', 40, 40), mark('a4', 30, 20, 2)]
        rows = evaluate_student(marks)
        self.assertEqual([row['subject_code'] for row in rows], ['a4', 'l1'])

        a4 = rows[0]
        self.assertEqual(a4['category'], 'aptitude')
        self.assertEqual(a4['total'], 50)
        self.assertEqual(a4['passing_marks'], 60)
        self.assertFalse(a4['passed'])
        self.assertTrue(rows[1]['passed'])

class TestCohortAggregation(unittest.TestCase):

    def test_pass_counts_start_at_zero(self):
        """Every base code has a counter even for an empty cohort"""
        counts = aggregate_cohort_pass_counts([])
        self.assertEqual(len(counts), 20)
        self.assertTrue(all(value == 0 for value in counts.values()))

    def test_p4_variant_counters(self):
        """p4-mad counts under p4, p4-mad and p4-mad/fsd; p4-ds adds 2 to p4-ds"""
        students = [
            StudentMarks(Profile(1, 'U1'), [mark('p4-mad', 35, 35)]),
            StudentMarks(Profile(2, 'U2'), [mark('p4-ds', 40, 35)]),
            StudentMarks(Profile(3, 'U3'), [mark('p4-fsd', 30, 30)]),
        ]
        counts = aggregate_cohort_pass_counts(students)
        self.assertEqual(counts['p4'], 2)
        self.assertEqual(counts['p4-mad'], 1)
        self.assertEqual(counts[P4_MAD_FSD], 1)
        self.assertEqual(counts[P4_DS], 2)
        self.assertNotIn('p4-fsd', counts)

    def test_core_variant_counts(self):
        """Core passes count under the base and the suffixed code"""
        students = [(Profile(1, 'U1'), [mark('c2-odd', 5, 5), mark('C3-FULL', 20, 20)])]
        counts = aggregate_cohort_pass_counts(students)
        self.assertEqual(counts['c2'], 1)
        self.assertEqual(counts['c2-odd'], 1)
        self.assertEqual(counts['c3'], 0)

    def test_pass_counts_span_every_semester(self):
        """Marks from earlier semesters are counted"""
        students = [{'profile': Profile(1, 'U1'), 'marks': [mark('a1', 30, 25, 1), mark('a2', 30, 25, 4)]}]
        counts = aggregate_cohort_pass_counts(students)
        self.assertEqual(counts['a1'], 1)
        self.assertEqual(counts['a2'], 1)

    def test_category_reach_counts_distinct_students(self):
        """A student passing several aptitude levels counts once"""
        students = [
            StudentMarks(Profile(1, 'U1'), [mark('a1', 30, 25), mark('a2', 30, 25)]),
            StudentMarks(Profile(2, 'U2'), [mark('a1', 10, 10), mark('l1', 40, 30)]),
            StudentMarks(Profile(3, 'U3'), []),
        ]
        reach = aggregate_category_reach(students)
        self.assertEqual(reach, {'lx': 1, 'sx': 0, 'ax': 1, 'px': 0})

    def test_students_without_marks_count_toward_total(self):
        """Three of ten students with no marks add nothing but stay in the total"""
        students = [StudentMarks(Profile(i, f'U{i}'), [mark('a1', 30, 25)]) for i in range(1, 8)]
        students += [StudentMarks(Profile(i, f'U{i}'), []) for i in range(8, 11)]

        summary = summarize_cohort(students, department='Computer Science')
        self.assertEqual(summary['total_students'], 10)
        self.assertEqual(summary['passed_counts']['a1'], 7)
        self.assertEqual(summary['levels_reached']['ax'], 7)
        self.assertEqual(summary['department'], 'Computer Science')

    def test_scope_label(self):
        """Rows are labelled by section, then year, then department"""
        self.assertEqual(scope_label({'department': 'Civil', 'section': 'B', 'year': None}), 'Section B')
        self.assertEqual(scope_label({'department': 'Civil', 'section': None, 'year': 2}), 'Year 2')
        self.assertEqual(scope_label({'department': 'Civil', 'section': None, 'year': None}), 'Civil')

class TestHistoryScope(unittest.TestCase):

    def test_all_history_never_filters(self):
        """The all-history scope ignores any semester passed"""
        self.assertIsNone(semester_filter_for_scope(SCOPE_ALL_HISTORY))
        self.assertIsNone(semester_filter_for_scope(SCOPE_ALL_HISTORY, 5))

    def test_specific_semester_requires_semester(self):
        """The specific-semester scope needs a semester"""
        self.assertEqual(semester_filter_for_scope(SCOPE_SPECIFIC_SEMESTER, '3'), 3)
        with self.assertRaises(InvalidScopeError):
            semester_filter_for_scope(SCOPE_SPECIFIC_SEMESTER)

    def test_unknown_scope(self):
        """Scope must be given explicitly"""
        with self.assertRaises(InvalidScopeError):
            semester_filter_for_scope(None)
        with self.assertRaises(InvalidScopeError):
            semester_filter_for_scope('current-semester', 2)

if __name__ == '__main__':
    unittest.main()
