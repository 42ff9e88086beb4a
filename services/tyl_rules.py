"""
TYL subject rules for the Academic Records Portal
Subject code classification, parsing and passing thresholds
"""

import re
from collections import namedtuple
from types import MappingProxyType

# Every TYL subject is marked out of 100 (IA1 out of 50 + IA2 out of 50)
TYL_TOTAL_MARKS = 100

TYL_SUBJECT_PATTERN = re.compile(
    r'(a[1-4]|c[2-5]|l[1-4]|p[1-4]|s[1-4])(-odd|-full|-python|-java|-c|-mad|-fsd|-ds)?'
)
BASE_CODE_PATTERN = re.compile(r'^([a-z]\d)')

CATEGORY_NAMES = {
    'a': 'aptitude',
    'l': 'language',
    's': 'soft skills',
    'p': 'programming',
    'c': 'core',
}

VARIANT_ODD = 'odd'
VARIANT_FULL = 'full'
CORE_VARIANTS = (VARIANT_ODD, VARIANT_FULL)


class UnknownSubjectCodeError(ValueError):
    """Raised in strict mode for a code with no passing threshold"""
    pass


class SubjectCode(namedtuple('SubjectCode', 'category level variant')):
    """A TYL subject code parsed into category letter, level and optional variant"""
    __slots__ = ()

    @property
    def base(self):
        return f'{self.category}{self.level}'

    @property
    def code(self):
        if self.variant:
            return f'{self.base}-{self.variant}'
        return self.base

    @property
    def category_name(self):
        return CATEGORY_NAMES[self.category]

    @property
    def core_variant(self):
        """'odd' or 'full' when the variant selects a core threshold, otherwise None"""
        if self.variant in CORE_VARIANTS:
            return self.variant
        return None

    def __str__(self):
        return self.code


class TYLConfig:
    """
    Read-only TYL rule tables.

    base_thresholds maps a base code (letter + level) to its passing mark,
    core_thresholds maps 'cN-odd' / 'cN-full' to the core passing marks and
    categories maps a category name to its base codes in level order.
    """

    def __init__(self, base_thresholds, core_thresholds, categories, default_threshold=50, strict=False):
        self.base_thresholds = MappingProxyType(dict(base_thresholds))
        self.core_thresholds = MappingProxyType(dict(core_thresholds))
        self.categories = MappingProxyType(
            {name: tuple(codes) for name, codes in categories.items()}
        )
        self.default_threshold = default_threshold
        self.strict = strict

    def with_strict(self, strict=True):
        """Copy of this configuration with a different unknown-code policy"""
        return TYLConfig(
            self.base_thresholds,
            self.core_thresholds,
            self.categories,
            default_threshold=self.default_threshold,
            strict=strict
        )

    @property
    def all_base_codes(self):
        return tuple(code for category_codes in self.categories.values() for code in category_codes)

    def __repr__(self):
        return f'<TYLConfig default={self.default_threshold} strict={self.strict}>'


DEFAULT_TYL_CONFIG = TYLConfig(
    base_thresholds={
        # Language
        'l1': 65, 'l2': 65, 'l3': 70, 'l4': 70,
        # Aptitude
        'a1': 50, 'a2': 50, 'a3': 50, 'a4': 60,
        # Soft skills
        's1': 50, 's2': 50, 's3': 50, 's4': 50,
        # Programming: P1 (C), P2 (Python), P3 (Python or Java), P4 (all variants)
        'p1': 50, 'p2': 50, 'p3': 60, 'p4': 70,
    },
    core_thresholds={
        'c2-odd': 10,
        'c2-full': 10,
        'c3-odd': 25,
        'c3-full': 50,
        'c4-odd': 50,
        'c4-full': 50,
        'c5-full': 50,
    },
    categories={
        'aptitude': ['a1', 'a2', 'a3', 'a4'],
        'language': ['l1', 'l2', 'l3', 'l4'],
        'soft skills': ['s1', 's2', 's3', 's4'],
        'programming': ['p1', 'p2', 'p3', 'p4'],
        'core': ['c2', 'c3', 'c4', 'c5'],
    },
)


def normalize_subject_code(code):
    """Trim and lowercase a subject code"""
    if code is None:
        return ''
    return str(code).strip().lower()


def is_tyl_subject(code):
    """True when the whole (lowercased) code is a TYL subject code"""
    if code is None:
        return False
    return TYL_SUBJECT_PATTERN.fullmatch(str(code).lower()) is not None


def parse_subject_code(code):
    """Parse a code into a SubjectCode, or None when it is not a TYL subject"""
    if isinstance(code, SubjectCode):
        return code
    normalized = normalize_subject_code(code)
    if not is_tyl_subject(normalized):
        return None
    variant = normalized[3:] or None
    return SubjectCode(normalized[0], int(normalized[1]), variant)


def variant_from_code(code):
    """Core variant carried in a raw code string ('odd', 'full' or None)"""
    normalized = normalize_subject_code(code)
    if '-odd' in normalized:
        return VARIANT_ODD
    if '-full' in normalized:
        return VARIANT_FULL
    return None


def describe_threshold(code, variant=None, config=None):
    """
    Resolve the passing mark for a raw subject code.

    Returns (threshold, is_known). is_known is False when no rule matched
    and the configured default was used. Rules are tried in order, the
    suffix-bearing core codes first so 'c4-full' never falls through to the
    bare 'c4' lookup.
    """
    config = config or DEFAULT_TYL_CONFIG
    code = normalize_subject_code(code)
    variant = normalize_subject_code(variant) or None

    for core_code, threshold in config.core_thresholds.items():
        base, _, core_variant = core_code.partition('-')
        if core_code in code or (code.startswith(base) and variant == core_variant):
            return threshold, True

    if code.startswith('c5') and 'c5-full' in config.core_thresholds:
        return config.core_thresholds['c5-full'], True

    # p1-p4 share one threshold per level whatever the suffix
    match = BASE_CODE_PATTERN.match(code)
    if match and match.group(1) in config.base_thresholds:
        return config.base_thresholds[match.group(1)], True

    return config.default_threshold, False


def get_passing_threshold(code, variant=None, config=None):
    """Passing mark (out of TYL_TOTAL_MARKS) for a raw subject code"""
    config = config or DEFAULT_TYL_CONFIG
    threshold, is_known = describe_threshold(code, variant, config)
    if not is_known and config.strict:
        raise UnknownSubjectCodeError(f"No passing threshold configured for subject code '{code}'")
    return threshold


def resolve_threshold(subject_code, variant=None, config=None):
    """Passing mark for an already parsed SubjectCode"""
    config = config or DEFAULT_TYL_CONFIG

    if subject_code.category == 'c':
        if subject_code.level == 5 and 'c5-full' in config.core_thresholds:
            return config.core_thresholds['c5-full']
        core_variant = normalize_subject_code(variant) or subject_code.core_variant
        if core_variant:
            core_key = f'{subject_code.base}-{core_variant}'
            if core_key in config.core_thresholds:
                return config.core_thresholds[core_key]

    if subject_code.base in config.base_thresholds:
        return config.base_thresholds[subject_code.base]

    if config.strict:
        raise UnknownSubjectCodeError(f"No passing threshold configured for subject code '{subject_code}'")
    return config.default_threshold


def category_for_base_code(base_code, config=None):
    """Category name a base code belongs to, or None"""
    config = config or DEFAULT_TYL_CONFIG
    base_code = normalize_subject_code(base_code)
    for name, codes in config.categories.items():
        if base_code in codes:
            return name
    return None
