"""stest Rules System.

This module provides the predicate engine:
- TestOptions: enabled tests, modifiers and inputs for one run
- resolve_reference_time: one-off capture of the age-test reference mtime
- iter_candidates: inputs, or direct children of input directories
- PredicateEngine: per-entry evaluation, inversion, printing and aggregation
"""

from .candidates import Candidate, display_name, iter_candidates, iter_directory
from .engine import PredicateEngine, UnsupportedInputError, aggregate, run_tests
from .options import TEST_ORDER, OptionsError, TestOptions
from .reference import ReferenceTimeError, resolve_reference_time

__all__ = [
    # Options
    "TEST_ORDER",
    "OptionsError",
    "TestOptions",
    # Reference time
    "ReferenceTimeError",
    "resolve_reference_time",
    # Candidates
    "Candidate",
    "display_name",
    "iter_candidates",
    "iter_directory",
    # Engine
    "PredicateEngine",
    "UnsupportedInputError",
    "aggregate",
    "run_tests",
]
