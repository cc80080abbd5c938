"""Validation module for checking ranking snapshots against their invariants."""

from cfbpoll.validation.models import InvariantReport, InvariantViolation
from cfbpoll.validation.invariants import (
    check_dense,
    check_record_sums,
    check_rankings,
    check_sos_bounds,
)

__all__ = [
    # Models
    "InvariantReport",
    "InvariantViolation",
    # Checks
    "check_dense",
    "check_record_sums",
    "check_rankings",
    "check_sos_bounds",
]
