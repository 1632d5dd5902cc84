"""Roster rule exports."""

from .roster import (
    ROSTER_SIZE,
    RosterReport,
    RuleCheck,
    distinct_slots,
    validate_roster,
    validate_swap,
)

__all__ = [
    "ROSTER_SIZE",
    "RosterReport",
    "RuleCheck",
    "distinct_slots",
    "validate_roster",
    "validate_swap",
]
