"""
Roster matching: exact substring containment after normalization.

Not a fuzzy / edit-distance match. The roster snapshot is read-only for a
run; callers refresh it between runs.
"""

from .match import RosterTiePolicy, build_roster, match_row, normalize_name

__all__ = ["RosterTiePolicy", "build_roster", "match_row", "normalize_name"]
