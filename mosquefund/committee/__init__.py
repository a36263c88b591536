"""Mini README: Committee directory package.

The directory is informational only; members are never transaction authors.
"""

from .directory import CommitteeMember, CommitteeMemberDraft, newest_first

__all__ = ["CommitteeMember", "CommitteeMemberDraft", "newest_first"]
