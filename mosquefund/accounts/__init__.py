"""Mini README: Staff accounts package.

Re-exports the profile model, the session manager, persisted sign-in
storage, and the centralised access check used by protected views.
"""

from .authorization import ACCESS_DENIED, AccessDecision, check_access
from .persistence import SessionStore
from .profiles import Profile, Role
from .session import CandidateList, Session, SessionManager

__all__ = [
    "ACCESS_DENIED",
    "AccessDecision",
    "CandidateList",
    "Profile",
    "Role",
    "Session",
    "SessionManager",
    "SessionStore",
    "check_access",
]
