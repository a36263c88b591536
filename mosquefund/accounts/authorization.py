"""Mini README: The single access rule used by every protected operation.

``check_access`` is a pure read: it never signs anyone out, raises, or
touches the store. Admin and cashier areas are mutually exclusive, so the
rule is simply "a session exists and its role equals the required role".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .profiles import Role
from .session import Session

ACCESS_DENIED = "Access Denied"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    """Outcome of an access check that views render directly."""

    allowed: bool
    required_role: Optional[Role]
    reason: str = ""

    def as_dict(self) -> dict:
        return {
            "state": "ok" if self.allowed else "access_denied",
            "required_role": self.required_role.value if self.required_role else None,
            "message": self.reason,
        }


def check_access(session: Optional[Session], required_role: Optional[Role]) -> AccessDecision:
    """Decide whether ``session`` may open a view requiring ``required_role``.

    ``required_role`` of ``None`` marks a public view.
    """

    if required_role is None:
        return AccessDecision(allowed=True, required_role=None)
    if session is None:
        return AccessDecision(False, required_role, f"{ACCESS_DENIED}: not signed in")
    if session.role is not required_role:
        return AccessDecision(
            False,
            required_role,
            f"{ACCESS_DENIED}: {required_role.value} area is not available to {session.role.value}",
        )
    return AccessDecision(allowed=True, required_role=required_role)
