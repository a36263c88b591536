"""Mini README: Staff identities and their roles.

Structure:
    * Role - tagged variant of the two staff roles; there is no hierarchy.
    * Profile - immutable staff identity as read from the profile table.

Rows are converted with ``Profile.from_record`` so the rest of the package
never handles raw role strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Role(str, Enum):
    """Enumerate the staff roles allowed to sign in."""

    ADMIN = "admin"
    CASHIER = "cashier"

    @classmethod
    def from_str(cls, value: str) -> "Role":
        """Coerce arbitrary casing into a valid role."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported role: {value}") from error

    @classmethod
    def is_known(cls, value: Any) -> bool:
        try:
            cls.from_str(value)
        except ValueError:
            return False
        return True

    @property
    def landing_path(self) -> str:
        """Area a freshly signed-in user is routed to."""

        return f"/{self.value}"


@dataclass(frozen=True, slots=True)
class Profile:
    """A staff member; role never changes for the lifetime of the record."""

    profile_id: str
    name: str
    role: Role
    pin: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Profile":
        """Build a profile from a store row with ``id, name, role, pin`` keys."""

        pin = record.get("pin")
        return cls(
            profile_id=str(record["id"]),
            name=str(record.get("name") or ""),
            role=Role.from_str(str(record["role"])),
            pin=None if pin is None else str(pin),
        )

    def as_dict(self) -> Dict[str, Any]:
        """Public fields only; the PIN is never exported."""

        return {"id": self.profile_id, "name": self.name, "role": self.role.value}
