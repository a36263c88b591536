"""Mini README: Committee directory entries.

Structure:
    * CommitteeMember - a directory entry as stored (no financial data).
    * CommitteeMemberDraft - validated input for a new entry.
    * newest_first - ordering used by the management screen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union


@dataclass(frozen=True, slots=True)
class CommitteeMember:
    """Name, position, and optional contact details of a committee member."""

    member_id: Union[int, str]
    name: str
    position: str
    phone: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CommitteeMember":
        return cls(
            member_id=record["id"],
            name=str(record.get("name") or ""),
            position=str(record.get("position") or ""),
            phone=record.get("phone") or None,
            photo_url=record.get("photo_url") or None,
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.member_id,
            "name": self.name,
            "position": self.position,
            "phone": self.phone,
            "photo_url": self.photo_url,
        }


@dataclass(frozen=True, slots=True)
class CommitteeMemberDraft:
    name: str
    position: str
    phone: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        position: str,
        phone: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> "CommitteeMemberDraft":
        """Trim input and reject entries without a name or position."""

        clean_name = (name or "").strip()
        clean_position = (position or "").strip()
        if not clean_name:
            raise ValueError("Please enter a name")
        if not clean_position:
            raise ValueError("Please enter a position")
        return cls(
            name=clean_name,
            position=clean_position,
            phone=(phone or "").strip() or None,
            photo_url=(photo_url or "").strip() or None,
        )

    def as_record(self) -> Dict[str, Optional[str]]:
        return {
            "name": self.name,
            "position": self.position,
            "phone": self.phone,
            "photo_url": self.photo_url,
        }


def newest_first(members: Iterable[CommitteeMember]) -> List[CommitteeMember]:
    """Order members by id descending so recent additions show first."""

    return sorted(members, key=lambda member: _sort_key(member.member_id), reverse=True)


def _sort_key(member_id: Union[int, str]) -> tuple:
    # Numeric ids sort numerically; anything else falls back to text.
    try:
        return (0, int(member_id), "")
    except (TypeError, ValueError):
        return (1, 0, str(member_id))
