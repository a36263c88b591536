"""Mini README: Durable storage for the signed-in profile.

``SessionStore`` keeps a small JSON document on disk keyed by a fixed name
(``userProfile`` by default) so the active sign-in survives a restart. The
PIN is never written. Absence of the file or key means nobody is signed in.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .profiles import Profile
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class SessionStore:
    """Read and write the persisted profile record."""

    def __init__(self, path: Path, key: str = "userProfile") -> None:
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            LOGGER.warning("Ignoring unreadable session file %s: %s", self.path, error)
            return {}
        return document if isinstance(document, dict) else {}

    def _write(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")

    def save(self, profile: Profile) -> None:
        """Persist ``profile`` under the configured key, replacing any prior value."""

        document = self._read()
        document[self.key] = profile.as_dict()
        self._write(document)
        LOGGER.debug("Persisted session for profile %s", profile.profile_id)

    def load(self) -> Optional[Profile]:
        """Return the stored profile, or ``None`` when nothing usable is stored."""

        record = self._read().get(self.key)
        if not record:
            return None
        try:
            return Profile.from_record(record)
        except (KeyError, ValueError, TypeError) as error:
            LOGGER.warning("Discarding malformed stored profile: %s", error)
            return None

    def clear(self) -> None:
        document = self._read()
        if self.key not in document:
            return
        del document[self.key]
        self._write(document)
        LOGGER.debug("Cleared persisted session")
