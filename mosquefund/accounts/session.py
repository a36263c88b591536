"""Mini README: PIN sign-in and the single active session.

Structure:
    * Session - the profile that is currently using the service.
    * CandidateList - result of loading the sign-in candidates.
    * SessionManager - lists candidates, checks PINs, and owns the session.

The manager is constructed once and handed explicitly to every view that
needs it; nothing in the package reaches it through module globals. A
successful ``authenticate`` replaces any prior session (last writer wins)
and ``sign_out`` is idempotent. PIN comparison is plain string equality, so
the same candidate set and PIN always yield the same outcome.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from .persistence import SessionStore
from .profiles import Profile, Role
from ..errors import InvalidCredentialsError, NotFoundError, UpstreamUnavailableError
from ..logging_utils import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..storage.base import FundStore

LOGGER = get_logger(__name__)

SIGN_IN_ROLES = (Role.ADMIN, Role.CASHIER)


@dataclass(frozen=True, slots=True)
class Session:
    """Snapshot of the signed-in profile taken at sign-in time."""

    profile: Profile

    @property
    def profile_id(self) -> str:
        return self.profile.profile_id

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def role(self) -> Role:
        return self.profile.role

    def as_dict(self) -> Dict[str, str]:
        return self.profile.as_dict()


@dataclass(slots=True)
class CandidateList:
    """Profiles offered on the sign-in screen plus any fetch failure."""

    profiles: List[Profile] = field(default_factory=list)
    error: Optional[UpstreamUnavailableError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SessionManager:
    """Authenticate staff by PIN and answer who is signed in."""

    def __init__(self, store: FundStore, persistence: Optional[SessionStore] = None) -> None:
        self._store = store
        self._persistence = persistence
        self._candidates: Dict[str, Profile] = {}
        self._lock = threading.Lock()
        self._session: Optional[Session] = None
        if persistence is not None:
            restored = persistence.load()
            if restored is not None:
                self._session = Session(profile=restored)
                LOGGER.info("Restored session for profile %s", restored.profile_id)

    @property
    def store(self) -> FundStore:
        return self._store

    def list_candidates(self) -> CandidateList:
        """Load every admin and cashier profile from the store.

        A failed fetch yields an empty list with the error attached; the
        previous candidate set is dropped rather than kept as stale data.
        """

        try:
            profiles = self._store.list_profiles(SIGN_IN_ROLES)
        except UpstreamUnavailableError as error:
            LOGGER.warning("Could not load sign-in candidates: %s", error)
            self._candidates = {}
            return CandidateList(error=error)
        profiles = [profile for profile in profiles if profile.role in SIGN_IN_ROLES]
        self._candidates = {profile.profile_id: profile for profile in profiles}
        LOGGER.debug("Loaded %s sign-in candidates", len(profiles))
        return CandidateList(profiles=profiles)

    def authenticate(self, profile_id: str, pin: str) -> Role:
        """Check ``pin`` against the listed candidate and open a session.

        Returns the role so the caller can route to the matching area.
        Raises ``NotFoundError`` when the id is not among the last listed
        candidates and ``InvalidCredentialsError`` on a PIN mismatch; in
        both cases the current session is left untouched.
        """

        candidate = self._candidates.get(profile_id)
        if candidate is None:
            LOGGER.info("Sign-in rejected: profile %s is not a listed candidate", profile_id)
            raise NotFoundError(f"Profile {profile_id} not found")
        if candidate.pin is None or candidate.pin != pin:
            LOGGER.info("Sign-in rejected: incorrect PIN for profile %s", profile_id)
            raise InvalidCredentialsError("Incorrect PIN")

        session = Session(profile=candidate)
        with self._lock:
            self._session = session
        if self._persistence is not None:
            self._persistence.save(candidate)
        LOGGER.info("Profile %s signed in as %s", candidate.profile_id, candidate.role.value)
        return candidate.role

    def current_session(self) -> Optional[Session]:
        return self._session

    def sign_out(self) -> None:
        """Clear the active session; calling it again is a no-op."""

        with self._lock:
            previous, self._session = self._session, None
        if self._persistence is not None:
            self._persistence.clear()
        if previous is not None:
            LOGGER.info("Profile %s signed out", previous.profile_id)
