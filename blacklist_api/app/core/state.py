"""
In‑memory state of the registry.

All pilots, admin tokens and access codes live in a single
``RegistryState`` object owned by the application (see
``main.create_app``).  Nothing is persisted: restarting the process
discards everything.  Callers must hold ``state.lock`` while reading or
mutating the containers; ``RegistryService`` does this for every
operation.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

PENDING = "pending"
APPROVED = "approved"


@dataclass
class Pilot:
    """A registered participant.

    ``rank`` is ``None`` while the pilot is pending and a positive
    integer once approved.  Rejected pilots are removed from the state
    rather than flagged.
    """

    id: str
    nickname: str
    car: str
    photo_url: str = ""
    status: str = PENDING
    rank: Optional[int] = None
    access_codes: List[str] = field(default_factory=list)

    @property
    def is_approved(self) -> bool:
        return self.status == APPROVED

    def to_dict(self) -> Dict[str, Any]:
        """Full record, as returned to administrators."""
        return {
            "id": self.id,
            "nickname": self.nickname,
            "car": self.car,
            "photoUrl": self.photo_url,
            "status": self.status,
            "rank": self.rank,
            "accessCodes": list(self.access_codes),
        }


@dataclass
class RegistryState:
    """Mutable state shared by all requests of one application."""

    public_mode: bool = True
    min_public_signups: int = 15
    pilots: List[Pilot] = field(default_factory=list)
    # token -> issue time (``time.time()``), used for optional expiry
    admin_tokens: Dict[str, float] = field(default_factory=dict)
    access_codes: Set[str] = field(default_factory=set)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def find_pilot(self, pilot_id: str) -> Optional[Pilot]:
        for pilot in self.pilots:
            if pilot.id == pilot_id:
                return pilot
        return None

    def approved_pilots(self) -> List[Pilot]:
        return [p for p in self.pilots if p.is_approved]

    def effective_public(self) -> bool:
        """Visibility after applying the minimum‑signups override."""
        if len(self.pilots) < self.min_public_signups:
            return True
        return self.public_mode
