"""
Business logic for the pilot registry.

``RegistryService`` implements registration, the public/restricted
listing, access‑code issuance, admin authentication and the admin
actions (approve/reject, reorder, privacy toggle).  It owns no global
state: everything lives in the ``RegistryState`` passed to the
constructor, and every public method holds ``state.lock`` for its whole
duration so operations never interleave.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from ..core.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from ..core.security import check_password, generate_id
from ..core.state import APPROVED, Pilot, RegistryState

logger = logging.getLogger(__name__)

THRESHOLD_NOTE = "Below the signup threshold - public mode forced"


def _clean(value: Any) -> str:
    """Coerce an optional input value to a trimmed string ('' when absent)."""
    if value is None:
        return ""
    return str(value).strip()


class RegistryService:
    """Сервис реестра пилотов.

    One instance is created per application by ``create_app`` and is
    reachable from handlers through ``core.security.get_registry``.
    """

    def __init__(
        self,
        state: RegistryState,
        admin_password: str,
        admin_token_ttl_minutes: int = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.state = state
        self._admin_password = admin_password
        self._token_ttl = admin_token_ttl_minutes * 60
        self._clock = clock

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def register(self, nickname: Any, car: Any, photo_url: Any = None) -> str:
        """Create a pending pilot and return its id.

        Nickname and car are required and stored trimmed.  Nicknames
        are not required to be unique.
        """
        nickname = _clean(nickname)
        car = _clean(car)
        if not nickname or not car:
            raise ValidationError("nickname and car are required")
        with self.state.lock:
            pilot_id = self._unique_id()
            pilot = Pilot(
                id=pilot_id,
                nickname=nickname,
                car=car,
                photo_url=_clean(photo_url),
            )
            self.state.pilots.append(pilot)
        logger.info("Registered pilot %s (%s)", pilot_id, nickname)
        return pilot_id

    def get_config(self) -> Dict[str, Any]:
        """Return the effective visibility and the signup counters."""
        with self.state.lock:
            return {
                "publicMode": self.state.effective_public(),
                "totalPilots": len(self.state.pilots),
                "minPublicSignups": self.state.min_public_signups,
            }

    def list_approved(self, access_code: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return approved pilots ordered by rank.

        When the registry is in restricted mode a previously issued
        access code is required; otherwise ``ForbiddenError`` is raised.
        Pilots without a rank sort last and are shown with their
        1‑based position instead.
        """
        with self.state.lock:
            if not self.state.effective_public():
                code = _clean(access_code)
                if not code or code not in self.state.access_codes:
                    logger.warning("Listing refused: missing or unknown access code")
                    raise ForbiddenError()
            approved = sorted(
                self.state.approved_pilots(),
                key=lambda p: (p.rank is None, p.rank or 0),
            )
            return [
                {
                    "id": p.id,
                    "rank": p.rank if p.rank is not None else idx + 1,
                    "nickname": p.nickname,
                    "car": p.car,
                    "photoUrl": p.photo_url,
                }
                for idx, p in enumerate(approved)
            ]

    def request_access_code(self, nickname: Any) -> str:
        """Issue a new access code to the approved pilot with ``nickname``.

        Matching is case‑insensitive.  If several approved pilots share
        the nickname, the one registered first receives the code.
        """
        nickname = _clean(nickname)
        if not nickname:
            raise ValidationError("nickname is required")
        wanted = nickname.lower()
        with self.state.lock:
            pilot = next(
                (p for p in self.state.pilots if p.is_approved and p.nickname.lower() == wanted),
                None,
            )
            if pilot is None:
                raise NotFoundError("Pilot is not approved or does not exist")
            code = self._unique_code()
            pilot.access_codes.append(code)
            self.state.access_codes.add(code)
        logger.info("Issued access code to pilot %s", pilot.id)
        return code

    # ------------------------------------------------------------------
    # Admin authentication
    # ------------------------------------------------------------------
    def admin_login(self, password: Optional[str]) -> str:
        """Exchange the admin password for a fresh admin token."""
        if not check_password(password, self._admin_password):
            logger.warning("Rejected admin login with a wrong password")
            raise AuthError("Wrong password")
        with self.state.lock:
            self._purge_expired_tokens()
            token = generate_id()
            while token in self.state.admin_tokens:
                token = generate_id()
            self.state.admin_tokens[token] = self._clock()
            active = len(self.state.admin_tokens)
        logger.info("Admin logged in (%d active tokens)", active)
        return token

    def admin_logout(self, token: str) -> None:
        """Invalidate a single admin token.  Unknown tokens are ignored."""
        with self.state.lock:
            self.state.admin_tokens.pop(token, None)
        logger.info("Admin logged out")

    def require_admin(self, token: Optional[str]) -> None:
        """Raise ``AuthError`` unless ``token`` is a live admin token."""
        with self.state.lock:
            issued_at = self.state.admin_tokens.get(token) if token else None
            if issued_at is None:
                raise AuthError()
            if self._is_expired(issued_at):
                del self.state.admin_tokens[token]
                raise AuthError("Token expired")

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def list_applicants(self) -> List[Dict[str, Any]]:
        """Return the full records of all pending pilots."""
        with self.state.lock:
            return [p.to_dict() for p in self.state.pilots if not p.is_approved]

    def approve_or_reject(self, pilot_id: Any, approve: bool) -> None:
        """Approve a pilot (appending it to the ranking) or delete it.

        Approving an already approved pilot keeps its current rank.
        Rejecting removes the record together with any access codes it
        was issued.
        """
        with self.state.lock:
            pilot = self.state.find_pilot(pilot_id) if pilot_id is not None else None
            if pilot is None:
                raise NotFoundError("Pilot does not exist")
            if approve:
                if pilot.is_approved and pilot.rank is not None:
                    return
                ranks = [p.rank for p in self.state.approved_pilots() if p.rank is not None]
                pilot.status = APPROVED
                pilot.rank = (max(ranks) if ranks else 0) + 1
                logger.info("Approved pilot %s with rank %d", pilot.id, pilot.rank)
            else:
                self.state.pilots = [p for p in self.state.pilots if p.id != pilot.id]
                self.state.access_codes.difference_update(pilot.access_codes)
                logger.info("Rejected and removed pilot %s", pilot.id)

    def reorder(self, ordered_ids: Any) -> None:
        """Rank approved pilots in the order given by ``ordered_ids``.

        Listed approved pilots receive ranks 1..k in list order; ids
        that are unknown, pending or repeated are skipped.  Approved
        pilots missing from the list keep their relative order and are
        numbered after them, so ranks always end up as 1..N.
        """
        if not isinstance(ordered_ids, list) or not ordered_ids:
            raise ValidationError("orderedIds must be a non-empty list")
        with self.state.lock:
            approved = {p.id: p for p in self.state.approved_pilots()}
            ranked: List[Pilot] = []
            for pilot_id in ordered_ids:
                pilot = approved.pop(pilot_id, None) if isinstance(pilot_id, str) else None
                if pilot is not None:
                    ranked.append(pilot)
            # dicts keep insertion order, so ties fall back to registration order
            rest = sorted(approved.values(), key=lambda p: (p.rank is None, p.rank or 0))
            for rank, pilot in enumerate(ranked + rest, start=1):
                pilot.rank = rank
        logger.info("Reordered ranking: %d listed, %d appended", len(ranked), len(rest))

    def toggle_privacy(self) -> Dict[str, Any]:
        """Flip public mode, unless below the signup threshold.

        Below the threshold public mode is forced on and the result
        carries a ``note`` explaining why the toggle was not applied.
        """
        with self.state.lock:
            if len(self.state.pilots) < self.state.min_public_signups:
                self.state.public_mode = True
                logger.info("Privacy toggle ignored: below signup threshold")
                return {"publicMode": True, "note": THRESHOLD_NOTE}
            self.state.public_mode = not self.state.public_mode
            logger.info("Public mode set to %s", self.state.public_mode)
            return {"publicMode": self.state.public_mode}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _unique_id(self) -> str:
        pilot_id = generate_id()
        while self.state.find_pilot(pilot_id) is not None:
            pilot_id = generate_id()
        return pilot_id

    def _unique_code(self) -> str:
        code = generate_id()
        while code in self.state.access_codes:
            code = generate_id()
        return code

    def _is_expired(self, issued_at: float) -> bool:
        return bool(self._token_ttl) and self._clock() - issued_at > self._token_ttl

    def _purge_expired_tokens(self) -> None:
        if not self._token_ttl:
            return
        expired = [t for t, issued in self.state.admin_tokens.items() if self._is_expired(issued)]
        for token in expired:
            del self.state.admin_tokens[token]
