"""BlackList RO API client.

A thin wrapper around the registry's HTTP API built on ``requests``.
It is meant for scripts and bots that register pilots, read the
leaderboard or drive the admin actions:

* :meth:`get_config` – current visibility and signup counters.
* :meth:`register` – register a new pilot.
* :meth:`list_pilots` – ranked list of approved pilots.
* :meth:`request_access_code` – obtain a code for the restricted listing.
* :meth:`admin_login` / :meth:`admin_logout` – manage the admin session.
* :meth:`list_applicants`, :meth:`approve`, :meth:`reject`,
  :meth:`reorder`, :meth:`toggle_privacy` – admin actions.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with ``status_code`` and ``message`` keys,
the message being taken from the server's ``{"error": ...}`` body.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class BlackListAPI:
    """Client for the BlackList RO registry API.

    The admin token returned by :meth:`admin_login` and the access code
    returned by :meth:`request_access_code` are remembered and sent on
    subsequent requests (``x-admin-token`` and ``x-access-code``).
    """

    def __init__(
        self,
        *,
        base_url: str,
        admin_token: Optional[str] = None,
        access_code: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server URL, e.g. ``http://localhost:4000``.  The
                ``/api`` prefix is added by the client.
            admin_token: Optional admin token from an earlier login.
            access_code: Optional access code for the restricted listing.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.admin_token = admin_token
        self.access_code = access_code
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None,
        admin: bool = False
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request against ``/api<path>``.

        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}/api{path}"
        headers: Dict[str, str] = {}
        if admin and self.admin_token:
            headers["x-admin-token"] = self.admin_token
        if self.access_code:
            headers["x-access-code"] = self.access_code
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def get_config(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/config")

    def register(
        self, nickname: str, car: str, photo_url: Optional[str] = None
    ) -> Tuple[Optional[str], Optional[Error]]:
        """Register a pilot and return its id."""
        payload: Dict[str, Any] = {"nickname": nickname, "car": car}
        if photo_url:
            payload["photoUrl"] = photo_url
        data, error = self._request("POST", "/register", json_body=payload)
        if error:
            return None, error
        return data.get("id"), None

    def list_pilots(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Return approved pilots in rank order (empty list on failure)."""
        data, error = self._request("GET", "/list")
        if error:
            return [], error
        return data.get("pilots", []), None

    def request_access_code(self, nickname: str) -> Tuple[Optional[str], Optional[Error]]:
        """Request an access code and remember it for :meth:`list_pilots`."""
        data, error = self._request("POST", "/access/request", json_body={"nickname": nickname})
        if error:
            return None, error
        self.access_code = data.get("accessCode")
        return self.access_code, None

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def admin_login(self, password: str) -> Tuple[Optional[str], Optional[Error]]:
        data, error = self._request("POST", "/admin/login", json_body={"password": password})
        if error:
            return None, error
        self.admin_token = data.get("token")
        return self.admin_token, None

    def admin_logout(self) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("POST", "/admin/logout", admin=True)
        if error:
            return False, error
        self.admin_token = None
        return True, None

    def list_applicants(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/admin/applicants", admin=True)
        if error:
            return [], error
        return data.get("applicants", []), None

    def approve(self, pilot_id: str) -> Tuple[bool, Optional[Error]]:
        return self._decide(pilot_id, True)

    def reject(self, pilot_id: str) -> Tuple[bool, Optional[Error]]:
        return self._decide(pilot_id, False)

    def _decide(self, pilot_id: str, approve: bool) -> Tuple[bool, Optional[Error]]:
        _, error = self._request(
            "POST", "/admin/approve", json_body={"id": pilot_id, "approve": approve}, admin=True
        )
        return error is None, error

    def reorder(self, ordered_ids: List[str]) -> Tuple[bool, Optional[Error]]:
        _, error = self._request(
            "POST", "/admin/reorder", json_body={"orderedIds": list(ordered_ids)}, admin=True
        )
        return error is None, error

    def toggle_privacy(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Flip public mode; the result may carry a ``note`` when forced public."""
        return self._request("POST", "/admin/toggle-privacy", admin=True)
