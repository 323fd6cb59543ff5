"""Tour of Schools API client.

This module defines a small client wrapper around the ``/api/schools``
REST resource.  The client uses the ``requests`` library internally to
make HTTP calls and exposes high‑level methods for the operations the
views need:

* :meth:`SchoolAPI.list_schools` – return every school.
* :meth:`SchoolAPI.get_school` – fetch one school, raising on 404.
* :meth:`SchoolAPI.get_school_no_404` – fetch one school via the
  ``?id=`` query, returning ``None`` when it does not exist.
* :meth:`SchoolAPI.search_schools` – find schools whose name contains a term.
* :meth:`SchoolAPI.add_school` – create a school.
* :meth:`SchoolAPI.update_school` – replace a school.
* :meth:`SchoolAPI.delete_school` / :meth:`SchoolAPI.delete_school_by_id`
  – remove a school.

Failures never propagate out of the client, with one exception: a 404
from :meth:`SchoolAPI.get_school`.  Everything else is logged, written
to the injected :class:`MessageService` and converted to an empty
result so the views keep running.  There is no retry and no backoff.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)


class SchoolAPIError(Exception):
    """Base class for errors raised by :class:`SchoolAPI`."""


class SchoolNotFoundError(SchoolAPIError):
    """Raised by :meth:`SchoolAPI.get_school` when the server answers 404."""

    def __init__(self, school_id: int, message: str = "") -> None:
        super().__init__(message or f"School {school_id} not found")
        self.school_id = school_id


@dataclass
class School:
    """A school record as exchanged with the server.

    Attributes:
        id: Identifier assigned by the server.  Never changes.
        name: Display name.  Editable.
    """

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "School":
        return cls(id=int(data["id"]), name=str(data["name"]))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MessageService:
    """Append‑only log of human readable messages.

    The views display the log; the API client writes to it.  An
    instance is created by the application and handed to the client at
    construction, so separate applications (or tests) never share one.
    """

    def __init__(self) -> None:
        self.messages: List[str] = []

    def add(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages = []


class SchoolAPI:
    """Client for the schools resource of the Tour of Schools backend."""

    schools_path = "/api/schools"

    def __init__(
        self,
        *,
        base_url: str,
        message_service: MessageService,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the backend, e.g. ``http://localhost:8000``.
            message_service: Sink receiving a message for every operation.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.message_service = message_service
        self.session = session or requests.Session()
        self.timeout = timeout

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/schools``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PUT).
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for an empty body) and
            ``error`` is ``None``. On failure, ``data`` is ``None`` and
            ``error`` is a dictionary with keys ``status_code`` and
            ``message`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            # A failed Response is falsy, so compare against None explicitly.
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") if isinstance(err_json, dict) else ""
                    if not isinstance(message, str):
                        message = str(message)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            return None, {"status_code": None, "message": str(exc)}
        except ValueError as exc:
            # Body was not valid JSON.
            return None, {"status_code": None, "message": f"Invalid JSON response: {exc}"}

    def _log(self, message: str) -> None:
        """Record a successful operation in the message log."""
        logger.info(message)
        self.message_service.add(f"SchoolService: {message}")

    def _handle_error(self, operation: str, error: Dict[str, Any]) -> None:
        """Record a failed operation; the caller returns its fallback value."""
        logger.error("%s failed (%s): %s", operation, error.get("status_code"), error.get("message"))
        self.message_service.add(f"SchoolService: {operation} failed: {error.get('message')}")

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------
    def list_schools(self) -> List[School]:
        """GET all schools.  Returns an empty list on failure."""
        data, error = self._request("GET", self.schools_path)
        if error:
            self._handle_error("list_schools", error)
            return []
        self._log("fetched schools")
        return self._to_schools(data)

    def get_school(self, school_id: int) -> Optional[School]:
        """GET a school by id.

        Raises:
            SchoolNotFoundError: The server answered 404.  Other
                failures return ``None``.
        """
        operation = f"get_school id={school_id}"
        data, error = self._request("GET", f"{self.schools_path}/{school_id}")
        if error:
            self._handle_error(operation, error)
            if error.get("status_code") == 404:
                raise SchoolNotFoundError(school_id, error.get("message", ""))
            return None
        if not isinstance(data, dict):
            self._handle_error(operation, {"status_code": None, "message": "unexpected response"})
            return None
        self._log(f"fetched school id={school_id}")
        return School.from_dict(data)

    def get_school_no_404(self, school_id: int) -> Optional[School]:
        """GET a school by id via the ``?id=`` query.

        The server answers with a list of zero or one schools, so a
        missing school is reported as ``None`` instead of an error.
        """
        data, error = self._request("GET", self.schools_path, params={"id": school_id})
        if error:
            self._handle_error(f"get_school_no_404 id={school_id}", error)
            return None
        schools = self._to_schools(data)
        school = schools[0] if schools else None
        outcome = "fetched" if school else "did not find"
        self._log(f"{outcome} school id={school_id}")
        return school

    def search_schools(self, term: str) -> List[School]:
        """GET schools whose name contains ``term``.

        A blank term returns an empty list without contacting the server.
        """
        if not term.strip():
            return []
        data, error = self._request("GET", self.schools_path, params={"name": term})
        if error:
            self._handle_error("search_schools", error)
            return []
        self._log(f'found schools matching "{term}"')
        return self._to_schools(data)

    # ------------------------------------------------------------------
    # Save operations
    # ------------------------------------------------------------------
    def add_school(self, name: str) -> Optional[School]:
        """POST a new school.  Returns it with its server‑assigned id."""
        data, error = self._request("POST", self.schools_path, json_body={"name": name})
        if error:
            self._handle_error("add_school", error)
            return None
        if not isinstance(data, dict):
            self._handle_error("add_school", {"status_code": None, "message": "unexpected response"})
            return None
        school = School.from_dict(data)
        self._log(f"added school w/ id={school.id}")
        return school

    def update_school(self, school: School) -> Optional[bool]:
        """PUT the whole school.  Returns ``True`` when acknowledged."""
        _, error = self._request("PUT", self.schools_path, json_body=school.to_dict())
        if error:
            self._handle_error("update_school", error)
            return None
        self._log(f"updated school id={school.id}")
        return True

    def delete_school_by_id(self, school_id: int) -> Optional[bool]:
        """DELETE a school by id.  Returns ``True`` when acknowledged."""
        _, error = self._request("DELETE", f"{self.schools_path}/{school_id}")
        if error:
            self._handle_error("delete_school", error)
            return None
        self._log(f"deleted school id={school_id}")
        return True

    def delete_school(self, school: School) -> Optional[bool]:
        """DELETE the given school."""
        return self.delete_school_by_id(school.id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _to_schools(data: Any) -> List[School]:
        if not isinstance(data, list):
            return []
        return [School.from_dict(item) for item in data if isinstance(item, dict)]
