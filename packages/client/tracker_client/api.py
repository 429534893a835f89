"""
HTTP client for the Resource Tracker API.

Thin async wrapper over the three collection endpoints. Non-2xx responses
raise ``ApiRequestError`` carrying the server's error envelope; transport
failures raise ``ApiUnavailableError``.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any, Optional

import httpx
import structlog
from pydantic import BaseModel

from resource_tracker_shared.schemas.assignments import AssignmentCreate, AssignmentRead
from resource_tracker_shared.schemas.engineers import EngineerCreate, EngineerRead, EngineerUpdate
from resource_tracker_shared.schemas.projects import ProjectCreate, ProjectRead, ProjectUpdate

from .mirror import Mirror

log = structlog.get_logger()


class ApiError(Exception):
    """Base class for client-side API failures."""


class ApiRequestError(ApiError):
    def __init__(self, status_code: int, message: str, errors: Optional[list[str]] = None):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class ApiUnavailableError(ApiError):
    pass


def _payload(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class TrackerApi:
    """Async client for the projects / engineers / assignments collections."""

    def __init__(
        self,
        base_url: str,
        verify_tls: bool = True,
        request_timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._verify_tls = verify_tls
        self._request_timeout = request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def open(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._request_timeout),
            verify=self._verify_tls,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TrackerApi":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        collection: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> Any:
        url = f"{self._base_url}/{collection}/"
        if self._client is None:
            raise ApiUnavailableError(f"{method} {url} failed: client not opened")
        try:
            resp = await self._client.request(method, url, json=json, params=params)
        except httpx.TransportError as exc:
            log.error("api.unreachable", method=method, url=url, error=str(exc))
            raise ApiUnavailableError(f"{method} {url} failed: {exc}") from exc

        if resp.is_error:
            message, errors = resp.reason_phrase, []
            try:
                body = resp.json().get("error", {})
                message = body.get("message", message)
                errors = body.get("errors", [])
            except ValueError:
                pass
            log.warning("api.request_failed", method=method, url=url, status=resp.status_code, message=message)
            raise ApiRequestError(resp.status_code, message, errors)
        return resp.json()

    # --- Projects ---

    async def list_projects(self) -> list[ProjectRead]:
        data = await self._request("GET", "projects")
        return [ProjectRead.model_validate(item) for item in data]

    async def create_project(self, project_in: ProjectCreate) -> ProjectRead:
        data = await self._request("POST", "projects", json=_payload(project_in))
        return ProjectRead.model_validate(data)

    async def update_project(self, project_in: ProjectUpdate) -> ProjectRead:
        data = await self._request("PUT", "projects", json=_payload(project_in))
        return ProjectRead.model_validate(data)

    async def delete_project(self, project_id: uuid.UUID) -> None:
        await self._request("DELETE", "projects", params={"id": str(project_id)})

    # --- Engineers ---

    async def list_engineers(self) -> list[EngineerRead]:
        data = await self._request("GET", "engineers")
        return [EngineerRead.model_validate(item) for item in data]

    async def create_engineer(self, engineer_in: EngineerCreate) -> EngineerRead:
        data = await self._request("POST", "engineers", json=_payload(engineer_in))
        return EngineerRead.model_validate(data)

    async def update_engineer(self, engineer_in: EngineerUpdate) -> EngineerRead:
        data = await self._request("PUT", "engineers", json=_payload(engineer_in))
        return EngineerRead.model_validate(data)

    async def delete_engineer(self, engineer_id: uuid.UUID) -> None:
        await self._request("DELETE", "engineers", params={"id": str(engineer_id)})

    # --- Assignments ---

    async def list_assignments(self) -> list[AssignmentRead]:
        data = await self._request("GET", "assignments")
        return [AssignmentRead.model_validate(item) for item in data]

    async def create_assignment(self, assignment_in: AssignmentCreate) -> AssignmentRead:
        data = await self._request("POST", "assignments", json=_payload(assignment_in))
        return AssignmentRead.model_validate(data)

    async def delete_assignment(self, assignment_id: uuid.UUID) -> None:
        await self._request("DELETE", "assignments", params={"id": str(assignment_id)})

    # --- Bulk ---

    async def load_all(self) -> Mirror:
        """Fetch all three collections concurrently."""
        projects, engineers, assignments = await asyncio.gather(
            self.list_projects(),
            self.list_engineers(),
            self.list_assignments(),
        )
        return Mirror.from_collections(projects, engineers, assignments)
