"""
Notes API Client.

Async HTTP client for the notes backend, shared by the TUI and the CLI.
Every request carries an X-Frontend-ID header for log routing, and every
failure is raised as the same ApplicationError subclass the backend used.
"""

from typing import Any

import httpx

from notesapp.backend.core.config import get_app_config, get_server_base_url
from notesapp.backend.core.exceptions import (
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from notesapp.backend.core.logging import get_logger, log_with_source
from notesapp.backend.schemas.folder import FolderResponse
from notesapp.backend.schemas.note import NoteResponse

logger = get_logger(__name__)

_UNSET: Any = object()


def _error_message(response: httpx.Response) -> tuple[str, dict[str, Any]]:
    """Pull message and details out of an ErrorResponse body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", {}
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return f"HTTP {response.status_code}", {}
    return error.get("message", f"HTTP {response.status_code}"), error.get("details") or {}


def raise_for_status(response: httpx.Response) -> None:
    """
    Translate an error response into an application exception.

    Raises:
        NotFoundError: On 404
        ValidationError: On 400 and 422
        ExternalServiceError: On any other 4xx/5xx status
    """
    if response.is_success:
        return
    message, details = _error_message(response)
    if response.status_code == 404:
        raise NotFoundError(message)
    if response.status_code in (400, 422):
        raise ValidationError(message, details=details)
    raise ExternalServiceError(message, status_code=response.status_code)


class NotesAPIClient:
    """
    HTTP client for the folders and notes API.

    Usage:
        client = NotesAPIClient(frontend="tui")
        folder = await client.create_folder("Work")
        note = await client.create_note(folder.id, title="Plan")
        await client.update_note(note.id, content="# Plan")
        await client.close()

    Tests pass an httpx transport (e.g. ASGITransport) to run against an
    in-process app.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        api_prefix: str | None = None,
        frontend: str = "cli",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: Backend base URL. Read from application.yaml when None.
            timeout: Request timeout in seconds. Read from application.yaml when None.
            api_prefix: Prefix of the CRUD routes. Read from application.yaml when None.
            frontend: Value of the X-Frontend-ID header and the log source.
            transport: Optional httpx transport.
        """
        if base_url is None or timeout is None or api_prefix is None:
            try:
                config_base_url, config_timeout = get_server_base_url()
                config_prefix = get_app_config().application.api_prefix
            except Exception as e:
                if base_url is None:
                    raise RuntimeError(
                        "Could not determine server URL from config/settings/application.yaml"
                    ) from e
                config_base_url, config_timeout, config_prefix = base_url, 30.0, "/api"
        else:
            config_base_url, config_timeout, config_prefix = base_url, timeout, api_prefix

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self.api_prefix = (api_prefix if api_prefix is not None else config_prefix).rstrip("/")
        self.frontend = frontend
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "NotesAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Make an HTTP request and raise on any error status.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path relative to the base URL (e.g. /api/folders)
            **kwargs: Additional arguments for httpx

        Raises:
            ExternalServiceError: When the server cannot be reached
            NotFoundError, ValidationError: Mapped from the response status
        """
        client = await self._get_client()
        log_with_source(logger, self.frontend, "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                self.frontend,
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(f"Cannot reach backend: {e}") from e

        log_with_source(
            logger,
            self.frontend,
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        raise_for_status(response)
        return response

    # ---- health -----------------------------------------------------------

    async def readiness(self) -> dict[str, Any]:
        """
        Fetch /health/ready. A 503 is returned as data, not raised.

        Raises:
            ExternalServiceError: When the server cannot be reached
        """
        client = await self._get_client()
        try:
            response = await client.get("/health/ready")
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Cannot reach backend: {e}") from e
        if response.status_code not in (200, 503):
            raise_for_status(response)
        return response.json()

    # ---- folders ----------------------------------------------------------

    async def list_folders(self) -> list[FolderResponse]:
        response = await self.request("GET", f"{self.api_prefix}/folders")
        return [FolderResponse.model_validate(item) for item in response.json()]

    async def get_folder(self, folder_id: str) -> FolderResponse:
        response = await self.request("GET", f"{self.api_prefix}/folders/{folder_id}")
        return FolderResponse.model_validate(response.json())

    async def create_folder(self, name: str) -> FolderResponse:
        response = await self.request("POST", f"{self.api_prefix}/folders", json={"name": name})
        return FolderResponse.model_validate(response.json())

    async def rename_folder(self, folder_id: str, name: str) -> FolderResponse:
        response = await self.request(
            "PUT", f"{self.api_prefix}/folders/{folder_id}", json={"name": name}
        )
        return FolderResponse.model_validate(response.json())

    async def delete_folder(self, folder_id: str) -> None:
        await self.request("DELETE", f"{self.api_prefix}/folders/{folder_id}")

    # ---- notes ------------------------------------------------------------

    async def list_notes(self, folder_id: str | None = None) -> list[NoteResponse]:
        params = {"folder_id": folder_id} if folder_id else None
        response = await self.request("GET", f"{self.api_prefix}/notes", params=params)
        return [NoteResponse.model_validate(item) for item in response.json()]

    async def get_note(self, note_id: str) -> NoteResponse:
        response = await self.request("GET", f"{self.api_prefix}/notes/{note_id}")
        return NoteResponse.model_validate(response.json())

    async def create_note(
        self,
        folder_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> NoteResponse:
        payload = {"folder_id": folder_id, "title": title, "content": content}
        response = await self.request("POST", f"{self.api_prefix}/notes", json=payload)
        return NoteResponse.model_validate(response.json())

    async def update_note(
        self,
        note_id: str,
        *,
        title: str | None = _UNSET,
        content: str | None = _UNSET,
        folder_id: str = _UNSET,
    ) -> NoteResponse:
        """
        Update a note. Only the keyword arguments actually passed are sent.

        Raises:
            ValidationError: If nothing is passed or the folder is unknown
            NotFoundError: If the note does not exist
        """
        fields = {"title": title, "content": content, "folder_id": folder_id}
        payload = {key: value for key, value in fields.items() if value is not _UNSET}
        response = await self.request("PUT", f"{self.api_prefix}/notes/{note_id}", json=payload)
        return NoteResponse.model_validate(response.json())

    async def delete_note(self, note_id: str) -> None:
        await self.request("DELETE", f"{self.api_prefix}/notes/{note_id}")
