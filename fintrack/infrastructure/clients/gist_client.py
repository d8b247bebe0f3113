"""HTTP implementation of RemoteDocumentClient backed by GitHub Gists."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
import structlog

from fintrack.core.config import settings
from fintrack.core.metrics import (
    track_remote_sync_latency,
    record_remote_sync_success,
    record_remote_sync_failure,
)
from fintrack.domain.entities import Transaction
from fintrack.domain.exceptions import (
    MalformedRemoteDocumentException,
    RemoteAuthException,
    RemoteDocumentNotFoundException,
    RemoteSyncException,
    RemoteSyncTimeoutException,
)
from fintrack.domain.interfaces import RemoteDocumentClient

logger = structlog.get_logger(__name__)


class HttpGistClient(RemoteDocumentClient):
    """
    HTTP client for the GitHub Gist API.

    The transaction list lives in a single file of a private gist as
    ``{"lastSync": ..., "transactions": [...]}``. Each operation makes
    exactly one request (plus one raw download for truncated files).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        file_name: str | None = None,
        description: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.github_api_url).rstrip("/")
        self._timeout = timeout or settings.github_api_timeout
        self._file_name = file_name or settings.remote_file_name
        self._description = description or settings.remote_description
        self._transport = transport

    async def create(self, credential: str, transactions: List[Transaction]) -> str:
        payload = {
            "description": self._description,
            "public": False,
            "files": {self._file_name: {"content": self._render(transactions)}},
        }

        data = await self._request(
            "create",
            "POST",
            f"{self._base_url}/gists",
            credential,
            payload=payload,
        )

        document_id = data.get("id")
        if not document_id:
            record_remote_sync_failure("create", "malformed")
            raise MalformedRemoteDocumentException("create response has no id")

        logger.info("remote_document_created", document_id=document_id)
        return str(document_id)

    async def update(
        self,
        credential: str,
        document_id: str,
        transactions: List[Transaction],
    ) -> None:
        payload = {
            "files": {self._file_name: {"content": self._render(transactions)}},
        }

        await self._request(
            "update",
            "PATCH",
            f"{self._base_url}/gists/{document_id}",
            credential,
            payload=payload,
            document_id=document_id,
        )

        logger.info(
            "remote_document_updated",
            document_id=document_id,
            count=len(transactions),
        )

    async def fetch(self, credential: str, document_id: str) -> Optional[Dict[str, Any]]:
        data = await self._request(
            "fetch",
            "GET",
            f"{self._base_url}/gists/{document_id}",
            credential,
            document_id=document_id,
        )

        file_entry = (data.get("files") or {}).get(self._file_name)
        if not file_entry:
            logger.info("remote_document_file_missing", document_id=document_id)
            return None

        content = file_entry.get("content")
        if file_entry.get("truncated") and file_entry.get("raw_url"):
            content = await self._download_raw(file_entry["raw_url"], credential)

        if not content:
            return None

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            record_remote_sync_failure("fetch", "malformed")
            raise MalformedRemoteDocumentException(str(e)) from e

    def _render(self, transactions: List[Transaction]) -> str:
        """Serialize the document content."""
        return json.dumps(
            {
                "lastSync": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                "transactions": [t.to_dict() for t in transactions],
            },
            ensure_ascii=False,
            indent=2,
        )

    def _headers(self, credential: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {credential}",
            "Accept": "application/vnd.github.v3+json",
        }

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        credential: str,
        payload: Dict[str, Any] | None = None,
        document_id: str | None = None,
    ) -> Dict[str, Any]:
        """Send one request and map failures to domain exceptions."""
        try:
            with track_remote_sync_latency(operation):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        json=payload,
                        headers=self._headers(credential),
                    )
        except httpx.TimeoutException:
            record_remote_sync_failure(operation, "timeout")
            logger.warning("remote_sync_timeout", operation=operation)
            raise RemoteSyncTimeoutException()
        except httpx.HTTPError as e:
            record_remote_sync_failure(operation, "error")
            logger.warning("remote_sync_transport_error", operation=operation, error=str(e))
            raise RemoteSyncException(message=f"Remote sync request failed: {e}") from e

        if response.status_code in (401, 403):
            record_remote_sync_failure(operation, "auth")
            raise RemoteAuthException(response.status_code)

        if response.status_code == 404:
            record_remote_sync_failure(operation, "not_found")
            raise RemoteDocumentNotFoundException(document_id or "")

        if response.status_code >= 400:
            record_remote_sync_failure(operation, "error")
            raise RemoteSyncException(
                message=f"Remote sync API error: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            record_remote_sync_failure(operation, "malformed")
            raise MalformedRemoteDocumentException("response is not JSON") from e

        record_remote_sync_success(operation)
        return data if isinstance(data, dict) else {}

    async def _download_raw(self, raw_url: str, credential: str) -> str:
        """Download the full content of a truncated gist file."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(raw_url, headers=self._headers(credential))
        except httpx.TimeoutException:
            record_remote_sync_failure("fetch", "timeout")
            raise RemoteSyncTimeoutException()
        except httpx.HTTPError as e:
            record_remote_sync_failure("fetch", "error")
            raise RemoteSyncException(message=f"Raw download failed: {e}") from e

        if response.status_code >= 400:
            record_remote_sync_failure("fetch", "error")
            raise RemoteSyncException(
                message="Raw download failed",
                status_code=response.status_code,
            )

        return response.text
