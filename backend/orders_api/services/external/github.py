"""GitHub contents API client for the store document."""

from urllib.parse import quote

import httpx
import structlog

from orders_api.config import StoreConfig
from orders_api.models.store import StoreDocument
from orders_api.services.exceptions import ServiceError

logger = structlog.get_logger(__name__)


class DocumentStoreError(ServiceError):
    """Document store call failed."""

    pass


class FetchError(DocumentStoreError):
    """Reading the store document failed."""

    pass


class StoreDocumentError(FetchError):
    """Store document content could not be decoded."""

    pass


class WriteError(DocumentStoreError):
    """Writing the store document failed, including a stale version token."""

    pass


class GitHubContentsService:
    """Reads and writes a single JSON file through the GitHub contents API.

    Each call opens its own ``httpx.AsyncClient``. Nothing is retried: a
    rejected write is reported to the caller as ``WriteError``.
    """

    def __init__(self, config: StoreConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport

    def _get_url(self) -> str:
        """Contents API URL of the configured document."""
        owner = quote(self.config.owner, safe="")
        repo = quote(self.config.repo, safe="")
        path = quote(self.config.path.lstrip("/"), safe="/")
        return f"{self.config.api_url}/repos/{owner}/{repo}/contents/{path}"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.config.token}",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.config.timeout)

    async def get_document(self) -> StoreDocument:
        """Fetch and decode the store document with its version token.

        Returns:
            Decoded document and the blob sha it was read at

        Raises:
            FetchError: If the API returns a non-success status or is unreachable
            StoreDocumentError: If the file content is not a JSON object
        """
        async with self._client() as client:
            try:
                response = await client.get(
                    self._get_url(),
                    params={"ref": self.config.branch},
                    headers=self._get_headers(),
                )
            except httpx.RequestError as e:
                logger.error("GitHub GET request failed", path=self.config.path, error=str(e))
                raise FetchError(f"GitHub GET failed: {e}") from e

        if not response.is_success:
            logger.error(
                "GitHub GET failed",
                path=self.config.path,
                status_code=response.status_code,
                response_body=response.text[:1000],
            )
            raise FetchError(f"GitHub GET failed: {response.status_code} {response.text}")

        try:
            payload = response.json()
            # A directory path returns a listing instead of a file object
            if not isinstance(payload, dict):
                raise ValueError(f"expected a file, got {type(payload).__name__}")
            document = StoreDocument.from_content(payload.get("content") or "", payload.get("sha"))
        except ValueError as e:
            raise StoreDocumentError(f"Store document {self.config.path} is invalid: {e}") from e

        logger.debug("Fetched store document", path=self.config.path, sha=document.sha)
        return document

    async def put_document(self, document: StoreDocument, message: str) -> str | None:
        """Write the document back, conditional on its version token.

        Args:
            document: Document to write; its ``sha`` must be the one it was read at
            message: Commit message

        Returns:
            Sha of the new commit, if the API reported one

        Raises:
            WriteError: If the API rejects the write (e.g. 409 on a stale sha)
                or the document holds values JSON cannot represent
        """
        try:
            content = document.encode()
        except ValueError as e:
            raise WriteError(f"Store document cannot be serialized: {e}") from e

        body: dict[str, str] = {
            "message": message,
            "content": content,
            "branch": self.config.branch,
        }
        if document.sha:
            body["sha"] = document.sha

        async with self._client() as client:
            try:
                response = await client.put(
                    self._get_url(),
                    headers={**self._get_headers(), "Content-Type": "application/json"},
                    json=body,
                )
            except httpx.RequestError as e:
                logger.error("GitHub PUT request failed", path=self.config.path, error=str(e))
                raise WriteError(f"GitHub PUT failed: {e}") from e

        if not response.is_success:
            logger.error(
                "GitHub PUT failed",
                path=self.config.path,
                status_code=response.status_code,
                response_body=response.text[:1000],
            )
            raise WriteError(f"GitHub PUT failed: {response.status_code} {response.text}")

        # The write has landed; a response without commit details is not an error
        try:
            payload = response.json()
        except ValueError:
            return None
        commit = payload.get("commit") if isinstance(payload, dict) else None
        commit_sha = commit.get("sha") if isinstance(commit, dict) else None
        return commit_sha if isinstance(commit_sha, str) else None
