from __future__ import annotations
import asyncio
import logging
import httpx
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional
from template_deployer.core.config import settings
from template_deployer.core.errors import NotionAPIError, NotionErrorKind

log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def classify_status(status_code: int) -> NotionErrorKind:
    if status_code in (401, 403):
        return NotionErrorKind.UNAUTHORIZED
    if status_code == 404:
        return NotionErrorKind.NOT_FOUND
    if status_code == 429:
        return NotionErrorKind.RATE_LIMITED
    if status_code >= 500:
        return NotionErrorKind.INTERNAL
    return NotionErrorKind.INVALID_REQUEST


def _title(content: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


@dataclass
class NotionClient:
    """Async client for the subset of the Notion API used by deployments.

    Every call carries its own timeout. Rate-limited responses are retried
    with exponential backoff (``retry_delay * 2**attempt``), honouring a
    ``Retry-After`` header when present; every other error is raised as
    NotionAPIError immediately.
    """
    token: str
    api_base: str = settings.notion_api_base
    notion_version: str = settings.notion_version
    timeout: float = settings.api_timeout
    retry_attempts: int = settings.retry_attempts
    retry_delay: float = settings.retry_delay
    transport: Optional[httpx.AsyncBaseTransport] = None
    sleep: Sleep = field(default=asyncio.sleep, repr=False)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }

    async def _send(self, method: str, path: str, json: Optional[dict] = None) -> dict:
        url = f"{self.api_base}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.request(method, url, headers=self._headers(), json=json)
        except httpx.TimeoutException as e:
            raise NotionAPIError(NotionErrorKind.TIMEOUT, f"{method} {path} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise NotionAPIError(NotionErrorKind.TRANSPORT, f"{method} {path} failed: {e}") from e

        if r.is_success:
            return r.json()

        try:
            message = r.json().get("message", r.text)
        except ValueError:
            message = r.text
        retry_after = None
        if "Retry-After" in r.headers:
            try:
                retry_after = float(r.headers["Retry-After"])
            except ValueError:
                retry_after = None
        raise NotionAPIError(
            classify_status(r.status_code),
            f"{method} {path} returned {r.status_code}: {message}",
            status_code=r.status_code,
            retry_after=retry_after,
        )

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> dict:
        attempt = 0
        while True:
            try:
                return await self._send(method, path, json)
            except NotionAPIError as e:
                if e.kind != NotionErrorKind.RATE_LIMITED or attempt >= self.retry_attempts:
                    raise
                delay = e.retry_after if e.retry_after is not None else self.retry_delay * (2 ** attempt)
                attempt += 1
                log.warning(
                    "Rate limited on %s %s, retrying in %.1fs (attempt %d/%d)",
                    method, path, delay, attempt, self.retry_attempts,
                )
                await self.sleep(delay)

    async def identity_probe(self) -> dict:
        return await self._request("GET", "/users/me")

    async def search(self, query: str = "", object_type: Optional[str] = None, page_size: int = 10) -> List[str]:
        body: Dict[str, Any] = {"page_size": page_size}
        if query:
            body["query"] = query
        if object_type:
            body["filter"] = {"property": "object", "value": object_type}
        data = await self._request("POST", "/search", body)
        return [item["id"] for item in data.get("results", [])]

    async def create_page(self, title: str, parent_page_id: Optional[str] = None, children: Optional[list] = None) -> str:
        if parent_page_id:
            parent = {"type": "page_id", "page_id": parent_page_id}
        else:
            parent = {"type": "workspace", "workspace": True}
        body: Dict[str, Any] = {"parent": parent, "properties": {"title": _title(title)}}
        if children:
            body["children"] = children
        data = await self._request("POST", "/pages", body)
        return data["id"]

    async def create_database(self, parent_page_id: str, title: str, properties: Dict[str, Any]) -> str:
        body = {
            "parent": {"type": "page_id", "page_id": parent_page_id},
            "title": _title(title),
            "properties": properties,
        }
        data = await self._request("POST", "/databases", body)
        return data["id"]

    async def create_record(self, database_id: str, properties: Dict[str, Any]) -> str:
        body = {"parent": {"database_id": database_id}, "properties": properties}
        data = await self._request("POST", "/pages", body)
        return data["id"]

    async def retrieve_page(self, page_id: str) -> dict:
        return await self._request("GET", f"/pages/{page_id}")

# NOTE: Integration tokens only see pages shared with the integration; the
# parent page must be shared before databases can be created under it.
