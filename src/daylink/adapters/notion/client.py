"""HTTP client for the Notion API, exposed as a ``RecordStore``."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from daylink.adapters.http_resilience import ResilientClient, build_limiter
from daylink.domain.model import RecordPage
from daylink.domain.ports.store import StoreError

from .schema import ErrorResponse, NotionBaseModel, Page, PropertyItemList, QueryResponse
from .translator import build_filter, relation_patch, to_stored_record, truncated_relations

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import TracebackType

    from daylink.adapters.http_resilience import ResilientClientFactory
    from daylink.config.notion import NotionConfig
    from daylink.domain.model import StoredRecord
    from daylink.domain.ports.store import RecordFilter

log = getLogger(__name__)

MAX_PAGE_SIZE = 100
MAX_RELATION_WRITE = 100
_AUTH_STATUSES = frozenset({401, 403})


class NotionAPIError(StoreError):
    """Raised when the Notion API rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        code: str | None = None,
        fatal: bool = False,
    ) -> None:
        super().__init__(message, fatal=fatal)
        self.status = status
        self.code = code


class NotionAuthenticationError(NotionAPIError):
    """Raised when the integration token is rejected; never scoped to one record."""

    def __init__(
        self, message: str, *, status: int | None = None, code: str | None = None
    ) -> None:
        super().__init__(message, status=status, code=code, fatal=True)


class NotionClient:
    """Synchronous facade over the async Notion endpoints used by the reconciler.

    Every call runs on the same event loop and draws from one rate limiter, so the
    Notion request budget holds across calls. Close the client when done.
    """

    def __init__(
        self,
        *,
        config: NotionConfig,
        client_factory: ResilientClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory: ResilientClientFactory = client_factory or ResilientClient
        self._limiter = build_limiter(self._resilience.ratelimit)
        self._runner = asyncio.Runner()

    def __enter__(self) -> NotionClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._runner.close()

    def query_page(
        self,
        collection_id: str,
        record_filter: RecordFilter,
        *,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> RecordPage:
        return self._runner.run(
            self._query_page_async(
                collection_id=collection_id,
                record_filter=record_filter,
                cursor=cursor,
                page_size=page_size,
            )
        )

    def get_record(self, record_id: str) -> StoredRecord:
        return self._runner.run(self._get_record_async(record_id=record_id))

    def update_record(self, record_id: str, patch: Mapping[str, Sequence[str]]) -> None:
        self._runner.run(self._update_record_async(record_id=record_id, patch=patch))

    def _connect(self) -> ResilientClient:
        return self._client_factory(self._resilience, limiter=self._limiter)

    async def _query_page_async(
        self,
        *,
        collection_id: str,
        record_filter: RecordFilter,
        cursor: str | None,
        page_size: int | None,
    ) -> RecordPage:
        body: dict[str, object] = {"filter": build_filter(record_filter)}
        if cursor is not None:
            body["start_cursor"] = cursor
        if page_size is not None:
            body["page_size"] = min(page_size, MAX_PAGE_SIZE)

        async with self._connect() as client:
            payload = await self._perform_request(
                client,
                "POST",
                f"databases/{collection_id}/query",
                json=body,
            )
        response = _validate(QueryResponse, payload)
        log.debug(
            "Queried %s: %s record(s), has_more=%s",
            collection_id,
            len(response.results),
            response.has_more,
        )
        return RecordPage(
            records=tuple(to_stored_record(page) for page in response.results),
            next_cursor=response.cursor,
        )

    async def _get_record_async(self, *, record_id: str) -> StoredRecord:
        async with self._connect() as client:
            payload = await self._perform_request(client, "GET", f"pages/{record_id}")
            page = _validate(Page, payload)
            complete: dict[str, list[str]] = {}
            for name, property_id in truncated_relations(page).items():
                log.debug("Relation %s on %s is truncated; paging property items", name, page.id)
                complete[name] = await self._fetch_relation_ids(
                    client,
                    page_id=page.id,
                    property_id=property_id,
                )
        return to_stored_record(page, complete_relations=complete)

    async def _fetch_relation_ids(
        self,
        client: ResilientClient,
        *,
        page_id: str,
        property_id: str,
    ) -> list[str]:
        ids: list[str] = []
        cursor: str | None = None
        while True:
            params: dict[str, str | int] = {"page_size": MAX_PAGE_SIZE}
            if cursor is not None:
                params["start_cursor"] = cursor
            payload = await self._perform_request(
                client,
                "GET",
                f"pages/{page_id}/properties/{property_id}",
                params=params,
            )
            items = _validate(PropertyItemList, payload)
            ids.extend(item.relation.id for item in items.results)
            if not items.has_more or not items.next_cursor:
                return ids
            cursor = items.next_cursor

    async def _update_record_async(
        self,
        *,
        record_id: str,
        patch: Mapping[str, Sequence[str]],
    ) -> None:
        properties: dict[str, object] = {}
        for name, ids in patch.items():
            if len(ids) > MAX_RELATION_WRITE:
                raise NotionAPIError(
                    f"Cannot write {len(ids)} relations to {name!r} on {record_id}; "
                    f"Notion accepts at most {MAX_RELATION_WRITE} per request"
                )
            properties.update(relation_patch(name, ids))

        async with self._connect() as client:
            await self._perform_request(
                client,
                "PATCH",
                f"pages/{record_id}",
                json={"properties": properties},
            )

    async def _perform_request(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: object | None = None,
        params: Mapping[str, str | int] | None = None,
    ) -> object:
        try:
            response = await client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise NotionAPIError(f"Notion request {method} {path} failed: {exc}") from exc

        if response.is_error:
            raise _error_from_response(response, method=method, path=path)

        try:
            return response.json()
        except ValueError as exc:
            raise NotionAPIError(
                f"Notion returned a non-JSON body for {method} {path}",
                status=response.status_code,
            ) from exc


def _error_from_response(response: httpx.Response, *, method: str, path: str) -> NotionAPIError:
    code: str | None = None
    message = response.reason_phrase
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("object") == "error":
        try:
            error = ErrorResponse.model_validate(payload)
        except ValidationError:
            log.debug("Unrecognised Notion error body: %s", payload)
        else:
            code = error.code
            message = error.message

    log.error(f"Notion API error {response.status_code} ({code}) on {method} {path}: {message}")
    text = f"Notion API error {response.status_code} on {method} {path}: {message}"
    if response.status_code in _AUTH_STATUSES:
        return NotionAuthenticationError(text, status=response.status_code, code=code)
    return NotionAPIError(text, status=response.status_code, code=code)


def _validate[ModelT: NotionBaseModel](model: type[ModelT], payload: object) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise NotionAPIError(f"Unexpected Notion response payload: {exc}") from exc

