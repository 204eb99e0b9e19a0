"""Targets that receive built index documents."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from elasticsearch import ApiError, Elasticsearch, SerializationError, TransportError
from elasticsearch.helpers import BulkIndexError, bulk

from .config import IndexSinkSettings, get_sink_settings
from .models import ImageIndex


logger = logging.getLogger(__name__)


class IndexSinkError(RuntimeError):
    """Raised when the search backend rejects or fails a request."""


class IndexSink(ABC):
    """Push target for image documents, keyed by image id.

    Submitting a key that already exists overwrites the stored document.
    """

    @abstractmethod
    def prepare(self) -> None:
        """Create the index if it does not exist yet."""

    @abstractmethod
    def submit(self, documents: Iterable[ImageIndex]) -> None:
        ...

    @abstractmethod
    def delete(self, keys: Iterable[str]) -> None:
        """Remove documents; unknown keys are ignored."""


class InMemoryIndexSink(IndexSink):
    """Dictionary-backed sink for local runs and tests."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self.prepared = False

    def prepare(self) -> None:
        self.prepared = True

    def submit(self, documents: Iterable[ImageIndex]) -> None:
        with self._lock:
            for document in documents:
                self._documents[document.key] = document.to_document()

    def delete(self, keys: Iterable[str]) -> None:
        with self._lock:
            for key in keys:
                self._documents.pop(str(key), None)

    def get(self, key: str) -> Optional[dict[str, Any]]:
        with self._lock:
            return self._documents.get(str(key))

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._documents)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


class ElasticIndexSink(IndexSink):
    """Elasticsearch sink using the bulk helper of the official client."""

    def __init__(self, settings: IndexSinkSettings, client: Optional[Elasticsearch] = None) -> None:
        self.settings = settings
        self.index_name = settings.images_index
        if client is None:
            basic_auth = (settings.user, settings.password or "") if settings.user else None
            client = Elasticsearch(settings.host, basic_auth=basic_auth, request_timeout=settings.timeout)
        self._client = client

    def prepare(self) -> None:
        try:
            if self._client.indices.exists(index=self.index_name):
                return
            self._client.indices.create(index=self.index_name, settings={"index": {"max_result_window": 1000000}})
        except (ApiError, SerializationError, TransportError) as exc:
            raise IndexSinkError(f"Failed to prepare index '{self.index_name}': {exc}") from exc
        logger.info("Created search index '%s'", self.index_name)

    def _bulk(self, actions: list[dict[str, Any]], *, ignore_status: tuple[int, ...] = ()) -> None:
        if not actions:
            return
        try:
            bulk(self._client, actions, ignore_status=ignore_status)
        except BulkIndexError as exc:
            first = exc.errors[0] if exc.errors else {}
            raise IndexSinkError(f"{len(exc.errors)} document(s) rejected, first: {first}") from exc
        except (ApiError, SerializationError, TransportError) as exc:
            raise IndexSinkError(f"Bulk request failed: {exc}") from exc

    def submit(self, documents: Iterable[ImageIndex]) -> None:
        actions = [
            {"_op_type": "index", "_index": self.index_name, "_id": document.key, "_source": document.to_document()}
            for document in documents
        ]
        self._bulk(actions)

    def delete(self, keys: Iterable[str]) -> None:
        actions = [{"_op_type": "delete", "_index": self.index_name, "_id": str(key)} for key in keys]
        self._bulk(actions, ignore_status=(404,))


def create_index_sink(settings: Optional[IndexSinkSettings] = None) -> IndexSink:
    settings = settings or get_sink_settings()
    if settings.kind == "memory":
        return InMemoryIndexSink()
    return ElasticIndexSink(settings)
