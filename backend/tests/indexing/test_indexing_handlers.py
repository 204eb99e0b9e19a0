from __future__ import annotations

import pytest

from domain.remover import ImagesDataRemover
from indices.service import ImageIndexCreationService
from indices.sink import InMemoryIndexSink
from indexing.handlers import ImagesIndexingHandler, ImagesRemovalHandler
from tasks.service import ImageTasksService, TasksProcessingService


@pytest.fixture
def sink():
    return InMemoryIndexSink()


def _indexing_handler(session_factory, sink):
    return ImagesIndexingHandler(
        sink,
        tasks_service=TasksProcessingService(session_factory),
        creation_service=ImageIndexCreationService(session_factory),
    )


def _removal_handler(session_factory, sink):
    return ImagesRemovalHandler(
        sink,
        tasks_service=TasksProcessingService(session_factory),
        remover=ImagesDataRemover(session_factory),
    )


def test_indexing_handler_submits_documents(session_factory, seed, sink):
    donor_id = seed.donor()
    first = seed.image(donor_id, reference_id="IMG1")
    second = seed.image(donor_id, reference_id="IMG2")
    ImageTasksService(session_factory).create_indexing_tasks([first, second, 404])
    handler = _indexing_handler(session_factory, sink)

    handler.prepare()
    processed = handler.handle(10)

    assert sink.prepared
    assert processed == 3
    assert sink.keys() == sorted([str(first), str(second)])
    assert ImageTasksService(session_factory).pending_counts() == {}


def test_indexing_failure_keeps_tasks(session_factory, seed, sink, monkeypatch):
    image_id = seed.image(seed.donor())
    ImageTasksService(session_factory).create_indexing_tasks([image_id])

    def fail(documents):
        raise RuntimeError("bulk rejected")

    monkeypatch.setattr(sink, "submit", fail)

    with pytest.raises(RuntimeError):
        _indexing_handler(session_factory, sink).handle(10)

    assert ImageTasksService(session_factory).pending_counts() == {"indexing:image": 1}


def test_removal_handler_deletes_rows_and_documents(session_factory, seed, sink):
    donor_id = seed.donor()
    image_id = seed.image(donor_id)
    kept_id = seed.image(donor_id, reference_id="IMG2")
    indexing = _indexing_handler(session_factory, sink)
    ImageTasksService(session_factory).create_indexing_tasks([image_id, kept_id])
    indexing.handle(10)

    ImageTasksService(session_factory).create_removal_tasks([image_id])
    processed = _removal_handler(session_factory, sink).handle(10)

    assert processed == 1
    assert sink.keys() == [str(kept_id)]
    assert ImageIndexCreationService(session_factory).create_index(image_id) is None


def test_removal_of_unknown_image_is_harmless(session_factory, sink):
    ImageTasksService(session_factory).create_removal_tasks([404])

    assert _removal_handler(session_factory, sink).handle(10) == 1
