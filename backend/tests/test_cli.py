from typer.testing import CliRunner

from cli.app import app
from db import session as db_session


runner = CliRunner()


def test_enqueue_and_status(monkeypatch, session_factory):
    monkeypatch.setattr(db_session, "SessionLocal", session_factory)

    result = runner.invoke(app, ["tasks", "enqueue", "1", "2", "2"])
    assert result.exit_code == 0
    assert "Queued 2 task(s)." in result.output

    result = runner.invoke(app, ["tasks", "status"])
    assert result.exit_code == 0
    assert "indexing:image" in result.output


def test_index_build_prints_document(monkeypatch, session_factory, seed):
    monkeypatch.setattr(db_session, "SessionLocal", session_factory)
    image_id = seed.image(seed.donor(), reference_id="IMG-CLI")

    result = runner.invoke(app, ["index", "build", str(image_id)])

    assert result.exit_code == 0
    assert '"referenceId": "IMG-CLI"' in result.output


def test_index_build_unknown_image(monkeypatch, session_factory):
    monkeypatch.setattr(db_session, "SessionLocal", session_factory)

    result = runner.invoke(app, ["index", "build", "404"])

    assert result.exit_code == 1


def test_index_drain_processes_queue(monkeypatch, session_factory, seed):
    monkeypatch.setattr(db_session, "SessionLocal", session_factory)
    image_id = seed.image(seed.donor())
    runner.invoke(app, ["tasks", "enqueue", str(image_id), "404"])

    result = runner.invoke(app, ["index", "drain", "--bucket-size", "1"])

    assert result.exit_code == 0
    assert "Processed 2 task(s)." in result.output
