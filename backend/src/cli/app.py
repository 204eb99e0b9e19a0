"""Typer application entrypoint."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from db.lifecycle import ensure_schema
from indexing.config import get_indexing_settings
from indexing.handlers import ImagesIndexingHandler, ImagesRemovalHandler
from indexing.worker import WorkerSupervisor, build_workers
from indices.service import ImageIndexCreationService
from indices.sink import create_index_sink
from logging_config import configure_logging
from tasks.service import ImageTasksService


configure_logging()


app = typer.Typer(help="Images feed backend CLI")
db_app = typer.Typer(help="Manage the domain database")
index_app = typer.Typer(help="Build and publish image index documents")
tasks_app = typer.Typer(help="Inspect and fill the task queue")
worker_app = typer.Typer(help="Run background indexing loops")

app.add_typer(db_app, name="db")
app.add_typer(index_app, name="index")
app.add_typer(tasks_app, name="tasks")
app.add_typer(worker_app, name="worker")


@db_app.command("init")
def db_init() -> None:
    ensure_schema()
    typer.echo("Schema ready.")


@index_app.command("build")
def index_build(image_id: int = typer.Argument(..., help="Image identifier")) -> None:
    """Print the document for one image without publishing it."""
    document = ImageIndexCreationService().create_index(image_id)
    if document is None:
        typer.echo(f"Image {image_id} not found.")
        raise typer.Exit(code=1)
    Console().print_json(data=document.to_document())


@index_app.command("drain")
def index_drain(
    bucket_size: Optional[int] = typer.Option(None, min=1, help="Tasks per bucket; defaults to INDEXING_BUCKET_SIZE"),
    removals: bool = typer.Option(False, "--removals", help="Drain the removal queue instead"),
) -> None:
    """Drain the queue once in the foreground."""
    settings = get_indexing_settings()
    sink = create_index_sink()
    if removals:
        handler = ImagesRemovalHandler(sink)
        size = bucket_size or settings.removal_bucket_size
    else:
        handler = ImagesIndexingHandler(sink)
        size = bucket_size or settings.bucket_size
    handler.prepare()
    processed = handler.handle(size)
    typer.echo(f"Processed {processed} task(s).")


@tasks_app.command("status")
def tasks_status() -> None:
    pending = ImageTasksService().pending_counts()
    table = Table(title="Pending tasks")
    table.add_column("Task class")
    table.add_column("Pending", justify="right")
    for task_class, count in sorted(pending.items()):
        table.add_row(task_class, str(count))
    rprint(table)


@tasks_app.command("enqueue")
def tasks_enqueue(
    image_ids: List[int] = typer.Argument(..., help="Image identifiers"),
    remove: bool = typer.Option(False, "--remove", help="Queue removal instead of indexing"),
) -> None:
    service = ImageTasksService()
    if remove:
        count = service.create_removal_tasks(image_ids)
    else:
        count = service.create_indexing_tasks(image_ids)
    typer.echo(f"Queued {count} task(s).")


async def _run_workers() -> None:
    supervisor = WorkerSupervisor(build_workers())
    supervisor.start()
    try:
        await asyncio.Event().wait()
    finally:
        await supervisor.stop()


@worker_app.command("run")
def worker_run() -> None:
    """Run the indexing and removal loops until interrupted."""
    try:
        asyncio.run(_run_workers())
    except KeyboardInterrupt:
        typer.echo("Stopped.")


if __name__ == "__main__":
    app()
