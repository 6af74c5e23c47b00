from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from flask import Flask, current_app
from flask.cli import with_appcontext

from adapters.config_loader import resolve_config
from adapters.document_store import DocumentStore, FirestoreDocumentStore, SqliteDocumentStore
from services.clinic_state import ClinicState

logger = logging.getLogger(__name__)

EXTENSION_KEY = "clinic_state"


def build_store(config: dict[str, Any]) -> DocumentStore:
    backend = config.get("DOCUMENT_STORE", "sqlite")
    collection = config["DOCUMENT_COLLECTION"]
    if backend == "sqlite":
        return SqliteDocumentStore(config["DATABASE"], collection=collection)
    if backend == "firestore":
        return FirestoreDocumentStore(
            config.get("FIRESTORE_CLIENT"),
            collection=collection,
            project=config.get("FIRESTORE_PROJECT"),
        )
    raise ValueError(f"Unknown document store backend: {backend!r}")


def init_app(app: Flask) -> ClinicState:
    """Build the session state for *app* and load the stored document once."""

    clinic_config = resolve_config(app.config.get("CLINIC_CONFIG_PATH"))
    state = ClinicState(
        store=build_store(app.config),
        config=clinic_config,
        autosave=app.config.get("AUTOSAVE", True),
    )
    if app.config.get("AUTO_LOAD", True):
        state.load()
    app.extensions[EXTENSION_KEY] = state
    app.cli.add_command(init_db_command)
    return state


def get_state() -> ClinicState:
    return current_app.extensions[EXTENSION_KEY]


@click.command("init-db")
@click.option("--force", is_flag=True, help="Delete the SQLite file before creating the schema.")
@with_appcontext
def init_db_command(force: bool) -> None:
    """Create the document table used by the SQLite store."""
    config = current_app.config
    if config.get("DOCUMENT_STORE", "sqlite") != "sqlite":
        click.echo("Nothing to initialize for this document store.")
        return
    path = Path(config["DATABASE"])
    if force and path.exists():
        path.unlink()
    SqliteDocumentStore(path, collection=config["DOCUMENT_COLLECTION"])
    click.echo("Database initialized.")
