"""CLI commands for inspecting the folder tree."""

from __future__ import annotations

import click
from flask.cli import AppGroup, with_appcontext

from file_api.extensions import db
from file_api.models import Folder
from file_api.storage import get_storage

folders_cli = AppGroup("folders", help="Inspect folders and their storage directories.")


@folders_cli.command("check")
def check() -> None:
    """Report folders whose storage directory is missing."""

    storage = get_storage()
    missing = [
        folder
        for folder in Folder.query.order_by(Folder.id.asc()).all()
        if not storage.exists(folder.directory)
    ]
    for folder in missing:
        click.echo(f"missing: id={folder.id} path={folder.directory}")
    if missing:
        click.echo(f"{len(missing)} folder(s) out of sync with storage", err=True)
        raise SystemExit(1)
    click.echo("All folders match storage.")


def _echo_tree(folder: Folder, depth: int) -> None:
    click.echo(f"{'  ' * depth}{folder.name} ({folder.directory})")
    for child in sorted(folder.children, key=lambda f: f.name.lower()):
        _echo_tree(child, depth + 1)


@folders_cli.command("tree")
def tree() -> None:
    """Print the folder hierarchy."""

    roots = Folder.query.filter(Folder.parent_id.is_(None)).order_by(Folder.name.asc()).all()
    if not roots:
        click.echo("No folders.")
    for root in roots:
        _echo_tree(root, 0)


@click.command("init-db")
@click.option("--drop", is_flag=True, default=False, help="Drop existing tables first.")
@with_appcontext
def init_db(drop: bool) -> None:
    """Create the tables without running migrations (development only)."""

    if drop:
        db.drop_all()
    db.create_all()
    click.echo("Database ready.")


def register_commands(app) -> None:
    if "folders" not in app.cli.commands:
        app.cli.add_command(folders_cli)
    if "init-db" not in app.cli.commands:
        app.cli.add_command(init_db)
