"""Collision-free folder slugs."""

from __future__ import annotations

from flask import current_app
from sqlalchemy import or_

from file_api.extensions import db
from file_api.models import Folder
from file_api.utils.slugify import slugify


def _suffix(slug: str, base: str) -> int | None:
    if slug == base:
        return 0
    tail = slug[len(base) + 1:]
    return int(tail) if tail.isdigit() else None


def compute_unique_slug(
    name: str,
    *,
    language: str | None = None,
    exclude_id: int | None = None,
) -> str:
    """Slug for ``name`` that no other folder uses.

    When the plain slug is taken, the result carries the highest numeric
    suffix found among ``<slug>`` and ``<slug>-<n>`` plus one, so
    "My Folder" gives ``my-folder``, then ``my-folder-1``, ``my-folder-2``.
    """

    if language is None:
        language = current_app.config.get("SLUG_LANGUAGE", "en")
    base = slugify(name, language=language)

    query = db.session.query(Folder.slug).filter(
        or_(Folder.slug == base, Folder.slug.like(f"{base}-%"))
    )
    if exclude_id is not None:
        query = query.filter(Folder.id != exclude_id)

    suffixes = [n for n in (_suffix(slug, base) for (slug,) in query) if n is not None]
    if 0 not in suffixes:
        return base
    return f"{base}-{max(suffixes) + 1}"
