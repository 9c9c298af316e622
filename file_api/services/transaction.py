from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from file_api.errors import OperationFailure
from file_api.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def transaction(action: str) -> Iterator[Session]:
    """Commit on success; on any exception roll back and raise :class:`OperationFailure`.

    Storage calls made inside the block are not undone by the rollback.
    """

    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        logger.exception("%s failed, transaction rolled back", action, extra={"event": action})
        raise OperationFailure(str(exc)) from exc
