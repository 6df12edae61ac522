from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..core.exceptions import ConstraintViolation, IOFailure
from .connection import Database

logger = logging.getLogger(__name__)


@contextmanager
def session_scope(db: Database) -> Iterator[Session]:
    """One unit of work: commit on success, rollback on any error.

    Driver errors are translated into the domain taxonomy here so that no
    SQLAlchemy exception escapes the repositories.
    """
    session = db.session()
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("constraint violation: %s", exc.orig)
        raise ConstraintViolation(str(exc.orig)) from exc
    except OperationalError as exc:
        session.rollback()
        logger.warning("storage unavailable: %s", exc.orig)
        raise IOFailure(str(exc.orig)) from exc
    except DBAPIError as exc:
        session.rollback()
        logger.warning("storage error: %s", exc.orig)
        raise IOFailure(str(exc.orig)) from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
