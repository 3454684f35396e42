"""Boundary between the services and SQLAlchemy errors."""
import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import StorageError

logger = logging.getLogger(__name__)


def storage_operation(func):
    """Translate database failures of a service method into ``StorageError``.

    The wrapped method's owner must expose its session as ``self.db``; the
    session is rolled back so it stays usable for the rest of the request.
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{func.__qualname__} failed: {e}")
            raise StorageError() from e
    return wrapper
