"""Translation of database failures into the transient error category."""

import functools
import logging

from django.db import DatabaseError

from .exceptions import TransientError

logger = logging.getLogger(__name__)


def translate_storage_errors(func):
    """
    Re-raise ``DatabaseError`` from ``func`` as ``TransientError``.

    The original exception is logged with its traceback and chained, but its
    text is not exposed to the caller. ``IntegrityError`` handling that
    carries domain meaning (duplicates) must happen inside ``func``.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Storage failure in %s", func.__qualname__)
            raise TransientError() from exc

    return wrapper
