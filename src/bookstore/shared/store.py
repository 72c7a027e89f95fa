"""Translation of persistence faults into ``StoreFailure``."""

from contextlib import contextmanager

import structlog
from protean.exceptions import ValidationError

from bookstore.exceptions import BookstoreError, StoreFailure

logger = structlog.get_logger(__name__)


@contextmanager
def store_operation(operation: str):
    """Run a block of repository calls, surfacing driver errors as ``StoreFailure``.

    Domain errors and field validation errors pass through untouched; anything
    else raised by the store (timeouts, aborted transactions, connection loss)
    becomes a generic failure for ``operation``. A unit of work opened inside
    the block has already rolled back by the time the error reaches here.
    """
    try:
        yield
    except (BookstoreError, ValidationError):
        raise
    except Exception as exc:
        logger.error("store_operation_failed", operation=operation, error=str(exc), exc_info=True)
        raise StoreFailure(operation, reason=str(exc)) from exc
