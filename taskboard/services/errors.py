from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from taskboard.exceptions import InternalError
from taskboard.utils.logger import setup_logger

logger = setup_logger("services")


def storage_errors_as_internal(func):
    """Report unexpected store failures as a generic ``InternalError``.

    Failures a service maps onto its own outcome (duplicate username, missing
    owner) must be caught inside ``func``. Whatever storage error escapes is
    logged here and never reaches the client.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Storage failure in {func.__qualname__}: {e}", exc_info=True)
            raise InternalError() from e

    return wrapper
