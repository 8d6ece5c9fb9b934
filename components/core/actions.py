"""Boundary that turns repository calls into ActionResponse results."""

from typing import Awaitable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from components.core.exceptions import DomainError, ErrorKind
from components.core.logging_config import get_logger
from components.core.schemas import ActionResponse

logger = get_logger(__name__)
T = TypeVar("T")


async def run_action(action: Awaitable[T], failure_message: str) -> ActionResponse[T]:
    """
    Await a domain operation and report its outcome.

    Expected failures (missing entity, bad input) become an unsuccessful
    response carrying the error kind. Storage errors are logged here and
    reported with the generic ``failure_message``.
    """
    try:
        data = await action
    except DomainError as exc:
        logger.info(f"{failure_message}: {exc.detail}")
        return ActionResponse(success=False, error=exc.detail, error_kind=exc.kind)
    except SQLAlchemyError:
        logger.exception(failure_message)
        return ActionResponse(success=False, error=failure_message, error_kind=ErrorKind.INTERNAL)
    return ActionResponse(success=True, data=data)
