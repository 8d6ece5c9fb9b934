"""Translate action results into HTTP responses."""

from fastapi import HTTPException

from components.core.exceptions import ErrorKind
from components.core.schemas import ActionResponse

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


def unwrap(response: ActionResponse):
    """Return the data of a successful response or raise the matching HTTPException."""
    if response.success:
        return response.data
    status_code = STATUS_BY_KIND.get(response.error_kind, 500)
    raise HTTPException(status_code=status_code, detail=response.error)
