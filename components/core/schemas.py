"""Core schemas for the application."""

from decimal import Decimal
from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel

from components.core.exceptions import ErrorKind, InvalidArgumentError

T = TypeVar("T")


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str


class PercentageValidation(BaseModel):
    """Advisory check that percentages add up to 100."""
    valid: bool
    total: Decimal


class PartialUpdate(BaseModel):
    """
    Base for PATCH bodies.

    Every field may be omitted, but the ones named in ``NOT_NULL`` back
    required columns and cannot be cleared with an explicit null.
    """
    NOT_NULL: ClassVar[Tuple[str, ...]] = ()

    def changes(self) -> Dict[str, Any]:
        """Fields the client sent, keyed by name."""
        data = self.model_dump(exclude_unset=True)
        cleared = [field for field in self.NOT_NULL if field in data and data[field] is None]
        if cleared:
            raise InvalidArgumentError(f"Fields cannot be null: {', '.join(cleared)}")
        return data


class ActionResponse(BaseModel, Generic[T]):
    """Outcome of a domain operation: either data or an error description."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
