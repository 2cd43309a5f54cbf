"""Outcome of a service call, translated to HTTP by the routes"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

from fastapi import status

from orderdesk.core.errors import ApiError
from orderdesk.core.messages import ValidationMessages

T = TypeVar("T")

VALIDATION = "validation"
NOT_FOUND = "not_found"
CONFLICT = "conflict"
UNAUTHORIZED = "unauthorized"
FORBIDDEN = "forbidden"
OPERATION = "operation"

STATUS_CODES = {
    VALIDATION: status.HTTP_400_BAD_REQUEST,
    UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    FORBIDDEN: status.HTTP_403_FORBIDDEN,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CONFLICT: status.HTTP_409_CONFLICT,
    OPERATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass
class ServiceResult(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    error_type: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ServiceResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str, error_type: str = OPERATION) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)

    @classmethod
    def invalid(cls, errors: List[str]) -> "ServiceResult":
        return cls(
            success=False,
            error=ValidationMessages.FAILED,
            errors=list(errors),
            error_type=VALIDATION,
        )


def unwrap(result: ServiceResult) -> Any:
    """Return ``data`` or raise the matching ``ApiError``"""
    if result.success:
        return result.data
    raise ApiError(
        STATUS_CODES.get(result.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR),
        result.error or ValidationMessages.FAILED,
        result.errors or None,
    )
