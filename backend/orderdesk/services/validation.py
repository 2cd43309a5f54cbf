"""Field rules shared by the services; each check appends to an error list"""
from typing import Any, Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email

from orderdesk.core import messages
from orderdesk.core.constants import EDITABLE_STATUSES, MIN_PASSWORD_LENGTH


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def check_required(errors: List[str], data: dict, labels: dict) -> None:
    """``labels`` maps attribute name to display label"""
    for name, label in labels.items():
        if is_blank(data.get(name)):
            errors.append(messages.required(label))


def check_max_length(errors: List[str], value: Optional[str], label: str, max_length: int) -> None:
    if value is not None and len(value) > max_length:
        errors.append(messages.too_long(label, max_length))


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def check_email(errors: List[str], value: Optional[str], required: bool = False) -> None:
    if is_blank(value):
        if required:
            errors.append(messages.required("Email"))
        return
    if not is_valid_email(value):
        errors.append(messages.ValidationMessages.INVALID_EMAIL)


def check_password(errors: List[str], value: Optional[str]) -> None:
    if value is None or len(value) < MIN_PASSWORD_LENGTH:
        errors.append(messages.ValidationMessages.PASSWORD_LENGTH)


def check_status(errors: List[str], value: Optional[int], allowed: Iterable[int] = EDITABLE_STATUSES) -> None:
    if value is not None and value not in allowed:
        errors.append(messages.ValidationMessages.INVALID_STATUS)


def check_non_negative(errors: List[str], value: Optional[int], message: str) -> None:
    if value is not None and value < 0:
        errors.append(message)
