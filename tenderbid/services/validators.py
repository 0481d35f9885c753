import uuid
from enum import Enum
from typing import Type, TypeVar

from tenderbid.services.errors import InvalidIdentifier, InvalidPagination, InvalidStatus, InvalidVersion

E = TypeVar("E", bound=Enum)


def parse_id(value: uuid.UUID | str, field: str = "id") -> uuid.UUID:
    """Разбирает идентификатор из строки запроса."""
    if isinstance(value, uuid.UUID):
        return value
    if not value:
        raise InvalidIdentifier(f"{field} is empty")
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise InvalidIdentifier(f"{field} '{value}' is not a valid UUID")


def parse_status(value: E | str, enum_cls: Type[E]) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(item.value for item in enum_cls)
        raise InvalidStatus(f"Unknown status '{value}', expected one of: {allowed}")


# Пределы колонок INTEGER / BIGINT в PostgreSQL
MAX_VERSION = 2**31 - 1
MAX_PAGE_VALUE = 2**63 - 1


def check_version(version: int) -> int:
    if not isinstance(version, int) or isinstance(version, bool) or not 1 <= version <= MAX_VERSION:
        raise InvalidVersion(f"Invalid version: {version}")
    return version


def check_page(limit: int, offset: int) -> None:
    if not (0 <= limit <= MAX_PAGE_VALUE and 0 <= offset <= MAX_PAGE_VALUE):
        raise InvalidPagination(f"Invalid pagination: limit={limit}, offset={offset}")


def is_blank(value: str | None) -> bool:
    """Пустое значение в патче означает "не менять"."""
    return value is None or value == ""
