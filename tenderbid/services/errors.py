"""
Доменные ошибки жизненного цикла тендеров и предложений.

Сервисы бросают только их; транспортный слой сопоставляет `kind`
с HTTP-статусом. От FastAPI не зависят.
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    NO_PERMISSION = "no_permission"
    CONFLICT = "conflict"
    DEPENDENCY_FAILURE = "dependency_failure"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class DomainError(Exception):
    """Базовая ошибка бизнес-логики."""

    kind: ErrorKind = ErrorKind.DEPENDENCY_FAILURE
    default_message = "operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    kind = ErrorKind.VALIDATION
    default_message = "invalid input"


class InvalidIdentifier(ValidationError):
    default_message = "identifier is not a valid UUID"


class InvalidStatus(ValidationError):
    default_message = "unknown status"


class InvalidStatusTransition(ValidationError):
    default_message = "status transition is not allowed"


class InvalidVersion(ValidationError):
    default_message = "version must be a positive integer"


class InvalidPagination(ValidationError):
    default_message = "limit and offset must be non-negative"


class TenderNameEmpty(ValidationError):
    default_message = "tender name is empty"


class BidNameEmpty(ValidationError):
    default_message = "bid name is empty"


class FeedbackEmpty(ValidationError):
    default_message = "feedback is empty"


class AuthorIdEmpty(ValidationError):
    default_message = "authorId is required for a user-authored bid"


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "not found"


class TenderNotFound(NotFoundError):
    default_message = "tender not found"


class BidNotFound(NotFoundError):
    default_message = "bid not found"


class OrganizationNotFound(NotFoundError):
    default_message = "organization not found"


class VersionNotFound(NotFoundError):
    default_message = "version not found"


class ReviewsNotFound(NotFoundError):
    default_message = "reviews not found"


class NoPermissionError(DomainError):
    kind = ErrorKind.NO_PERMISSION
    default_message = "no permission"


class NoAssociationWithOrganization(NoPermissionError):
    default_message = "user is not associated with the organization"


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = "conflict"


class CreatorMismatchOrNotFound(ConflictError):
    """Условное обновление не затронуло строк: тендера нет или пользователь не его автор."""

    default_message = "tender was not found or user is not the creator"


class DependencyFailure(DomainError):
    kind = ErrorKind.DEPENDENCY_FAILURE
    default_message = "dependent operation failed"


class TenderCloseFailed(DependencyFailure):
    default_message = "tender close failed"


class StorageFailure(DependencyFailure):
    """Хранилище доступно, но отклонило запрос (нарушение ограничения, переполнение)."""

    default_message = "storage rejected the operation"


class StorageUnavailable(DomainError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "storage is unavailable"
