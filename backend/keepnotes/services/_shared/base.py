"""Shared service plumbing: units of work and error translation."""

from __future__ import annotations

from keepnotes.core import errors as api_errors
from keepnotes.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from keepnotes.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


def translate_service_error(exc: ServiceError) -> api_errors.APIError:
    """
    Map a service-level error to its API (HTTP) counterpart.

    Authentication failures always carry the same generic message so callers
    cannot tell which check failed.

    :param exc: Exception raised within the service layer.
    :returns: API error ready to be rendered as problem+json.
    """
    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(str(exc))

    if isinstance(exc, ConflictError):
        return api_errors.Conflict(str(exc))

    if isinstance(exc, AuthenticationError):
        return api_errors.Unauthorized()

    # Any other ServiceError subclass → 400 Bad Request
    return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.

    Notes
    -----
    Services never touch the global session directly; they always go
    through a Unit of Work.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success, rollback on error)."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

