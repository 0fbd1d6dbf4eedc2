"""
Error types raised by the registries.

``NotFoundError`` and ``ConflictError`` are HTTPExceptions so FastAPI renders
them directly. ``ValidationFailedError`` carries every violated field and is
rendered by the handler registered in ``backend.main``.
"""
from typing import Any, Iterable

from fastapi import HTTPException, status
from pydantic import ValidationError


class NotFoundError(HTTPException):
    """The requested id does not resolve to a record."""

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} with id={resource_id} not found",
        )


class ConflictError(HTTPException):
    """A write would violate a uniqueness constraint."""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ValidationFailedError(Exception):
    """One or more field constraints were violated."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__("Validation failed")
        self.errors = errors

    @classmethod
    def from_errors(cls, raw_errors: Iterable[dict[str, Any]]) -> "ValidationFailedError":
        """Build from pydantic / FastAPI error dicts (``loc``, ``msg``)."""
        errors = []
        for error in raw_errors:
            # Drop the request-part prefix FastAPI adds ("body", "path", ...).
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
            errors.append({"field": ".".join(loc) or "body", "message": error.get("msg", "")})
        return cls(errors)

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationFailedError":
        return cls.from_errors(exc.errors())

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]

    def to_dict(self) -> dict[str, Any]:
        return {"detail": "Validation failed", "errors": self.errors}
