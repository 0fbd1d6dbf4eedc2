"""
Shared pydantic building blocks for request/response schemas.
"""
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from backend.core.exceptions import ValidationFailedError

M = TypeVar("M", bound=BaseModel)


class CamelModel(BaseModel):
    """Response base: snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(BaseModel):
    message: str


def blank_to_none(value: Any) -> Any:
    """Optional text fields store "absent" instead of an empty string."""
    if isinstance(value, str) and value == "":
        return None
    return value


def reject_null(value: Optional[str]) -> str:
    """Used on update fields that may be omitted but never explicitly nulled."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value


def parse_payload(model_cls: type[M], payload: dict[str, Any]) -> M:
    """
    Validate *payload* against *model_cls* outside of a request, reporting
    every violated field as a single ValidationFailedError.
    """
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError.from_pydantic(exc) from exc
