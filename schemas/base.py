"""
Base schema and shared helpers for PascalCase JSON configuration blocks
"""

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigModel(BaseModel):
    """
    Base for configuration blocks.

    JSON documents use PascalCase keys (``BaseURL``, ``DryRunMode``); each
    field declares its JSON key as an alias and can also be populated by its
    Python name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def parse_raw_json(model: Type[ModelT], raw: Any) -> ModelT:
    """
    Validate a raw JSON sub-document into ``model``.

    ``raw`` may be an already-decoded mapping, JSON text or bytes. ``None``
    (the key was absent) is treated as an empty object.

    Raises:
        pydantic.ValidationError: If the payload is malformed
    """
    if raw is None:
        raw = {}
    if isinstance(raw, (bytes, bytearray, str)):
        return model.model_validate_json(raw)
    return model.model_validate(raw)
