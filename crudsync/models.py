"""Per-resource configuration model."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from crudsync import config
from crudsync.types import can_delete, can_save, parse_operations


class ResourceSettings(BaseModel):
    """Everything a resource can be configured with besides its url and name."""

    model_config = {"extra": "forbid", "frozen": True}

    primary_key: str = Field(default_factory=lambda: config.settings.PRIMARY_KEY, min_length=1)
    plural: str | None = None  # defaults to name + "S"
    json_body: bool = False
    headers: dict[str, Any] | Callable[[], dict[str, Any]] = Field(default_factory=dict)
    list_transform: Callable[[Any], Any] | None = None
    item_transform: Callable[[Any], Any] | None = None
    available_operations: str = "CRUD"
    reset_action_type: str = Field(default_factory=lambda: config.settings.RESET_ACTION_TYPE, min_length=1)
    merge_on_write: bool = False
    initial_data: list[dict[str, Any]] | None = None
    response_type: Literal["json", "text", "bytes"] = "json"

    @field_validator("available_operations")
    @classmethod
    def _check_operations(cls, value: str) -> str:
        return parse_operations(value)

    @property
    def can_save(self) -> bool:
        return can_save(self.available_operations)

    @property
    def can_delete(self) -> bool:
        return can_delete(self.available_operations)
