"""Showcase document: a server-described payment form."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .components import Group, to_str


def to_string_map(value) -> Dict[str, str]:
    """Converts a JSON object of scalars into a string map.

    Members whose value is null or not a scalar are dropped.
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"expected an object, got {type(value).__name__}")
    return {
        key: to_str(item) for key, item in value.items()
        if item is not None and not isinstance(item, (dict, list))
    }


class ShowcaseError(BaseModel):
    """Server remark about a form field (``name``) or the whole form."""
    name: Optional[str] = None
    alert: Optional[str] = None


class Showcase(BaseModel):
    """Payment form with hidden parameters and the money sources it accepts."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: Optional[str] = None
    form: Optional[Group] = None
    money_source: List[str] = Field(default_factory=list)
    hidden_fields: Dict[str, str] = Field(default_factory=dict)
    errors: List[ShowcaseError] = Field(default_factory=list, alias="error")

    @field_validator("form", mode="before")
    @classmethod
    def _form_from_items(cls, value):
        if isinstance(value, list):
            return {"type": "group", "items": value}
        return value

    @field_validator("hidden_fields", mode="before")
    @classmethod
    def _hidden_fields_to_str(cls, value):
        return to_string_map(value)

    @field_validator("money_source", "errors", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    def is_valid(self) -> bool:
        return self.form is None or self.form.is_valid()

    def payment_parameters(self) -> Dict[str, str]:
        """Hidden fields overlaid by the flattened form."""
        params = dict(self.hidden_fields)
        if self.form is not None:
            self.form.fill_parameters(params)
        return params


class _Params(BaseModel):
    params: Dict[str, str]

    @field_validator("params", mode="before")
    @classmethod
    def _params_to_str(cls, value):
        return to_string_map(value)


def parse_params(content: bytes) -> Dict[str, str]:
    """Decodes a ``{"params": {...}}`` document of final payment parameters."""
    return _Params.model_validate_json(content).params
