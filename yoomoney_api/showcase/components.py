"""Form components of a showcase.

A showcase form is a tree of ``Group`` containers holding parameter controls.
Controls are edited by a UI through their ``value`` field, the tree is
validated with ``validate`` and flattened into payment parameters with
``fill_parameters``. A ``Select`` option may own a nested group which takes
part in both operations only while that option is selected.

The set of node types is closed: ``AnyComponent`` is a union discriminated
by the ``type`` member of the server's JSON.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from fractions import Fraction
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..types import ConstructionError


_DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
_TEL_PATTERN = re.compile(r"\+?\d{6,15}", re.ASCII)
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_MONTH_PATTERN = re.compile(r"(\d{4})-(\d{2})", re.ASCII)


def to_str(value: Any) -> Optional[str]:
    """Converts a JSON scalar into its string form, keeping None."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_decimal(value: str) -> Optional[Decimal]:
    """Parses a plain decimal literal; returns None for anything else."""
    if not _DECIMAL_PATTERN.fullmatch(value):
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


class Layout(str, Enum):
    """Arrangement of a group's items. Presentation only."""
    VERTICAL = "VBox"
    HORIZONTAL = "HBox"


class SelectStyle(str, Enum):
    RADIO_GROUP = "RadioGroup"
    SPINNER = "Spinner"


class Component(BaseModel):
    """Node of a showcase form."""
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    def is_valid(self) -> bool:
        return validate(self)


class ParameterControl(Component):
    """Control whose value is transmitted under ``name``."""
    name: str = Field(min_length=1)
    value: Optional[str] = None
    value_autofill: Optional[str] = None
    required: bool = True
    readonly: bool = False
    label: Optional[str] = None
    hint: Optional[str] = None
    alert: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def _value_to_str(cls, value):
        return to_str(value)

    def is_valid_value(self, value: Optional[str]) -> bool:
        """Checks a candidate value against the control's constraints.

        An empty value is valid only for optional controls; type-specific
        constraints apply to non-empty values.
        """
        if not value:
            return not self.required
        return self._is_valid_inner(value)

    def _is_valid_inner(self, value: str) -> bool:
        return True


class _LengthLimited(ParameterControl):
    minlength: Optional[int] = Field(default=None, ge=0)
    maxlength: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_lengths(self):
        if self.minlength is not None and self.maxlength is not None \
                and self.minlength > self.maxlength:
            raise ConstructionError(f"{self.name}: minlength > maxlength")
        return self

    def _is_valid_inner(self, value: str) -> bool:
        return (self.minlength is None or len(value) >= self.minlength) and \
            (self.maxlength is None or len(value) <= self.maxlength)


class Text(_LengthLimited):
    """Single-line text field, optionally constrained by a regular expression."""
    type: Literal["text"] = "text"
    pattern: Optional[str] = None
    keyboard_suggest: Optional[str] = None

    @model_validator(mode="after")
    def _check_pattern(self):
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ConstructionError(f"{self.name}: invalid pattern {self.pattern!r}: {e}")
        return self

    def _is_valid_inner(self, value: str) -> bool:
        return super()._is_valid_inner(value) and \
            (self.pattern is None or re.fullmatch(self.pattern, value) is not None)


class TextArea(_LengthLimited):
    type: Literal["textarea"] = "textarea"


class Email(ParameterControl):
    type: Literal["email"] = "email"

    def _is_valid_inner(self, value: str) -> bool:
        return _EMAIL_PATTERN.fullmatch(value) is not None


class Tel(ParameterControl):
    type: Literal["tel"] = "tel"

    def _is_valid_inner(self, value: str) -> bool:
        return _TEL_PATTERN.fullmatch(value) is not None


class Number(ParameterControl):
    """Numeric field.

    A value is valid when it is a decimal literal inside ``[min, max]`` (each
    bound optional) and an exact multiple of ``step`` counted from zero.
    Arithmetic is decimal, so no rounding tolerance applies.
    """
    type: Literal["number"] = "number"
    min: Optional[Decimal] = None
    max: Optional[Decimal] = None
    step: Decimal = Decimal(1)

    @field_validator("step", mode="before")
    @classmethod
    def _default_step(cls, value):
        return Decimal(1) if value is None else value

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.step <= 0:
            raise ConstructionError(f"{self.name}: step must be positive, got {self.step}")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ConstructionError(f"{self.name}: min > max")
        return self

    def _is_valid_inner(self, value: str) -> bool:
        number = parse_decimal(value)
        if number is None:
            return False
        # Fractions keep the step check exact at any number of digits.
        return (self.min is None or number >= self.min) and \
            (self.max is None or number <= self.max) and \
            (Fraction(number) / Fraction(self.step)).denominator == 1


class Amount(Number):
    """Money amount: a number with a currency, cents by default."""
    type: Literal["amount"] = "amount"
    min: Optional[Decimal] = Decimal("0.01")
    step: Decimal = Decimal("0.01")
    currency: str = "RUB"

    @field_validator("step", mode="before")
    @classmethod
    def _default_step(cls, value):
        return Decimal("0.01") if value is None else value


class Checkbox(ParameterControl):
    """Boolean flag transmitted as ``"true"`` or ``"false"``; required means checked."""
    type: Literal["checkbox"] = "checkbox"
    checked: bool = False

    @model_validator(mode="before")
    @classmethod
    def _value_from_checked(cls, data):
        if isinstance(data, dict) and data.get("value") is None:
            data = dict(data, value=bool(data.get("checked", False)))
        return data

    @property
    def is_checked(self) -> bool:
        return self.value == "true"

    def is_valid_value(self, value: Optional[str]) -> bool:
        if value not in ("true", "false", "", None):
            return False
        return not self.required or value == "true"


class Date(ParameterControl):
    """Calendar date field, ``YYYY-MM-DD``."""
    type: Literal["date"] = "date"
    min: Optional[date] = None
    max: Optional[date] = None

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ConstructionError(f"{self.name}: min > max")
        return self

    def parse(self, value: str) -> Optional[date]:
        if not _DATE_PATTERN.fullmatch(value):
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None

    def _is_valid_inner(self, value: str) -> bool:
        parsed = self.parse(value)
        return parsed is not None and \
            (self.min is None or parsed >= self.min) and \
            (self.max is None or parsed <= self.max)


class Month(Date):
    """Year and month field, ``YYYY-MM``; bounds are first days of their months."""
    type: Literal["month"] = "month"

    @field_validator("min", "max", mode="before")
    @classmethod
    def _month_bound(cls, value):
        if isinstance(value, str):
            match = _MONTH_PATTERN.fullmatch(value)
            if match:
                return date(int(match.group(1)), int(match.group(2)), 1)
        return value

    def parse(self, value: str) -> Optional[date]:
        match = _MONTH_PATTERN.fullmatch(value)
        if not match:
            return None
        try:
            return date(int(match.group(1)), int(match.group(2)), 1)
        except ValueError:
            return None


class Submit(Component):
    """Submit button."""
    type: Literal["submit"] = "submit"
    label: Optional[str] = None


class Paragraph(Component):
    """Static text block."""
    type: Literal["p"] = "p"
    label: Optional[str] = None
    text: Optional[str] = None


class Option(BaseModel):
    """Choice of a ``Select``; ``group`` is active only while selected."""
    model_config = ConfigDict(extra="ignore")

    label: str
    value: str
    group: Optional["Group"] = None

    @field_validator("value", mode="before")
    @classmethod
    def _value_to_str(cls, value):
        return to_str(value)

    @field_validator("group", mode="before")
    @classmethod
    def _group_from_items(cls, value):
        if isinstance(value, list):
            return {"type": "group", "items": value}
        return value


class Select(ParameterControl):
    """Choice among ``options``; the value is the selected option's value."""
    type: Literal["select"] = "select"
    options: List[Option] = Field(default_factory=list)
    style: SelectStyle = SelectStyle.SPINNER

    @property
    def selected_option(self) -> Optional[Option]:
        for option in self.options:
            if option.value == self.value:
                return option
        return None

    def select(self, value: Optional[str]) -> Optional[Option]:
        """Selects the option with ``value`` and returns it."""
        self.value = value
        return self.selected_option

    def _is_valid_inner(self, value: str) -> bool:
        return any(option.value == value for option in self.options)


class Group(Component):
    """Ordered container of components."""
    type: Literal["group"] = "group"
    layout: Layout = Layout.VERTICAL
    items: List["AnyComponent"] = Field(default_factory=list)

    @field_validator("layout", mode="before")
    @classmethod
    def _default_layout(cls, value):
        return Layout.VERTICAL if value is None else value

    def fill_parameters(self, params: Dict[str, str]) -> Dict[str, str]:
        return fill_parameters(self, params)


AnyComponent = Annotated[
    Union[
        Group,
        Text,
        TextArea,
        Email,
        Tel,
        Number,
        Amount,
        Checkbox,
        Date,
        Month,
        Select,
        Submit,
        Paragraph,
    ],
    Field(discriminator="type"),
]

Group.model_rebuild()
Option.model_rebuild()
Select.model_rebuild()


def validate(component: Component) -> bool:
    """Returns True iff every control in the tree accepts its current value.

    A selected option's nested group is validated as part of its ``Select``;
    groups of unselected options are ignored.
    """
    if isinstance(component, Group):
        return all(validate(item) for item in component.items)
    if isinstance(component, Select):
        if not component.is_valid_value(component.value):
            return False
        option = component.selected_option
        return option is None or option.group is None or validate(option.group)
    if isinstance(component, ParameterControl):
        return component.is_valid_value(component.value)
    return True


def fill_parameters(component: Component, params: Dict[str, str]) -> Dict[str, str]:
    """Writes ``name -> value`` of every control in the tree into ``params``.

    Visits depth-first in declaration order, descending into the group of a
    select's currently selected option right after the select itself. A later
    or deeper control overwrites an earlier one with the same name.

    Returns:
        The same ``params`` mapping, for chaining
    """
    if isinstance(component, Group):
        for item in component.items:
            fill_parameters(item, params)
    elif isinstance(component, ParameterControl):
        params[component.name] = component.value or ""
        if isinstance(component, Select):
            option = component.selected_option
            if option is not None and option.group is not None:
                fill_parameters(option.group, params)
    return params


def flatten(component: Component) -> Dict[str, str]:
    """Flattens the tree into a new parameter map."""
    return fill_parameters(component, {})
