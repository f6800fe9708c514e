"""Showcase package exports for yoomoney_api."""

from .components import (
    Layout,
    SelectStyle,
    Component,
    ParameterControl,
    Text,
    TextArea,
    Email,
    Tel,
    Number,
    Amount,
    Checkbox,
    Date,
    Month,
    Submit,
    Paragraph,
    Option,
    Select,
    Group,
    AnyComponent,
    validate,
    fill_parameters,
    flatten
)
from .showcase import Showcase, ShowcaseError, parse_params
from .context import (
    Step,
    ShowcaseContext,
    ShowcaseSubmitRequest,
    ShowcaseRequest
)

__all__ = [
    # Components
    "Layout",
    "SelectStyle",
    "Component",
    "ParameterControl",
    "Text",
    "TextArea",
    "Email",
    "Tel",
    "Number",
    "Amount",
    "Checkbox",
    "Date",
    "Month",
    "Submit",
    "Paragraph",
    "Option",
    "Select",
    "Group",
    "AnyComponent",

    # Tree operations
    "validate",
    "fill_parameters",
    "flatten",

    # Document
    "Showcase",
    "ShowcaseError",
    "parse_params",

    # Wizard
    "Step",
    "ShowcaseContext",
    "ShowcaseSubmitRequest",
    "ShowcaseRequest"
]
