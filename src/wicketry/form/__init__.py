"""Form components with typed conversion and validators."""

from wicketry.form.component import FeedbackMessage, Form, FormComponent, Model, TextField
from wicketry.form.validation import (
    NullAcceptingValidator,
    PatternValidator,
    RangeValidator,
    StringLengthValidator,
    Validatable,
    ValidationError,
    Validator,
)

__all__ = [
    "FeedbackMessage",
    "Form",
    "FormComponent",
    "Model",
    "NullAcceptingValidator",
    "PatternValidator",
    "RangeValidator",
    "StringLengthValidator",
    "TextField",
    "Validatable",
    "ValidationError",
    "Validator",
]
