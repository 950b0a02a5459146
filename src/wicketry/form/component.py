"""Form components: raw input, typed conversion, validation, model update."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, get_origin

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from wicketry.form.validation import NullAcceptingValidator, Validatable, Validator

logger = structlog.get_logger()

T = TypeVar("T")

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


class Model(Generic[T]):
    """Holds the value a component reads from and writes to."""

    def __init__(self, value: T | None = None) -> None:
        self.object = value

    @classmethod
    def of(cls, value: T) -> Model[T]:
        return cls(value)


@dataclass(frozen=True)
class FeedbackMessage:
    component_id: str
    level: str
    key: str
    message: str


def _is_sequence_type(type_: Any) -> bool:
    return type_ in _SEQUENCE_ORIGINS or get_origin(type_) in _SEQUENCE_ORIGINS


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or str(type_)


class FormComponent(Generic[T]):
    """A form field that converts its submitted text to ``type``.

    Without an explicit type the trimmed string is kept. Sequence types such
    as ``list[int]`` receive every submitted value, scalar types the first.
    Conversion uses pydantic in lax mode, so ``"42"`` becomes ``42`` and
    ``"on"`` becomes ``True``.
    """

    def __init__(
        self,
        id: str,
        model: Model[T] | None = None,
        *,
        type: Any = None,
        required: bool = False,
        label: str | None = None,
    ) -> None:
        self.id = id
        self.model: Model[T] = model if model is not None else Model()
        self.required = required
        self.label = label
        self.form: Form | None = None
        self.validators: list[Validator] = []
        self.feedback: list[FeedbackMessage] = []
        self.converted_input: Any = None
        self._input: list[str] | None = None
        self._type: Any = None
        self._adapter: TypeAdapter[Any] | None = None
        if type is not None:
            self.set_type(type)

    @property
    def type(self) -> Any:
        return self._type

    def set_type(self, type_: Any) -> FormComponent[T]:
        self._type = type_
        self._adapter = None if type_ is None else TypeAdapter(type_)
        return self

    def add(self, validator: Validator) -> FormComponent[T]:
        self.validators.append(validator)
        return self

    def set_input(self, value: str | Sequence[str] | None) -> None:
        if value is None:
            self._input = None
        elif isinstance(value, str):
            self._input = [value]
        else:
            self._input = list(value)

    def get_input(self) -> str | None:
        """First raw value as submitted."""
        return self._input[0] if self._input else None

    def get_input_as_list(self) -> list[str]:
        return list(self._input or [])

    def _first_trimmed(self) -> str | None:
        first = self.get_input()
        if first is None:
            return None
        first = first.strip()
        return first or None

    def _has_input(self) -> bool:
        if _is_sequence_type(self._type):
            return any(v.strip() for v in self.get_input_as_list())
        return self._first_trimmed() is not None

    def error(self, key: str, message: str) -> None:
        self.feedback.append(
            FeedbackMessage(component_id=self.id, level="error", key=key, message=message)
        )

    @property
    def is_valid(self) -> bool:
        return not any(m.level == "error" for m in self.feedback)

    def convert_input(self) -> bool:
        """Convert raw input into ``converted_input``. Returns False on failure."""
        if _is_sequence_type(self._type):
            raw: Any = [v.strip() for v in self.get_input_as_list()]
        else:
            raw = self._first_trimmed()

        if self._adapter is None or raw is None:
            self.converted_input = raw
            return True

        try:
            self.converted_input = self._adapter.validate_python(raw)
        except PydanticValidationError as e:
            self.converted_input = None
            logger.debug("form_conversion_failed", component=self.id, errors=e.error_count())
            self.error(
                "ConversionError",
                f"'{self.get_input()}' is not a valid {_type_name(self._type)}",
            )
            return False
        return True

    def validate(self) -> bool:
        """Required check, conversion, then validators."""
        self.feedback.clear()
        self.converted_input = None

        if self.required and not self._has_input():
            self.error("Required", f"'{self.get_default_label()}' is required")
            return False

        if not self.convert_input():
            return False

        validatable = Validatable(self.converted_input)
        for validator in self.validators:
            if validatable.value is None and not isinstance(validator, NullAcceptingValidator):
                continue
            validator.validate(validatable)
        for failure in validatable.errors:
            self.error(failure.key, f"'{self.get_default_label()}' {failure.message}")
        return self.is_valid

    def update_model(self) -> None:
        self.model.object = self.converted_input

    def get_default_label(self) -> str:
        """Explicit label, else the ``<form id>.<component id>`` string, else the id."""
        if self.label:
            return self.label
        if self.form is not None:
            label = self.form.strings.get(f"{self.form.id}.{self.id}")
            if label:
                return label
        return self.id


class TextField(FormComponent[T]):
    """Single-line text input."""


class Form:
    """Groups components and processes a submit as one unit."""

    def __init__(self, id: str, *, strings: Mapping[str, str] | None = None) -> None:
        self.id = id
        self.strings: dict[str, str] = dict(strings or {})
        self._components: dict[str, FormComponent[Any]] = {}

    def add(self, component: FormComponent[Any]) -> FormComponent[Any]:
        component.form = self
        self._components[component.id] = component
        return component

    def get(self, component_id: str) -> FormComponent[Any]:
        return self._components[component_id]

    @property
    def components(self) -> list[FormComponent[Any]]:
        return list(self._components.values())

    @property
    def feedback(self) -> list[FeedbackMessage]:
        return [m for c in self._components.values() for m in c.feedback]

    def submit(self, values: Mapping[str, str | Sequence[str]]) -> bool:
        """Validate every component; update models only if all are valid."""
        for component in self._components.values():
            component.set_input(values.get(component.id))

        results = [component.validate() for component in self._components.values()]
        if not all(results):
            logger.debug("form_invalid", form=self.id, errors=len(self.feedback))
            self.on_error()
            return False

        for component in self._components.values():
            component.update_model()
        self.on_submit()
        return True

    def on_submit(self) -> None:
        """Hook called after models were updated."""

    def on_error(self) -> None:
        """Hook called when validation failed."""
