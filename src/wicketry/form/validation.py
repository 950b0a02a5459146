"""Validators applied to converted form input."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class ValidationError:
    """One failed check; ``key`` names the message, ``variables`` fill it in."""

    key: str
    message: str
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass
class Validatable:
    """Converted value under validation plus the errors reported against it."""

    value: Any
    errors: list[ValidationError] = field(default_factory=list)

    def error(self, error: ValidationError) -> None:
        self.errors.append(error)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@runtime_checkable
class Validator(Protocol):
    def validate(self, validatable: Validatable) -> None: ...


class NullAcceptingValidator(ABC):
    """Base for validators that also run when the converted value is None.

    Plain validators are skipped for None values.
    """

    @abstractmethod
    def validate(self, validatable: Validatable) -> None: ...


class StringLengthValidator:
    def __init__(self, minimum: int | None = None, maximum: int | None = None) -> None:
        self.minimum = minimum
        self.maximum = maximum

    def validate(self, validatable: Validatable) -> None:
        length = len(str(validatable.value))
        if self.minimum is not None and length < self.minimum:
            validatable.error(
                ValidationError(
                    "StringValidator.minimum",
                    f"must be at least {self.minimum} characters",
                    {"minimum": self.minimum, "length": length},
                )
            )
        if self.maximum is not None and length > self.maximum:
            validatable.error(
                ValidationError(
                    "StringValidator.maximum",
                    f"must be at most {self.maximum} characters",
                    {"maximum": self.maximum, "length": length},
                )
            )


class RangeValidator:
    def __init__(self, minimum: Any = None, maximum: Any = None) -> None:
        self.minimum = minimum
        self.maximum = maximum

    def validate(self, validatable: Validatable) -> None:
        value = validatable.value
        if (self.minimum is not None and value < self.minimum) or (
            self.maximum is not None and value > self.maximum
        ):
            validatable.error(
                ValidationError(
                    "RangeValidator",
                    f"must be between {self.minimum} and {self.maximum}",
                    {"minimum": self.minimum, "maximum": self.maximum, "input": value},
                )
            )


class PatternValidator:
    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def validate(self, validatable: Validatable) -> None:
        if not self.pattern.fullmatch(str(validatable.value)):
            validatable.error(
                ValidationError(
                    "PatternValidator",
                    f"does not match {self.pattern.pattern}",
                    {"pattern": self.pattern.pattern},
                )
            )
