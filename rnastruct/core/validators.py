"""Argument validators.

A validator takes a parsed option value and either accepts it or raises
ValidationError; ``help`` describes what it accepts, for help pages.
Sequences (lists, tuples) are validated element by element.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional

import typer

from rnastruct.core.exceptions import ValidationError


class Validator(ABC):
    """Accept or reject one value."""

    @property
    @abstractmethod
    def help(self) -> str: ...

    @abstractmethod
    def check(self, value: Any) -> None:
        """Raise ValidationError if a single value is rejected."""

    def __call__(self, value: Any) -> None:
        if isinstance(value, (list, tuple)):
            for v in value:
                self.check(v)
        else:
            self.check(value)

    def is_valid(self, value: Any) -> bool:
        try:
            self(value)
        except ValidationError:
            return False
        return True


class ArithmeticRangeValidator(Validator):
    def __init__(self, min_value: float, max_value: float):
        if min_value > max_value:
            raise ValueError(f"empty range [{min_value}, {max_value}]")
        self.min_value = min_value
        self.max_value = max_value

    @property
    def help(self) -> str:
        return f"Value must be in range [{self.min_value},{self.max_value}]."

    def check(self, value: Any) -> None:
        if not self.min_value <= value <= self.max_value:
            raise ValidationError(
                f"Value {value} is not in range [{self.min_value},{self.max_value}]."
            )


class ValueListValidator(Validator):
    def __init__(self, *values: Any):
        if not values:
            raise ValueError("ValueListValidator needs at least one value")
        self.values = tuple(values)

    @property
    def help(self) -> str:
        return "Value must be one of [" + ",".join(str(v) for v in self.values) + "]."

    def check(self, value: Any) -> None:
        if value not in self.values:
            raise ValidationError(f"Value {value} is not one of {list(self.values)}.")


class RegexValidator(Validator):
    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = re.compile(pattern)

    @property
    def help(self) -> str:
        return f"Value must match the pattern '{self.pattern}'."

    def check(self, value: Any) -> None:
        if self._regex.fullmatch(str(value)) is None:
            raise ValidationError(f"Value {value} did not match the pattern {self.pattern}.")


class FileExtensionValidator(Validator):
    """Accept paths whose extension (ignoring a trailing .gz) is listed.

    Without explicit extensions, the registered structure formats are used.
    """

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        self._extensions = (
            None if extensions is None else [e.lower().lstrip(".") for e in extensions]
        )

    @property
    def extensions(self) -> list[str]:
        if self._extensions is not None:
            return list(self._extensions)
        from rnastruct.parsers.registry import supported_extensions

        return supported_extensions()

    @property
    def help(self) -> str:
        return "Valid file extensions are: [" + ", ".join(self.extensions) + "]."

    def check(self, value: Any) -> None:
        name = str(value).lower()
        if name.endswith(".gz"):
            name = name[: -len(".gz")]
        if not any(name.endswith("." + ext) for ext in self.extensions):
            raise ValidationError(
                f"Extension of '{value}' is not one of {self.extensions}."
            )


def as_typer_callback(validator: Validator) -> Callable[[Any], Any]:
    """Adapt a validator to typer's option/argument callback."""

    def _callback(value: Any) -> Any:
        if value is None:
            return value
        try:
            validator(value)
        except ValidationError as e:
            raise typer.BadParameter(str(e)) from e
        return value

    return _callback
