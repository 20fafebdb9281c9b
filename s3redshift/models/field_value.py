"""Three-state configuration values: empty, set, or deferred until templates render."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from s3redshift.models.templates import contains_template


class FieldState(str, Enum):
    """State of a single configuration field."""

    EMPTY = "empty"
    SET = "set"
    DEFERRED = "deferred"


class FieldValue(BaseModel):
    """A configuration value tagged with its resolution state.

    A deferred value holds the raw template expression. It is neither empty
    nor set: checks that a field is present accept it, checks that a field
    is absent reject it.
    """

    model_config = ConfigDict(frozen=True)

    state: FieldState
    value: str = ""

    @model_validator(mode="after")
    def validate_state(self):
        """Keep the payload consistent with the tag."""
        if self.state == FieldState.EMPTY and self.value:
            raise ValueError("an empty field cannot carry a value")
        if self.state != FieldState.EMPTY and not self.value:
            raise ValueError(f"a {self.state.value} field requires a value")
        return self

    @classmethod
    def empty(cls) -> "FieldValue":
        return cls(state=FieldState.EMPTY)

    @classmethod
    def of(cls, value: str) -> "FieldValue":
        return cls(state=FieldState.SET, value=value)

    @classmethod
    def deferred(cls, expression: str) -> "FieldValue":
        return cls(state=FieldState.DEFERRED, value=expression)

    @classmethod
    def parse(cls, raw: Any) -> "FieldValue":
        """Classify a raw configuration value.

        ``None`` and ``""`` are empty, strings holding a template or macro
        are deferred, anything else is set.
        """
        if isinstance(raw, FieldValue):
            return raw
        if isinstance(raw, dict) and "state" in raw:
            return cls(**raw)
        if raw is None:
            return cls.empty()
        text = str(raw)
        if not text:
            return cls.empty()
        if contains_template(text):
            return cls.deferred(text)
        return cls.of(text)

    @classmethod
    def resolved(cls, raw: Any) -> "FieldValue":
        """Classify an already rendered value; template-like text stays set."""
        if isinstance(raw, FieldValue):
            return raw
        if raw is None or raw == "":
            return cls.empty()
        return cls.of(str(raw))

    @property
    def is_empty(self) -> bool:
        return self.state == FieldState.EMPTY

    @property
    def is_set(self) -> bool:
        return self.state == FieldState.SET

    @property
    def is_deferred(self) -> bool:
        return self.state == FieldState.DEFERRED

    @property
    def is_present(self) -> bool:
        """Set, or deferred and presumed to resolve to a value."""
        return self.state in (FieldState.SET, FieldState.DEFERRED)

    @property
    def is_absent(self) -> bool:
        """Concretely empty; a deferred value is never absent."""
        return self.state == FieldState.EMPTY

    def __str__(self) -> str:
        return self.value
