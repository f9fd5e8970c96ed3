"""
Response validation against declared shapes.

Validators never raise on bad input: they return a ``ValidationResult``
holding either the typed value or the list of violations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

import jsonschema
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Violation:
    """A single schema violation.

    Attributes:
        path: Dot-joined path to the offending field ("" for the root)
        message: What is wrong with it
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


@dataclass
class ValidationResult(Generic[T]):
    """Result of validation.

    Attributes:
        valid: Whether validation passed
        data: Validated value (None when invalid)
        violations: Violations found (empty when valid)
    """

    valid: bool = True
    data: T | None = None
    violations: list[Violation] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls, data: T) -> ValidationResult[T]:
        return cls(valid=True, data=data)

    @classmethod
    def failed(cls, violations: list[Violation]) -> ValidationResult[T]:
        return cls(valid=False, violations=violations)

    @property
    def error_message(self) -> str:
        """Semicolon-joined ``path: message`` list."""
        return "; ".join(str(v) for v in self.violations)


@runtime_checkable
class SchemaValidator(Protocol):
    """Validator capability: checks an untyped value against a shape."""

    def validate(self, value: Any) -> ValidationResult[Any]: ...


def _join_path(parts: Any) -> str:
    return ".".join(str(p) for p in parts)


class PydanticSchema(Generic[T]):
    """Validate against a pydantic model or any type pydantic understands.

    Example:
        >>> from pydantic import BaseModel
        >>> class Item(BaseModel):
        ...     id: str
        >>> result = PydanticSchema(Item).validate({"id": "a1"})
        >>> result.data
        Item(id='a1')
    """

    def __init__(self, model: type[T] | Any) -> None:
        self._model = model
        self._adapter: TypeAdapter[T] = TypeAdapter(model)

    @property
    def model(self) -> Any:
        return self._model

    def validate(self, value: Any) -> ValidationResult[T]:
        try:
            return ValidationResult.ok(self._adapter.validate_python(value))
        except PydanticValidationError as e:
            return ValidationResult.failed(
                [Violation(_join_path(err["loc"]), err["msg"]) for err in e.errors()]
            )


class JsonSchema:
    """Validate against a JSON Schema document (draft 2020-12).

    The input value is returned unchanged when valid.
    """

    def __init__(self, schema: dict[str, Any]) -> None:
        jsonschema.Draft202012Validator.check_schema(schema)
        self._schema = schema
        self._validator = jsonschema.Draft202012Validator(schema)

    @property
    def schema(self) -> dict[str, Any]:
        return self._schema

    def validate(self, value: Any) -> ValidationResult[Any]:
        errors = sorted(
            self._validator.iter_errors(value),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        if not errors:
            return ValidationResult.ok(value)
        return ValidationResult.failed(
            [Violation(_join_path(e.absolute_path), e.message) for e in errors]
        )


def as_validator(schema: Any) -> SchemaValidator:
    """Coerce a schema declaration into a validator.

    Args:
        schema: A ``SchemaValidator``, a JSON Schema dict, or a pydantic
            model class / type

    Returns:
        Validator instance
    """
    if isinstance(schema, dict):
        return JsonSchema(schema)
    # Model classes expose a ``validate`` classmethod too, so only instances
    # count as ready-made validators.
    if not isinstance(schema, type) and isinstance(schema, SchemaValidator):
        return schema
    return PydanticSchema(schema)
