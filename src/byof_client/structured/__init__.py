"""
Structured response validation.
"""

from byof_client.structured.validator import (
    JsonSchema,
    PydanticSchema,
    SchemaValidator,
    ValidationResult,
    Violation,
    as_validator,
)

__all__ = [
    "JsonSchema",
    "PydanticSchema",
    "SchemaValidator",
    "ValidationResult",
    "Violation",
    "as_validator",
]
