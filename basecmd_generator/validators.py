"""
Validation utilities for the module generator.

Checks model names and field tokens before anything is written. Problems
that would produce uncompilable Go are errors; suspicious but workable
input (unknown types, odd tokens) only produces warnings, because unknown
types are passed through as custom Go types on purpose.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .constants import GoKeywords
from .domain.field_aliases import is_relationship_type, resolve_field_type
from .domain.field_parser import FieldParser
from .domain.naming import Inflector, to_snake_case
from .exceptions import FieldDefinitionError, ValidationError

_FIELD_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
_GO_TYPE_RE = re.compile(r"^(\[\])?\*?([A-Za-z_][A-Za-z0-9_]*\.)?[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Ensure consistency."""
        if self.errors and self.is_valid:
            self.is_valid = False

    def add_error(self, error: str) -> None:
        """Add an error."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning."""
        self.warnings.append(warning)

    def merge(self, other: "ValidationResult") -> None:
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def raise_if_invalid(self) -> None:
        """Raise ValidationError if invalid."""
        if not self.is_valid:
            raise ValidationError(
                f"Validation failed: {'; '.join(self.errors)}",
                context={"errors": self.errors, "warnings": self.warnings}
            )


class ModelNameValidator:
    """Validates the model name given to generate/destroy."""

    @staticmethod
    def validate(name: str) -> ValidationResult:
        result = ValidationResult()

        if not name or not name.strip():
            result.add_error("Model name is required")
            return result

        if not re.match(r"^[A-Za-z][A-Za-z0-9_\- ]*$", name.strip()):
            result.add_error(f"Model name '{name}' must start with a letter and contain only letters, digits, '_' or '-'")
            return result

        package = to_snake_case(name)
        if package in GoKeywords.ALL:
            result.add_error(f"Model name '{name}' is a reserved Go keyword")

        return result


class FieldDefinitionValidator:
    """Validates ``name[:type[:RelatedModel]]`` tokens."""

    @staticmethod
    def validate_token(token: str) -> ValidationResult:
        """Validate one field token."""
        result = ValidationResult()
        parts = [part.strip() for part in token.split(":")]
        name = parts[0]

        if not name:
            result.add_error(f"Field token '{token}' has an empty field name")
            return result

        if not _FIELD_NAME_RE.match(name):
            result.add_error(f"Field name '{name}' must start with a letter and contain only letters, digits or '_'")
            return result

        if len(parts) > 3:
            result.add_warning(f"Field token '{token}' has more than three parts; extra parts are ignored")

        if len(parts) > 1 and parts[1]:
            alias = resolve_field_type(parts[1])
            if alias.is_custom:
                if _GO_TYPE_RE.match(parts[1]):
                    result.add_warning(f"Unknown type '{parts[1]}' for field '{name}', using it as a custom Go type")
                else:
                    result.add_error(f"Type '{parts[1]}' of field '{name}' is not a valid Go type name")

        if len(parts) > 2 and parts[2]:
            if len(parts) > 1 and parts[1] and not is_relationship_type(parts[1]) \
                    and not to_snake_case(name).endswith("_id"):
                result.add_warning(f"Related model '{parts[2]}' is ignored for non relationship field '{name}'")

        return result

    @staticmethod
    def validate_tokens(
        tokens: Sequence[str],
        model_name: str = "Model",
        inflector: Optional[Inflector] = None,
    ) -> ValidationResult:
        """
        Validate all tokens and check the generated field names for duplicates.

        Duplicates are looked for among the parsed fields, so the foreign key
        and association produced by a belongs_to token collide with any other
        token declaring the same name.
        """
        result = ValidationResult()
        for token in tokens:
            result.merge(FieldDefinitionValidator.validate_token(token))
        if not result.is_valid:
            return result

        parser = FieldParser(model_name, inflector=inflector)
        owners = {}
        for token in tokens:
            try:
                fields = parser.parse(token).fields
            except FieldDefinitionError as e:
                result.add_error(e.message)
                continue
            for parsed in fields:
                if parsed.name in owners:
                    result.add_error(
                        f"Field '{parsed.name}' is declared more than once "
                        f"(by '{owners[parsed.name]}' and '{token}')"
                    )
                else:
                    owners[parsed.name] = token
        return result
