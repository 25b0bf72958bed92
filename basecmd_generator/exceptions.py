"""
Custom exception hierarchy for the Base module generator.

Every error raised on purpose by the generator derives from GeneratorError,
which carries structured context and recovery suggestions so the CLI can
print something actionable instead of a bare traceback.
"""

from typing import Dict, Any, Optional, List


class GeneratorError(Exception):
    """
    Base exception for all generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(GeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify the values have the expected types",
                "Remove unknown keys or fix their spelling",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class FieldDefinitionError(GeneratorError):
    """Raised when a field:type token cannot be turned into a field."""

    def __init__(self, message: str, token: str = None, model: str = None, **kwargs):
        context = kwargs.get('context', {})
        if token is not None:
            context['token'] = repr(token)
        if model:
            context['model'] = model

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Use the form name[:type[:RelatedModel]]",
                "Make sure the field name is not empty",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="FIELD_DEFINITION_ERROR"
        )


class CodeGenerationError(GeneratorError):
    """Raised when rendering or writing a generated file fails."""

    def __init__(self, message: str, template: str = None, output_path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if template:
            context['template'] = template
        if output_path:
            context['output_path'] = str(output_path)

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the output directory is writable",
                "Run with --verbose to see the underlying error",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CODE_GENERATION_ERROR"
        )


class InitFilePatchError(GeneratorError):
    """Raised when the shared init file cannot be patched."""

    def __init__(self, message: str, init_file: str = None, marker: str = None, **kwargs):
        context = kwargs.get('context', {})
        if init_file:
            context['init_file'] = str(init_file)
        if marker:
            context['marker'] = marker

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Restore the marker comments in the init file",
                "Register the module manually",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INIT_PATCH_ERROR"
        )


class MissingModuleError(GeneratorError):
    """Raised when destroying a module that was never generated."""

    def __init__(self, message: str, module: str = None, path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if module:
            context['module'] = module
        if path:
            context['path'] = str(path)

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the spelling of the module name",
                "Run the command from the project root or pass --root",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="MODULE_NOT_FOUND"
        )


class ValidationError(GeneratorError):
    """Raised when validation of user input fails."""

    def __init__(self, message: str, validator: str = None, **kwargs):
        context = kwargs.get('context', {})
        if validator:
            context['validator'] = validator

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Review the reported field definitions",
                "Run with --verbose for the full list of warnings",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="VALIDATION_ERROR"
        )


# Convenience functions for common error patterns
def raise_configuration_error(message: str, config_file: str = None, **kwargs):
    """Convenience function to raise configuration errors."""
    raise ConfigurationError(message, config_file=config_file, **kwargs)


def raise_field_definition_error(message: str, token: str = None, **kwargs):
    """Convenience function to raise field definition errors."""
    raise FieldDefinitionError(message, token=token, **kwargs)


def raise_code_generation_error(message: str, template: str = None, output_path: str = None, **kwargs):
    """Convenience function to raise code generation errors."""
    raise CodeGenerationError(message, template=template, output_path=output_path, **kwargs)
