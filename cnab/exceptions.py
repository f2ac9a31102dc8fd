"""
Custom exceptions for the CNAB core library.

Schema-resolution and value-validation problems are reported as ``Invalid``
verdicts, not exceptions. The classes here cover the remaining failures:
malformed input text, structurally broken bundles and bad configuration.
"""

from typing import Any, Dict, List, Optional


class CnabError(RuntimeError):
    """
    Base exception for CNAB library errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (bundle name,
                 parameter name, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ParseError(CnabError):
    """
    Raised when claim or bundle text cannot be deserialized into a record.

    Attributes:
        message: Error message
        source: What was being parsed ("claim", "bundle")
        position: Character offset of the decode failure (if known)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        position: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if source:
            context["source"] = source
        if position is not None:
            context["position"] = position
        super().__init__(message, context=context)
        self.source = source
        self.position = position


class BundleValidationError(CnabError):
    """
    Raised when a bundle does not match the CNAB manifest structure.

    Attributes:
        message: Error message
        error_paths: List of JSON paths with validation errors
        bundle_name: Bundle name (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        error_paths: Optional[List[str]] = None,
        bundle_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the bundle validation error.

        Args:
            message: Error message
            error_paths: List of JSON paths with validation errors
            bundle_name: Bundle name (if available)
            context: Additional context information
        """
        context = context or {}
        if error_paths:
            context["error_paths"] = error_paths
        if bundle_name:
            context["bundle_name"] = bundle_name
        super().__init__(message, context=context)
        self.error_paths = error_paths
        self.bundle_name = bundle_name


class ConfigurationError(CnabError):
    """
    Raised when configuration is invalid.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value


class UnsupportedDefinitionTypeError(CnabError):
    """
    Raised when a definition declares a ``type`` outside the supported set.

    Text coercion only knows number, integer, string and boolean. Anything
    else means the bundle bypassed structural validation.
    """

    def __init__(
        self,
        definition_type: Any,
        parameter: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        context["definition_type"] = definition_type
        if parameter:
            context["parameter"] = parameter
        super().__init__(
            f"Unsupported definition type for text input: {definition_type!r}",
            context=context,
        )
        self.definition_type = definition_type
        self.parameter = parameter
