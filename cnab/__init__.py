"""
CNAB core - Cloud Native Application Bundle manifests and claims.

Parses installation claims and validates parameter values against the
JSON Schema definitions embedded in a bundle.
"""

from .config import ValidatorConfig
# Core components
from .core import (BundleParameterValidator, ClaimParser, Invalid,
                   ParameterValidator, Valid, Validity, for_bundle,
                   is_required, load_bundle, outputs_for_action,
                   parameters_for_action, parse_claim, validate_bundle)
# Errors
from .exceptions import (BundleValidationError, CnabError, ConfigurationError,
                         ParseError, UnsupportedDefinitionTypeError)

__version__ = "0.1.0"

__all__ = [
    # Claims
    "parse_claim",
    "ClaimParser",
    # Bundles
    "load_bundle",
    "validate_bundle",
    # Parameters
    "parameters_for_action",
    "outputs_for_action",
    "is_required",
    # Validation
    "for_bundle",
    "BundleParameterValidator",
    "ParameterValidator",
    "Valid",
    "Invalid",
    "Validity",
    # Configuration
    "ValidatorConfig",
    # Errors
    "CnabError",
    "ParseError",
    "BundleValidationError",
    "ConfigurationError",
    "UnsupportedDefinitionTypeError",
]
