"""
Constants for the CNAB core library.

Shared literals: the supported manifest version, the closed sets used by the
manifest model, and the fixed reason strings returned by the validator.
"""

from typing import Final

# ============================================================================
# MANIFEST CONSTANTS
# ============================================================================

CNAB_SCHEMA_VERSION: Final[str] = "v1"
"""The only bundle ``schemaVersion`` this library understands."""

DEFAULT_IMAGE_TYPE: Final[str] = "oci"
"""Image type assumed when an image omits ``imageType``."""

DEFINITION_TYPES: Final[tuple[str, ...]] = ("number", "integer", "string", "boolean")
"""Values permitted in a definition's ``type`` field."""

DEFAULT_DEFINITION_TYPE: Final[str] = "string"
"""Type assumed for text coercion when a definition omits ``type``."""

# ============================================================================
# VALIDATION MESSAGES
# ============================================================================

UNRESOLVABLE_PARAMETER_REASON: Final[str] = "Bundle does not specify valid parameter values"
"""Reason reported when a parameter cannot be resolved to a definition."""

NOT_A_WHOLE_NUMBER_REASON: Final[str] = "The value must be a whole number"
"""Reason reported when integer text is malformed."""

NOT_A_NUMBER_REASON: Final[str] = "The value must be a number"
"""Reason reported when number text is malformed."""

NOT_A_BOOLEAN_REASON: Final[str] = 'The value must be either "true" or "false"'
"""Reason reported when boolean text is neither true nor false."""

REASON_SEPARATOR: Final[str] = ", "
"""Joins multiple schema violation messages into one reason."""

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================

JSON_SCHEMA_DRAFTS: Final[tuple[str, ...]] = (
    "draft4",
    "draft6",
    "draft7",
    "2019-09",
    "2020-12",
)
"""JSON Schema drafts a definition may be evaluated against."""

DEFAULT_JSON_SCHEMA_DRAFT: Final[str] = "draft7"
"""Draft used for definitions that do not declare ``$schema``."""
