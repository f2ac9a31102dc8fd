"""
Bundle manifest loading and structural validation.

This module provides:
- A JSON Schema describing the CNAB v1 bundle manifest
- Structural validation of bundle dictionaries
- Detection of parameters/outputs whose definition reference dangles
- Loading bundles from JSON text

Structural validation is separate from parameter validation: a bundle that
fails here can still be handed to ``ParameterValidator``, which reports
unresolvable parameters as ``Invalid`` verdicts.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import SchemaError, ValidationError, validate

from ..constants import CNAB_SCHEMA_VERSION, DEFINITION_TYPES
from ..exceptions import BundleValidationError, ParseError
from .types import BundleDict

logger = logging.getLogger(__name__)

_STRING_MAP = {"type": "object", "additionalProperties": {"type": "string"}}

_IMAGE_PROPERTIES = {
    "contentDigest": {"type": "string"},
    "image": {"type": "string", "minLength": 1},
    "imageType": {"type": "string", "default": "oci"},
    "labels": _STRING_MAP,
    "mediaType": {"type": "string"},
    "size": {"type": "integer", "minimum": 0},
}

_APPLY_TO = {
    "type": "array",
    "items": {"type": "string"},
    "description": "Actions this item applies to; empty or absent means all actions",
}

# JSON Schema definition for bundle.json (CNAB v1)
BUNDLE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "schemaVersion", "version", "invocationImages"],
    "properties": {
        "name": {"type": "string", "minLength": 1, "description": "Bundle name"},
        "schemaVersion": {
            "const": CNAB_SCHEMA_VERSION,
            "description": "Version of the CNAB specification",
        },
        "version": {"type": "string", "minLength": 1, "description": "SemVer2 bundle version"},
        "description": {"type": "string"},
        "keywords": {"type": "array", "items": {"type": "string"}},
        "license": {"type": "string"},
        "maintainers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "email": {"type": "string"},
                    "url": {"type": "string"},
                },
            },
        },
        "invocationImages": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["image"],
                "properties": _IMAGE_PROPERTIES,
            },
        },
        "images": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["image"],
                "properties": {**_IMAGE_PROPERTIES, "description": {"type": "string"}},
            },
        },
        "actions": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "description": {"type": "string"},
                    "modifies": {"type": "boolean"},
                    "stateless": {"type": "boolean"},
                },
            },
        },
        "credentials": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "description": {"type": "string"},
                    "env": {"type": "string"},
                    "path": {"type": "string"},
                    "required": {"type": "boolean"},
                },
            },
        },
        "definitions": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "type": {"enum": list(DEFINITION_TYPES)},
                    "enum": {"type": "array"},
                },
            },
        },
        "parameters": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["definition", "destination"],
                "properties": {
                    "applyTo": _APPLY_TO,
                    "definition": {"type": "string"},
                    "description": {"type": "string"},
                    "destination": {
                        "type": "object",
                        "properties": {
                            "env": {"type": "string"},
                            "path": {"type": "string"},
                        },
                    },
                    "required": {"type": "boolean", "default": False},
                },
            },
        },
        "outputs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["definition", "path"],
                "properties": {
                    "applyTo": _APPLY_TO,
                    "definition": {"type": "string"},
                    "description": {"type": "string"},
                    "path": {"type": "string"},
                },
            },
        },
        "requiredExtensions": {"type": "array", "items": {"type": "string"}},
        "custom": {"type": "object"},
    },
}


def validate_bundle(
    bundle: Dict[str, Any]
) -> Tuple[bool, Optional[str], Optional[List[str]]]:
    """
    Validate a bundle against the CNAB v1 manifest schema.

    Args:
        bundle: The bundle dictionary to validate

    Returns:
        Tuple of (is_valid, error_message, error_paths)
        - is_valid: True if valid, False otherwise
        - error_message: Human-readable error message (None if valid)
        - error_paths: List of JSON paths with errors (None if valid)
    """
    try:
        validate(instance=bundle, schema=BUNDLE_SCHEMA)
        return True, None, None

    except ValidationError as e:
        error_paths = []
        error_messages = [e.message]

        path_parts = list(e.absolute_path)
        if path_parts:
            error_paths.append(".".join(str(p) for p in path_parts))
        else:
            error_paths.append("root")

        # Only process first level of context
        for suberror in e.context or []:
            subpath_parts = list(suberror.absolute_path)
            if subpath_parts:
                error_paths.append(".".join(str(p) for p in subpath_parts))
            error_messages.append(suberror.message)

        # Deduplicate, keeping engine order
        error_message = "; ".join(dict.fromkeys(error_messages))
        return False, error_message, error_paths

    except SchemaError as e:
        logger.exception("Bundle schema definition is invalid")
        return False, f"Invalid schema definition: {e.message}", ["schema"]


def check_definition_references(bundle: BundleDict) -> List[str]:
    """
    Find parameters and outputs whose ``definition`` is not in ``definitions``.

    Args:
        bundle: Bundle dictionary

    Returns:
        Paths of the dangling references, e.g. ``parameters.port.definition``
    """
    definitions = bundle.get("definitions") or {}
    dangling = []
    for section in ("parameters", "outputs"):
        for name, item in (bundle.get(section) or {}).items():
            reference = item.get("definition") if isinstance(item, dict) else None
            if not isinstance(reference, str) or reference not in definitions:
                dangling.append(f"{section}.{name}.definition")
    return dangling


def load_bundle(content: str, validate: bool = True) -> BundleDict:
    """
    Load a bundle from JSON text.

    Args:
        content: JSON string content
        validate: Whether to validate the manifest structure (default: True)

    Returns:
        Bundle dictionary

    Raises:
        ParseError: If the text is not JSON, or not a JSON object
        BundleValidationError: If validation is requested and fails
    """
    try:
        bundle = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid bundle JSON: {e.msg}", source="bundle", position=e.pos) from e
    except UnicodeDecodeError as e:
        raise ParseError(
            f"Bundle bytes are not valid UTF-8/16/32: {e.reason}", source="bundle", position=e.start
        ) from e
    except RecursionError as e:
        raise ParseError("Bundle JSON is nested too deeply", source="bundle") from e

    if not isinstance(bundle, dict):
        raise ParseError(
            f"Bundle must be a JSON object, got {type(bundle).__name__}", source="bundle"
        )

    if validate:
        is_valid, error, paths = validate_bundle(bundle)
        if not is_valid:
            error_path_str = f" (errors in: {', '.join(paths[:3])})" if paths else ""
            raise BundleValidationError(
                f"Bundle validation failed: {error}{error_path_str}",
                error_paths=paths,
                bundle_name=bundle.get("name") if isinstance(bundle.get("name"), str) else None,
            )

        dangling = check_definition_references(bundle)
        if dangling:
            logger.warning(
                f"Bundle '{bundle.get('name')}' has dangling definition references: "
                f"{', '.join(dangling)}"
            )

    return bundle
