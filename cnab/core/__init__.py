"""
Core CNAB components.

This module contains the bundle/claim data model, claim parsing, action
filtering of parameters and the parameter value validator.
"""

from .claim import ClaimParser, parse_claim
from .manifest import (BUNDLE_SCHEMA, check_definition_references,
                       load_bundle, validate_bundle)
from .parameters import (applies_to, is_required, outputs_for_action,
                         parameters_for_action)
from .types import (ActionDict, ActionResultDict, BundleDict, ClaimDict,
                    CredentialDict, DefinitionDict, DefinitionType, ImageDict,
                    InvocationImageDict, MaintainerDict, OutputDict,
                    ParameterDestinationDict, ParameterDict)
from .validation import (BundleParameterValidator, Invalid,
                         ParameterValidator, Valid, Validity, for_bundle)

__all__ = [
    # Claims
    "parse_claim",
    "ClaimParser",
    # Bundles
    "BUNDLE_SCHEMA",
    "load_bundle",
    "validate_bundle",
    "check_definition_references",
    # Parameters
    "applies_to",
    "is_required",
    "parameters_for_action",
    "outputs_for_action",
    # Validation
    "BundleParameterValidator",
    "ParameterValidator",
    "Valid",
    "Invalid",
    "Validity",
    "for_bundle",
    # Types
    "ActionDict",
    "ActionResultDict",
    "BundleDict",
    "ClaimDict",
    "CredentialDict",
    "DefinitionDict",
    "DefinitionType",
    "ImageDict",
    "InvocationImageDict",
    "MaintainerDict",
    "OutputDict",
    "ParameterDestinationDict",
    "ParameterDict",
]
