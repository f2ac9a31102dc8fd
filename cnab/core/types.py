"""
Type definitions for CNAB manifest and claim structures.

Bundles and claims are handled as plain JSON-shaped dictionaries. The
TypedDict declarations below describe those shapes for type checkers; field
names follow the CNAB JSON format (``schemaVersion``, ``applyTo``, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, TypedDict

# ============================================================================
# Bundle Manifest Types
# ============================================================================


class ActionDict(TypedDict, total=False):
    """A custom action that can be triggered on a bundle."""

    description: str
    modifies: bool  # Whether the action changes resources managed by the bundle
    stateless: bool  # Purely informational action


class CredentialDict(TypedDict, total=False):
    """A credential injected into the invocation image."""

    description: str
    env: str
    path: str
    required: bool


class DefinitionType(str, Enum):
    """Underlying data type a definition can declare."""

    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"


class DefinitionDict(TypedDict, total=False):
    """
    Schema of a parameter or output value.

    A definition is a full JSON Schema document. Only the keys tooling cares
    about are declared here; every other keyword (minLength, maximum,
    pattern, $schema, ...) is kept as-is and handed to the schema engine.
    """

    type: Literal["number", "integer", "string", "boolean"]
    default: Any
    enum: List[Any]


class _ImageRequired(TypedDict):
    image: str


class InvocationImageDict(_ImageRequired, total=False):
    """An image executed to perform a bundle action such as installation."""

    contentDigest: str
    imageType: str  # "oci" when absent
    labels: Dict[str, str]
    mediaType: str
    size: int


class ImageDict(InvocationImageDict, total=False):
    """An application image used by a bundle."""

    description: str


class _MaintainerRequired(TypedDict):
    name: str


class MaintainerDict(_MaintainerRequired, total=False):
    """A party responsible for a bundle."""

    email: str
    url: str


class _OutputRequired(TypedDict):
    definition: str
    path: str


class OutputDict(_OutputRequired, total=False):
    """A value produced by, and retrievable from, an invocation image."""

    applyTo: List[str]
    description: str


class ParameterDestinationDict(TypedDict, total=False):
    """Where a parameter value is surfaced in the invocation image."""

    env: str
    path: str


class _ParameterRequired(TypedDict):
    definition: str  # Key into the bundle's definitions
    destination: ParameterDestinationDict


class ParameterDict(_ParameterRequired, total=False):
    """A parameter that can be given a value when executing the invocation image."""

    applyTo: List[str]  # Absent or empty: applies to every action
    description: str
    required: bool


class _BundleRequired(TypedDict):
    name: str
    schemaVersion: Literal["v1"]
    version: str  # SemVer2
    invocationImages: List[InvocationImageDict]


class BundleDict(_BundleRequired, total=False):
    """A CNAB (Cloud Native Application Bundle) manifest."""

    actions: Dict[str, ActionDict]
    credentials: Dict[str, CredentialDict]
    custom: Dict[str, Any]
    definitions: Dict[str, DefinitionDict]
    description: str
    images: Dict[str, ImageDict]
    keywords: List[str]
    license: str  # SPDX code or proprietary licence name
    maintainers: List[MaintainerDict]
    outputs: Dict[str, OutputDict]
    parameters: Dict[str, ParameterDict]
    requiredExtensions: List[str]


# ============================================================================
# Claim Types
# ============================================================================


ClaimStatus = Literal["failure", "underway", "unknown", "success"]


class ActionResultDict(TypedDict):
    """The result of a CNAB action such as installation or upgrading."""

    action: str
    message: str
    status: ClaimStatus


class _ClaimRequired(TypedDict):
    bundle: BundleDict
    created: str
    modified: str
    name: str
    revision: str  # Changes on every modification of the installation
    createdTime: Optional[datetime]  # None when `created` is not a timestamp
    modifiedTime: Optional[datetime]


class ClaimDict(_ClaimRequired, total=False):
    """A record of a CNAB installation, as returned by ``parse_claim``."""

    custom: Any
    outputs: Dict[str, str]
    parameters: Dict[str, Any]
    result: ActionResultDict
