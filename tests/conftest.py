"""
Pytest configuration and shared fixtures for CNAB core tests.

This module provides:
- Sample bundles (with and without parameters/definitions sections)
- Sample claim records
- Logging context cleanup
"""

import json
from typing import Any, Dict

import pytest

from cnab.observability import get_logging_context

# ============================================================================
# BUNDLE FIXTURES
# ============================================================================


@pytest.fixture
def filter_bundle() -> Dict[str, Any]:
    """Provide a bundle exercising applyTo and required combinations."""
    return {
        "name": "test",
        "schemaVersion": "v1",
        "version": "1.0.0",
        "invocationImages": [],
        "definitions": {"sample": {"type": "string"}},
        "parameters": {
            "noApplyTo": {"definition": "sample", "destination": {}},
            "emptyApplyTo": {"applyTo": [], "definition": "sample", "destination": {}},
            "applyTo2": {
                "applyTo": ["install", "update"],
                "definition": "sample",
                "destination": {},
            },
            "required": {"required": True, "definition": "sample", "destination": {}},
            "notRequired": {"definition": "sample", "destination": {}},
            "explicitlyNotRequired": {
                "required": False,
                "definition": "sample",
                "destination": {},
            },
        },
        "outputs": {
            "endpoint": {"definition": "sample", "path": "/cnab/app/outputs/endpoint"},
            "backupLocation": {
                "applyTo": ["backup"],
                "definition": "sample",
                "path": "/cnab/app/outputs/backup",
            },
        },
    }


@pytest.fixture
def validation_bundle() -> Dict[str, Any]:
    """Provide a bundle with one parameter per supported definition shape."""
    return {
        "name": "test",
        "schemaVersion": "v1",
        "version": "1.0.0",
        "invocationImages": [{"image": "example/test-installer:1.0.0", "imageType": "docker"}],
        "definitions": {
            "simpleString": {"type": "string"},
            "lengthyString": {"type": "string", "minLength": 4, "maxLength": 7},
            "simpleInt": {"type": "integer"},
            "constrainedInt": {"type": "integer", "minimum": 1, "maximum": 100},
            "simpleFloat": {"type": "number"},
            "simpleBool": {"type": "boolean"},
            "untyped": {"minLength": 2},
            "colour": {"type": "string", "enum": ["red", "green", "blue"]},
            "email": {"type": "string", "format": "email"},
            "shortAndNumeric": {"type": "string", "maxLength": 3, "pattern": "^[0-9]+$"},
        },
        "parameters": {
            "simpleString": {"definition": "simpleString", "destination": {"env": "SIMPLE"}},
            "lengthyString": {"definition": "lengthyString", "destination": {}},
            "simpleNum": {"definition": "simpleInt", "destination": {}},
            "constrainedNum": {"definition": "constrainedInt", "destination": {}},
            "simpleFloat": {"definition": "simpleFloat", "destination": {}},
            "simpleBool": {"definition": "simpleBool", "destination": {}},
            "untyped": {"definition": "untyped", "destination": {}},
            "colour": {"definition": "colour", "destination": {}},
            "email": {"definition": "email", "destination": {}},
            "shortAndNumeric": {"definition": "shortAndNumeric", "destination": {}},
            "noDef": {"definition": "doesnt have one", "destination": {}},
        },
    }


@pytest.fixture
def parameterless_bundle() -> Dict[str, Any]:
    """Provide a bundle with definitions but no parameters section."""
    return {
        "name": "test",
        "schemaVersion": "v1",
        "version": "1.0.0",
        "invocationImages": [],
        "definitions": {"foo": {"type": "integer"}},
    }


@pytest.fixture
def definitionless_bundle() -> Dict[str, Any]:
    """Provide a bundle with parameters but no definitions section."""
    return {
        "name": "test",
        "schemaVersion": "v1",
        "version": "1.0.0",
        "invocationImages": [],
        "parameters": {"foo": {"definition": "foo", "destination": {}}},
    }


@pytest.fixture
def empty_bundle() -> Dict[str, Any]:
    """Provide a minimal bundle with no optional sections."""
    return {
        "name": "test",
        "schemaVersion": "v1",
        "version": "1.0.0",
        "invocationImages": [],
    }


# ============================================================================
# CLAIM FIXTURES
# ============================================================================


@pytest.fixture
def sample_claim() -> Dict[str, Any]:
    """Provide a sample claim record."""
    return {
        "bundle": {},
        "created": "2018-08-30T20:01:23.45600-06:00",
        "modified": "2018-09-10T20:01:23.45600+06:00",
        "name": "hello",
        "revision": "ABCDE",
    }


@pytest.fixture
def sample_claim_json(sample_claim: Dict[str, Any]) -> str:
    """Provide a sample claim serialized as JSON."""
    return json.dumps(sample_claim, indent=2)


# ============================================================================
# LOGGING CONTEXT
# ============================================================================


@pytest.fixture(autouse=True)
def no_leaked_logging_context():
    """Fail any test that leaves bundle logging context behind."""
    yield
    assert set(get_logging_context()) == {"timestamp"}
