"""
Parameter value validation.

A bundle declares parameters, and each parameter names a definition (a JSON
Schema document) in the bundle's ``definitions`` section. The validator
resolves a parameter to its definition and asks ``jsonschema`` whether a
candidate value satisfies it.

Two entry points are provided:

- ``validate`` checks an already-typed value (str, int, float, bool).
- ``validate_text`` accepts text, e.g. from a form field or command line,
  coerces it to the definition's declared type and then validates it.

Every outcome is returned as a ``Valid`` or ``Invalid`` verdict. Unknown
parameters, dangling definition references and schema violations are not
exceptions.
"""

import logging
import math
import re
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, Literal, Optional, Type, Union

from jsonschema import (
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
    FormatChecker,
    SchemaError,
)
from jsonschema.protocols import Validator as SchemaValidator
from jsonschema.validators import validator_for

from ..config import DEFAULT_CONFIG, ValidatorConfig
from ..constants import (
    DEFAULT_DEFINITION_TYPE,
    NOT_A_BOOLEAN_REASON,
    NOT_A_NUMBER_REASON,
    NOT_A_WHOLE_NUMBER_REASON,
    REASON_SEPARATOR,
    UNRESOLVABLE_PARAMETER_REASON,
)
from ..exceptions import UnsupportedDefinitionTypeError
from ..observability import bundle_context, describe_bundle, get_logger, log_operation
from .types import BundleDict, DefinitionDict, DefinitionType

logger = get_logger(__name__)

ParameterValue = Union[str, int, float, bool]

_DRAFT_VALIDATORS: Dict[str, Type[SchemaValidator]] = {
    "draft4": Draft4Validator,
    "draft6": Draft6Validator,
    "draft7": Draft7Validator,
    "2019-09": Draft201909Validator,
    "2020-12": Draft202012Validator,
}

# Plain decimal notation only. Scientific notation ("1e3") is not accepted.
_DECIMAL_TEXT_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)\s*$")


# ============================================================================
# Verdicts
# ============================================================================


@dataclass(frozen=True)
class Valid:
    """The value satisfies the parameter's schema."""

    is_valid: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class Invalid:
    """The value does not satisfy the parameter's schema."""

    reason: str
    is_valid: Literal[False] = field(default=False, init=False)


Validity = Union[Valid, Invalid]

_UNRESOLVABLE = Invalid(UNRESOLVABLE_PARAMETER_REASON)


# ============================================================================
# Text coercion
# ============================================================================


def _coerce_string(value_text: str) -> Union[str, Invalid]:
    return value_text


def _coerce_integer(value_text: str) -> Union[int, Invalid]:
    if not _DECIMAL_TEXT_RE.match(value_text):
        return Invalid(NOT_A_WHOLE_NUMBER_REASON)
    # Decimal keeps every digit; float would round values beyond 2**53
    number = Decimal(value_text.strip())
    if number != number.to_integral_value():
        return Invalid(NOT_A_WHOLE_NUMBER_REASON)
    return int(number)


def _coerce_number(value_text: str) -> Union[float, Invalid]:
    if not _DECIMAL_TEXT_RE.match(value_text):
        return Invalid(NOT_A_NUMBER_REASON)
    number = float(value_text.strip())
    if not math.isfinite(number):
        return Invalid(NOT_A_NUMBER_REASON)
    return number


def _coerce_boolean(value_text: str) -> Union[bool, Invalid]:
    lowered = value_text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return Invalid(NOT_A_BOOLEAN_REASON)


# Must cover every DefinitionType member.
TEXT_COERCERS: Dict[DefinitionType, Callable[[str], Any]] = {
    DefinitionType.STRING: _coerce_string,
    DefinitionType.INTEGER: _coerce_integer,
    DefinitionType.NUMBER: _coerce_number,
    DefinitionType.BOOLEAN: _coerce_boolean,
}


# ============================================================================
# Validators
# ============================================================================


class BundleParameterValidator(ABC):
    """Validates candidate parameter values for one bundle."""

    @abstractmethod
    def validate(self, parameter: str, value: ParameterValue) -> Validity:
        """Validate a typed value for the named parameter."""

    @abstractmethod
    def validate_text(self, parameter: str, value_text: str) -> Validity:
        """Coerce text to the parameter's declared type and validate it."""


class ParameterValidator(BundleParameterValidator):
    """
    jsonschema-backed parameter validator.

    Holds a reference to the bundle and resolves the schema on every call.
    With ``config.cache_validators`` enabled, compiled schema validators are
    memoized per parameter name; bundles are treated as immutable, so the
    cache never goes stale.

    Example:
        validator = ParameterValidator.for_bundle(bundle)
        verdict = validator.validate_text("port", "8080")
        if not verdict.is_valid:
            print(verdict.reason)
    """

    def __init__(self, bundle: BundleDict, config: Optional[ValidatorConfig] = None):
        """
        Initialize validator.

        Args:
            bundle: Bundle whose parameters are validated (never mutated)
            config: Optional ValidatorConfig (defaults used if None)
        """
        self.bundle = bundle
        self.config = config or DEFAULT_CONFIG
        self._compiled: Dict[str, SchemaValidator] = {}
        self._lock = threading.Lock()
        self._log_fields = describe_bundle(bundle)

    @classmethod
    def for_bundle(
        cls, bundle: BundleDict, config: Optional[ValidatorConfig] = None
    ) -> "ParameterValidator":
        """Create a validator for a bundle."""
        return cls(bundle, config=config)

    def validate(self, parameter: str, value: ParameterValue) -> Validity:
        """
        Validate a typed value against the parameter's definition.

        Args:
            parameter: Parameter name
            value: Candidate value

        Returns:
            Valid, or Invalid with the joined schema violation messages
        """
        with bundle_context(**self._log_fields):
            verdict = self._validate(parameter, value)
            self._log_verdict("parameter.validate", parameter, verdict)
        return verdict

    def validate_text(self, parameter: str, value_text: str) -> Validity:
        """
        Coerce text to the parameter's declared type, then validate it.

        A definition without ``type`` is treated as a string.

        Args:
            parameter: Parameter name
            value_text: Value as entered by a user

        Returns:
            Valid, or Invalid with a coercion or schema violation reason

        Raises:
            UnsupportedDefinitionTypeError: If the definition's type is not
                one of number, integer, string, boolean
        """
        with bundle_context(**self._log_fields):
            verdict = self._validate_text(parameter, value_text)
            self._log_verdict("parameter.validate_text", parameter, verdict)
        return verdict

    def _validate(self, parameter: str, value: ParameterValue) -> Validity:
        definition = self._parameter_schema(parameter)
        if definition is None:
            logger.debug(f"Parameter '{parameter}' does not resolve to a definition")
            return _UNRESOLVABLE
        return self._check(parameter, definition, value)

    def _validate_text(self, parameter: str, value_text: str) -> Validity:
        definition = self._parameter_schema(parameter)
        if definition is None:
            logger.debug(f"Parameter '{parameter}' does not resolve to a definition")
            return _UNRESOLVABLE

        declared_type = definition.get("type", DEFAULT_DEFINITION_TYPE)
        try:
            definition_type = DefinitionType(declared_type)
        except ValueError as e:
            raise UnsupportedDefinitionTypeError(declared_type, parameter=parameter) from e

        coerced = TEXT_COERCERS[definition_type](value_text)
        if isinstance(coerced, Invalid):
            logger.debug(
                f"Text for parameter '{parameter}' is not a valid {definition_type.value}"
            )
            return coerced
        return self._check(parameter, definition, coerced)

    def _parameter_schema(self, parameter: str) -> Optional[DefinitionDict]:
        parameters = self.bundle.get("parameters")
        definitions = self.bundle.get("definitions")
        if parameters is None or definitions is None:
            return None

        parameter_info = parameters.get(parameter)
        if not isinstance(parameter_info, dict):
            return None

        definition_name = parameter_info.get("definition")
        if not isinstance(definition_name, str):
            return None

        definition = definitions.get(definition_name)
        if not isinstance(definition, dict):
            return None
        return definition

    def _check(self, parameter: str, definition: DefinitionDict, value: Any) -> Validity:
        try:
            schema_validator = self._schema_validator(parameter, definition)
        except SchemaError as e:
            logger.warning(f"Definition for parameter '{parameter}' is not a valid schema")
            return Invalid(f"Invalid schema definition: {e.message}")

        messages = [error.message for error in schema_validator.iter_errors(value)]
        if not messages:
            return Valid()
        return Invalid(REASON_SEPARATOR.join(messages))

    def _log_verdict(self, operation: str, parameter: str, verdict: Validity) -> None:
        log_operation(
            logger,
            operation,
            level=logging.DEBUG,
            success=verdict.is_valid,
            parameter=parameter,
            reason=getattr(verdict, "reason", None),
        )

    def _schema_validator(self, parameter: str, definition: DefinitionDict) -> SchemaValidator:
        if not self.config.cache_validators:
            return self._compile(definition)

        with self._lock:
            schema_validator = self._compiled.get(parameter)
            if schema_validator is None:
                schema_validator = self._compile(definition)
                self._compiled[parameter] = schema_validator
            return schema_validator

    def _compile(self, definition: DefinitionDict) -> SchemaValidator:
        default_cls = _DRAFT_VALIDATORS[self.config.default_draft]
        validator_cls = validator_for(definition, default=default_cls)
        validator_cls.check_schema(definition)
        format_checker = FormatChecker() if self.config.check_formats else None
        return validator_cls(definition, format_checker=format_checker)


def for_bundle(bundle: BundleDict, config: Optional[ValidatorConfig] = None) -> ParameterValidator:
    """Create a parameter validator for a bundle."""
    return ParameterValidator.for_bundle(bundle, config=config)
