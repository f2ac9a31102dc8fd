"""
Configuration management for the CNAB core library.

Configuration is optional: validators can be created without one and fall
back to the defaults below. Values can also be read from the environment
with ``ValidatorConfig.from_env()``.
"""

import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_JSON_SCHEMA_DRAFT
from .exceptions import ConfigurationError

JsonSchemaDraft = Literal["draft4", "draft6", "draft7", "2019-09", "2020-12"]

_ENV_VARS = {
    "cache_validators": "CNAB_CACHE_VALIDATORS",
    "check_formats": "CNAB_CHECK_FORMATS",
    "default_draft": "CNAB_DEFAULT_DRAFT",
}


class ValidatorConfig(BaseModel):
    """
    Parameter validator configuration.

    Example:
        # Using environment variables
        config = ValidatorConfig.from_env()
        validator = ParameterValidator.for_bundle(bundle, config=config)

        # Or using direct parameters
        config = ValidatorConfig(cache_validators=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cache_validators: bool = Field(
        False,
        description=(
            "Memoize the compiled schema validator per parameter name. "
            "Safe because bundles are never mutated."
        ),
    )
    check_formats: bool = Field(
        True,
        description="Enforce JSON Schema 'format' keywords (email, uri, date-time, ...)",
    )
    default_draft: JsonSchemaDraft = Field(
        DEFAULT_JSON_SCHEMA_DRAFT,
        description="JSON Schema draft for definitions that do not declare $schema",
    )

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ValidatorConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ValidatorConfig instance

        Raises:
            ConfigurationError: If an environment value is invalid
        """
        environ = os.environ if environ is None else environ
        values = {
            field: environ[env_var]
            for field, env_var in _ENV_VARS.items()
            if environ.get(env_var) not in (None, "")
        }
        try:
            return cls.model_validate(values)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = str(first["loc"][0]) if first.get("loc") else None
            raise ConfigurationError(
                f"Invalid configuration: {first['msg']}",
                config_key=_ENV_VARS.get(field, field) if field else None,
                config_value=values.get(field) if field else None,
            ) from e


DEFAULT_CONFIG = ValidatorConfig()
