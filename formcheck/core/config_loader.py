"""
Validator configuration.

Pydantic models for the configuration object accepted by Validator, and a
loader for named form definitions kept in YAML.

YAML layout:

    global:
      showErrors: true
      messages:
        required: "This field is required."

    forms:
      contact:
        fields:
          - name: Email
            tests: "required, email"
        buttons:
          - type: submit
            binding: btnSubmit
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from formcheck.buttons import ButtonType
from formcheck.core.base import TestSpec, parse_tests
from formcheck.core.exceptions import ConfigurationError
from formcheck.core.fields import FieldKind
from shared.utils.config import settings
from shared.utils.logger import log_error, setup_logger

logger = setup_logger(__name__)


class FieldConfig(BaseModel):
    """Configuration of one field."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Unique field name")
    binding: Any = Field(
        default=None,
        alias="valueBinding",
        description="Handle the UI collaborator uses to locate the element(s); defaults to name"
    )
    tests: Union[str, List[str], None] = Field(
        default=None,
        description='Comma-separated test list, e.g. "required, length:5"'
    )
    pretest: Optional[Callable[[], Any]] = None
    label: Any = None
    kind: FieldKind = FieldKind.TEXT
    grouped: bool = False
    group: Optional[str] = None

    def test_specs(self) -> List[TestSpec]:
        return parse_tests(self.tests)


class ButtonConfig(BaseModel):
    """Configuration of one submit/clear button."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, extra="forbid")

    type: ButtonType
    binding: Any = None
    success: Optional[Callable[[], Any]] = None
    fail: Optional[Callable[[], Any]] = None
    always: Optional[Callable[[], Any]] = None
    async_: bool = Field(default=False, alias="async")


class ValidatorConfig(BaseModel):
    """
    Full validator configuration.

    Accepts camelCase keys (showErrors, formAdditions, ...) as well as
    their snake_case names. Display flags left unset fall back to Settings.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, extra="forbid")

    fields: List[FieldConfig] = Field(default_factory=list)
    buttons: List[ButtonConfig] = Field(default_factory=list)
    form_additions: Dict[str, Any] = Field(default_factory=dict, alias="formAdditions")
    messages: Dict[str, str] = Field(default_factory=dict)
    show_errors: Optional[bool] = Field(default=None, alias="showErrors")
    show_messages: Optional[bool] = Field(default=None, alias="showMessages")
    error_label: Optional[str] = Field(default=None, alias="errorLabel")
    error_label_styles: Optional[Dict[str, str]] = Field(default=None, alias="errorLabelStyles")
    scheduler_interval_ms: Optional[int] = Field(default=None, alias="schedulerIntervalMs", gt=0)

    @field_validator("fields")
    @classmethod
    def unique_field_names(cls, fields: List[FieldConfig]) -> List[FieldConfig]:
        seen = set()
        for field_config in fields:
            if field_config.name in seen:
                raise ValueError(f"Duplicate field name: {field_config.name!r}")
            seen.add(field_config.name)
        return fields


def parse_config(config: Union[ValidatorConfig, Dict[str, Any], None]) -> ValidatorConfig:
    """
    Validate a raw configuration mapping.

    Raises:
        ConfigurationError: If the configuration is malformed (unknown
            button type, duplicate field names, unknown keys, ...)
    """
    if isinstance(config, ValidatorConfig):
        return config

    try:
        return ValidatorConfig.model_validate(config or {})
    except ValidationError as e:
        log_error(logger, e, "Invalid validator configuration")
        raise ConfigurationError(f"Invalid validator configuration: {e}") from e


class ValidatorConfigLoader:
    """
    Loads named form definitions from a YAML file.

    Keys under 'global' are applied to every form; a form's own keys win.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to the forms YAML file
                        If None, uses Settings.VALIDATION_CONFIG_PATH
        """
        self.config_path = Path(config_path or settings.VALIDATION_CONFIG_PATH)
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            yaml.YAMLError: If YAML parsing fails
        """
        if not self.config_path.exists():
            logger.warning(
                f"Validation config file not found: {self.config_path}. "
                "Using empty configuration."
            )
            self._config = self._get_default_config()
            return self._config

        try:
            with open(self.config_path, 'r') as f:
                self._config = yaml.safe_load(f) or {}

            logger.info(f"Loaded validation config from: {self.config_path}")
            return self._config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse validation config: {e}")
            raise

    def reload(self) -> Dict[str, Any]:
        self._config = None
        return self.load()

    def get_global_settings(self) -> Dict[str, Any]:
        if self._config is None:
            self.load()

        return self._config.get('global') or {}

    def list_forms(self) -> List[str]:
        if self._config is None:
            self.load()

        return list((self._config.get('forms') or {}).keys())

    def get_form_config(self, form_name: str) -> Dict[str, Any]:
        """
        Get the raw configuration of one form, merged over the global keys.

        Raises:
            ConfigurationError: If the form is not defined
        """
        if self._config is None:
            self.load()

        forms = self._config.get('forms') or {}
        if form_name not in forms:
            raise ConfigurationError(
                f"Form '{form_name}' not defined in {self.config_path}. "
                f"Available: {list(forms.keys())}"
            )

        merged = dict(self.get_global_settings())
        form_config = forms[form_name] or {}

        # messages merge key by key so forms can override single entries
        if 'messages' in merged and 'messages' in form_config:
            merged['messages'] = {**merged['messages'], **form_config['messages']}
            form_config = {k: v for k, v in form_config.items() if k != 'messages'}

        merged.update(form_config)
        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            'global': {},
            'forms': {}
        }


def load_validator_config(
    form_name: str,
    config_path: Optional[str] = None,
    pretests: Optional[Dict[str, Callable[[], Any]]] = None,
    button_callbacks: Optional[Dict[Any, Dict[str, Any]]] = None,
    **overrides: Any
) -> ValidatorConfig:
    """
    Build a ValidatorConfig from a YAML form definition.

    YAML cannot carry callables, so pretests (by field name) and button
    callbacks (by button binding) are attached here.

    Args:
        form_name: Form key under 'forms'
        config_path: Optional path to the YAML file
        pretests: Mapping field name -> zero-arg pretest
        button_callbacks: Mapping button binding -> {"success": fn, "fail": fn, "always": fn}
        **overrides: Top-level keys replacing the loaded ones (e.g. formAdditions)

    Raises:
        ConfigurationError: On unknown form, field or button references
    """
    raw = ValidatorConfigLoader(config_path).get_form_config(form_name)
    raw.update(overrides)

    fields = [dict(f) for f in raw.get('fields') or []]
    for field_name, pretest in (pretests or {}).items():
        matches = [f for f in fields if f.get('name') == field_name]
        if not matches:
            raise ConfigurationError(f"Pretest given for unknown field '{field_name}'")
        for f in matches:
            f['pretest'] = pretest
    raw['fields'] = fields

    buttons = [dict(b) for b in raw.get('buttons') or []]
    for binding, callbacks in (button_callbacks or {}).items():
        matches = [b for b in buttons if b.get('binding') == binding]
        if not matches:
            raise ConfigurationError(f"Callbacks given for unknown button '{binding}'")
        for b in matches:
            b.update(callbacks)
    raw['buttons'] = buttons

    return parse_config(raw)
