"""
Validator - Main orchestrator for field validation.

This is the primary entry point. It builds fields and button bindings from
configuration, runs tests through its own TestRegistry, reports outcomes to
the UI collaborator and aggregates results.
"""

import asyncio
from typing import Any, Dict, List, Optional, Union

from formcheck.buttons import ButtonBinding, ButtonOutcome, ButtonType
from formcheck.core.base import ErrorLabel, Result, RunResult, TestSpec
from formcheck.core.config_loader import ValidatorConfig, load_validator_config, parse_config
from formcheck.core.exceptions import ConfigurationError, FieldNotFoundError, UnknownTestError
from formcheck.core.fields import Field
from formcheck.core.interfaces import ErrorPresenter, InteractionNotifier, ValueSource
from formcheck.core.registry import TestRegistry
from formcheck.core.snapshot import FormSnapshot
from formcheck.scheduler import ValidationScheduler
from shared.utils.config import settings
from shared.utils.logger import setup_logger

# Import checks to trigger registration
from formcheck import checks  # noqa: F401

logger = setup_logger(__name__)

FieldRef = Union[Field, str, None]


class Validator(InteractionNotifier):
    """
    Field validation orchestrator.

    Orchestrates validation by:
    1. Building Field and ButtonBinding wrappers from configuration
    2. Recording each field's default value
    3. Running each field's tests in order, stopping at the first failure
    4. Asking the presenter to show or clear error state

    Usage:
        form = MemoryForm()
        form.add("Email", "")

        validator = Validator(
            {
                "fields": [{"name": "Email", "tests": "required, email"}],
                "messages": {"required": "This field is required."},
            },
            source=form,
            presenter=form,
        )

        outcome = validator.run()
        if not outcome.passed:
            for failure in outcome.failures:
                print(f"{failure.field_name}: {failure.failed_test}")
    """

    def __init__(
        self,
        config: Union[ValidatorConfig, Dict[str, Any], None],
        source: ValueSource,
        presenter: ErrorPresenter,
        registry: Optional[TestRegistry] = None,
    ):
        """
        Initialize validator.

        Args:
            config: Configuration mapping or ValidatorConfig
            source: Reads/writes field values
            presenter: Shows/clears error state
            registry: Test registry; defaults to a fresh copy of the built-ins

        Raises:
            ConfigurationError: On malformed configuration or unknown tests
        """
        self.config = parse_config(config)
        self.source = source
        self.presenter = presenter
        self.registry = registry if registry is not None else TestRegistry.with_builtins()

        self.fields: List[Field] = []
        self.buttons: List[ButtonBinding] = []
        self.defaults: Dict[str, Any] = {}
        self.form_additions = dict(self.config.form_additions)
        self.messages = dict(self.config.messages)

        self.show_errors = (
            settings.SHOW_ERRORS if self.config.show_errors is None else self.config.show_errors
        )
        self.show_messages = (
            settings.SHOW_MESSAGES if self.config.show_messages is None else self.config.show_messages
        )

        label_kwargs = {}
        if self.config.error_label is not None:
            label_kwargs['template'] = self.config.error_label
        if self.config.error_label_styles is not None:
            label_kwargs['styles'] = dict(self.config.error_label_styles)
        self.error_label = ErrorLabel(**label_kwargs)

        self.scheduler = ValidationScheduler(
            self,
            interval_ms=self.config.scheduler_interval_ms or settings.SCHEDULER_INTERVAL_MS
        )

        self._fields_by_name: Dict[str, Field] = {}
        self.initialize()

    @classmethod
    def from_file(
        cls,
        form_name: str,
        source: ValueSource,
        presenter: ErrorPresenter,
        config_path: Optional[str] = None,
        registry: Optional[TestRegistry] = None,
        **loader_kwargs: Any
    ) -> "Validator":
        """
        Build a validator from a named form in the YAML config file.

        loader_kwargs are passed to load_validator_config (pretests,
        button_callbacks, top-level overrides).
        """
        config = load_validator_config(form_name, config_path=config_path, **loader_kwargs)
        return cls(config, source=source, presenter=presenter, registry=registry)

    def initialize(self) -> None:
        """Build wrappers, record defaults, verify tests and start the scheduler."""
        for field_config in self.config.fields:
            field = Field(
                name=field_config.name,
                source=self.source,
                binding=field_config.binding,
                tests=field_config.test_specs(),
                pretest=field_config.pretest,
                label=field_config.label,
                kind=field_config.kind,
                grouped=field_config.grouped,
                group=field_config.group,
            )
            self.fields.append(field)
            self._fields_by_name[field.name] = field
            self.defaults[field.name] = field.default

        for button_config in self.config.buttons:
            self.buttons.append(ButtonBinding(
                type=button_config.type,
                binding=button_config.binding,
                success=button_config.success,
                fail=button_config.fail,
                always=button_config.always,
                async_=button_config.async_,
            ))

        self._verify_tests()

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; live re-checking starts with start_scheduler()")
        else:
            self.scheduler.start()

        logger.info(
            f"Validator initialized with {len(self.fields)} fields, "
            f"{len(self.buttons)} buttons and {len(self.registry)} tests"
        )

    def _verify_tests(self) -> None:
        for field in self.fields:
            for spec in field.tests:
                if spec.name not in self.registry:
                    error = UnknownTestError(spec.name, self.registry.names())
                    logger.error(f"Field '{field.name}': {error}")
                    raise error

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_field(self, name: str) -> Field:
        """
        Raises:
            FieldNotFoundError: If no field has this name
        """
        try:
            return self._fields_by_name[name]
        except KeyError:
            raise FieldNotFoundError(
                f"Field '{name}' not found. Available: {list(self._fields_by_name)}"
            ) from None

    def _resolve(self, field: FieldRef) -> Optional[Field]:
        if field is None or isinstance(field, Field):
            return field
        return self.get_field(field)

    def get_button(self, binding: Any) -> ButtonBinding:
        for button in self.buttons:
            if button.binding == binding:
                return button
        raise ConfigurationError(f"No button bound to {binding!r}")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check(self, field: FieldRef) -> Result:
        """
        Validate one field.

        Tests run in configured order and stop at the first failure. An
        absent field, or one whose pretest is not True, passes without
        running any test.

        Args:
            field: Field, field name or None

        Returns:
            Result for the field
        """
        field = self._resolve(field)

        if field is None or not field.should_check():
            return Result(field, True)

        details: Dict[str, Any] = {}

        for spec in field.tests:
            outcome = self.registry.evaluate(spec.name, field, spec.args, self)

            if not outcome.valid:
                message = self.message_for(spec)
                logger.debug(f"Field '{field.name}' failed test '{spec}'")
                self._show_failure(field, message)
                return Result(field, False, failed_test=spec.name, message=message)

            details.update(outcome.metadata())

        if field.tests and self.show_errors:
            self.presenter.clear_error(field)

        return Result(field, True, details=details)

    def message_for(self, spec: TestSpec) -> Optional[str]:
        """Message for a failed test, looked up by raw token then by name."""
        if spec.raw in self.messages:
            return self.messages[spec.raw]
        return self.messages.get(spec.name)

    def _show_failure(self, field: Field, message: Optional[str]) -> None:
        if self.show_errors:
            self.presenter.mark_error(field, self.error_label)

        if self.show_messages and self.messages and message is not None:
            self.presenter.set_message(field, message)

    def run(self) -> RunResult:
        """
        Validate every field in declaration order.

        Returns:
            RunResult; passed is True when no field failed
        """
        outcome = RunResult()

        for field in self.fields:
            result = self.check(field)
            if result.passed:
                outcome.successes.append(result)
            else:
                outcome.failures.append(result)

        if outcome.failures:
            logger.info(f"Validation failed for fields: {outcome.failed_fields}")
        else:
            logger.debug(f"All {len(self.fields)} fields passed")

        return outcome

    def reset(self) -> None:
        """Remove all visible error information."""
        self.presenter.reset_all()

    def clear(self) -> None:
        """Restore every field to its default and reset visible errors."""
        for field in self.fields:
            if field.checkable:
                self.source.set_checked(field, False)
            else:
                self.source.set_value(field, self.defaults[field.name])
        self.reset()

    def form(self) -> FormSnapshot:
        """Gather current field values plus form additions."""
        return FormSnapshot.capture(self.fields, self.form_additions)

    # ------------------------------------------------------------------
    # Buttons
    # ------------------------------------------------------------------

    def trigger(self, button: ButtonBinding) -> ButtonOutcome:
        """
        Execute a button's contract.

        submit: run(); on failure fail() then always() and do not proceed;
        on success success() then always() and proceed unless async_.
        clear: clear() then always(); never proceeds.
        """
        if button.type == ButtonType.SUBMIT:
            run_result = self.run()
            if not run_result.passed:
                button.fail()
                button.always()
                return ButtonOutcome(button, proceed=False, run_result=run_result)

            button.success()
            button.always()
            return ButtonOutcome(button, proceed=not button.async_, run_result=run_result)

        if button.type == ButtonType.CLEAR:
            self.clear()
            button.always()
            return ButtonOutcome(button, proceed=False)

        raise ConfigurationError(f"Unsupported button type: {button.type!r}")

    # ------------------------------------------------------------------
    # InteractionNotifier
    # ------------------------------------------------------------------

    def notify_focus(self, field: FieldRef) -> None:
        field = self._resolve(field)
        if field is not None and self.show_messages:
            self.presenter.show_message(field)

    def notify_blur(self, field: FieldRef) -> Result:
        """Check the field, hide its message and count the interaction."""
        field = self._resolve(field)
        result = self.check(field)

        if field is not None:
            if self.show_messages:
                self.presenter.hide_message(field)
            field.record_interaction()

        return result

    def notify_hover(self, field: FieldRef, entered: bool) -> None:
        """Show/hide a field's message on hover unless the field has focus."""
        field = self._resolve(field)
        if field is None or not self.show_messages:
            return
        if self.source.is_focused(field):
            return

        if entered:
            self.presenter.show_message(field)
        else:
            self.presenter.hide_message(field)

    def request_check(self, field: FieldRef) -> Result:
        return self.check(field)

    def notify_click(self, binding: Any) -> ButtonOutcome:
        return self.trigger(self.get_button(binding))

    # ------------------------------------------------------------------
    # Scheduler lifecycle
    # ------------------------------------------------------------------

    def start_scheduler(self) -> None:
        self.scheduler.start()

    def close(self) -> None:
        """Stop live re-checking."""
        self.scheduler.stop()

    async def aclose(self) -> None:
        await self.scheduler.aclose()

    async def __aenter__(self) -> "Validator":
        if not self.scheduler.is_running:
            self.scheduler.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"Validator(fields={[f.name for f in self.fields]})"
