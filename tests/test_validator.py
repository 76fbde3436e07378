"""Tests for the Validator orchestrator: check, run, clear, reset, form."""

from collections.abc import Mapping

import pytest

from formcheck import ConfigurationError, FieldNotFoundError, FormSnapshot, UnknownTestError
from formcheck.core.base import DEFAULT_ERROR_LABEL

MESSAGES = {
    "required": "This field is required.",
    "length:5": "This field must be 5 characters long.",
    "length": "Wrong length.",
}


class TestCheck:

    def test_stops_at_first_failing_test(self, form, make_validator, spy_registry):
        form.add("A", "")
        validator = make_validator(
            {"fields": [{"name": "A", "tests": "required, spy"}]},
            registry=spy_registry
        )

        result = validator.check("A")

        assert result.passed is False
        assert result.failed_test == "required"
        assert spy_registry.calls == []

    def test_runs_every_test_when_all_pass(self, form, make_validator, spy_registry):
        form.add("A", "value")
        validator = make_validator(
            {"fields": [{"name": "A", "tests": "spy, required, spy"}]},
            registry=spy_registry
        )

        result = validator.check("A")

        assert result.passed is True
        assert result.failed_test is None
        assert spy_registry.calls == ["A", "A"]

    def test_false_pretest_skips_all_tests(self, form, make_validator, spy_registry):
        form.add("Email", "")
        validator = make_validator(
            {"fields": [{"name": "Email", "tests": "spy, required", "pretest": lambda: False}]},
            registry=spy_registry
        )

        result = validator.check("Email")

        assert result.passed is True
        assert spy_registry.calls == []
        assert form.errors == set()

    def test_pretest_must_return_true_exactly(self, form, make_validator):
        form.add("Email", "")
        validator = make_validator(
            {"fields": [{"name": "Email", "tests": "required", "pretest": lambda: 1}]}
        )
        assert validator.check("Email").passed is True

    def test_true_pretest_runs_tests(self, form, make_validator):
        form.add("Email", "")
        validator = make_validator(
            {"fields": [{"name": "Email", "tests": "required", "pretest": lambda: True}]}
        )
        assert validator.check("Email").passed is False

    def test_absent_field_passes(self, make_validator):
        validator = make_validator({"fields": []})
        result = validator.check(None)
        assert result.passed is True
        assert result.field is None

    def test_unknown_field_name_raises(self, make_validator):
        validator = make_validator({"fields": []})
        with pytest.raises(FieldNotFoundError):
            validator.check("Missing")

    def test_field_without_tests_passes(self, form, make_validator):
        form.add("Notes", "")
        validator = make_validator({"fields": [{"name": "Notes"}]})
        form.errors.add("Notes")

        assert validator.check("Notes").passed is True
        assert "Notes" in form.errors

    def test_failure_marks_error_and_sets_message(self, form, make_validator):
        form.add("Name", "")
        validator = make_validator({
            "fields": [{"name": "Name", "tests": "required"}],
            "messages": MESSAGES,
        })

        result = validator.check("Name")

        assert result.message == "This field is required."
        assert form.errors == {"Name"}
        assert form.messages["Name"] == "This field is required."
        assert DEFAULT_ERROR_LABEL in form.labels["Name"]

    def test_success_clears_error(self, form, make_validator):
        form.add("Name", "")
        validator = make_validator({"fields": [{"name": "Name", "tests": "required"}]})

        validator.check("Name")
        form.enter("Name", "Ada")
        validator.check("Name")

        assert form.errors == set()
        assert form.labels == {}

    def test_message_lookup_prefers_raw_token(self, form, make_validator):
        form.add("Zip", "123")
        form.add("Code", "12")
        validator = make_validator({
            "fields": [
                {"name": "Zip", "tests": "length:5"},
                {"name": "Code", "tests": "length:3"},
            ],
            "messages": MESSAGES,
        })

        assert validator.check("Zip").message == "This field must be 5 characters long."
        assert validator.check("Code").message == "Wrong length."

    def test_show_errors_disabled(self, form, make_validator):
        form.add("Name", "")
        validator = make_validator({
            "fields": [{"name": "Name", "tests": "required"}],
            "messages": MESSAGES,
            "showErrors": False,
        })

        assert validator.check("Name").passed is False
        assert form.errors == set()
        assert form.messages["Name"] == "This field is required."

    def test_show_messages_disabled(self, form, make_validator):
        form.add("Name", "")
        validator = make_validator({
            "fields": [{"name": "Name", "tests": "required"}],
            "messages": MESSAGES,
            "showMessages": False,
        })

        validator.check("Name")
        assert form.errors == {"Name"}
        assert form.messages == {}

    def test_custom_error_label(self, form, make_validator):
        form.add("Name", "")
        validator = make_validator({
            "fields": [{"name": "Name", "tests": "required"}],
            "errorLabel": "<b>!</b>",
            "errorLabelStyles": {"color": "red"},
        })

        validator.check("Name")
        assert form.labels["Name"] == '<span class="error-label" style="color: red"><b>!</b></span>'

    def test_blank_error_label_falls_back_to_default(self, make_validator):
        validator = make_validator({"errorLabel": "  "})
        assert validator.error_label.template == DEFAULT_ERROR_LABEL

    def test_creditcard_type_reported_in_details(self, form, make_validator):
        form.add("Card", "4111111111111111")
        validator = make_validator({"fields": [{"name": "Card", "tests": "required, creditcard"}]})

        result = validator.check("Card")

        assert result.passed is True
        assert result.details == {"card_type": "visa"}


class TestRun:

    def test_collects_only_failing_fields(self, form, make_validator):
        form.add("A", "")
        form.add("B", "ok")
        validator = make_validator({
            "fields": [
                {"name": "A", "tests": "required"},
                {"name": "B", "tests": "required"},
            ]
        })

        outcome = validator.run()

        assert outcome.passed is False
        assert not outcome
        assert [r.field_name for r in outcome.failures] == ["A"]
        assert outcome.failures[0].failed_test == "required"
        assert [r.field_name for r in outcome.successes] == ["B"]

    def test_failures_keep_declaration_order(self, form, make_validator):
        for name, value in [("C", ""), ("A", "x"), ("B", "")]:
            form.add(name, value)
        validator = make_validator({
            "fields": [
                {"name": "C", "tests": "required"},
                {"name": "A", "tests": "required"},
                {"name": "B", "tests": "required"},
            ]
        })

        assert validator.run().failed_fields == ["C", "B"]

    def test_success_sentinel(self, form, make_validator):
        form.add("A", "ok")
        validator = make_validator({"fields": [{"name": "A", "tests": "required"}]})

        outcome = validator.run()

        assert outcome.passed is True
        assert bool(outcome) is True
        assert outcome.failures == []
        assert outcome.to_dict() == {"passed": True, "failures": [], "checked": 1}


class TestClearAndReset:

    @pytest.fixture
    def validator(self, form, make_validator):
        form.add("Name", "")
        form.add("City", "Springfield")
        form.add("Agree", "yes")
        form.add("Subscribed", "yes", checked=True)
        form.add_group("Tags", ["a", "b"])
        return make_validator({
            "fields": [
                {"name": "Name", "tests": "required"},
                {"name": "City", "tests": "required"},
                {"name": "Agree", "kind": "checkbox", "tests": "checked"},
                {"name": "Subscribed", "kind": "checkbox"},
                {"name": "Tags", "grouped": True},
            ]
        })

    def test_defaults_recorded_at_construction(self, validator):
        assert validator.defaults == {
            "Name": "",
            "City": "Springfield",
            "Agree": False,
            "Subscribed": True,
            "Tags": ["a", "b"],
        }

    def test_clear_restores_defaults_and_removes_errors(self, form, validator):
        form.enter("Name", "Bob")
        form.enter("City", "")
        form.toggle("Agree", True)
        form.enter("Tags", ["x", "y"])
        validator.notify_blur("City")
        validator.run()
        assert form.errors

        validator.clear()

        assert form.elements["Name"][0].value == ""
        assert form.elements["City"][0].value == "Springfield"
        assert form.elements["Agree"][0].checked is False
        assert [e.value for e in form.elements["Tags"]] == ["a", "b"]
        assert form.errors == set()
        assert form.labels == {}

    def test_clear_unchecks_even_when_default_was_checked(self, form, validator):
        validator.clear()
        assert form.elements["Subscribed"][0].checked is False

    def test_clear_does_not_reset_interaction_count(self, validator):
        validator.notify_blur("Name")
        validator.clear()
        assert validator.get_field("Name").interaction_count == 1

    def test_reset_only_touches_presentation(self, form, validator):
        form.enter("Name", "")
        validator.run()

        validator.reset()

        assert form.errors == set()
        assert form.elements["City"][0].value == "Springfield"


class TestForm:

    def test_snapshot_values(self, form, make_validator):
        form.add("Name", "Ada")
        form.add("Agree", "yes", checked=True)
        form.add_group("Phones", ["555-1234", "555-9876"])
        validator = make_validator({
            "fields": [
                {"name": "Name"},
                {"name": "Agree", "kind": "checkbox"},
                {"name": "Phones", "grouped": True},
            ]
        })

        snapshot = validator.form()

        assert isinstance(snapshot, FormSnapshot)
        assert isinstance(snapshot, Mapping)
        assert snapshot.to_dict() == {
            "Name": "Ada",
            "Agree": True,
            "Phones": ["555-1234", "555-9876"],
        }

    def test_additions_evaluated_at_snapshot_time_and_override(self, form, make_validator):
        form.add("Name", "Ada")
        form.add("Preference", "none")
        calls = []

        def preference():
            calls.append(1)
            return "Email"

        validator = make_validator({
            "fields": [{"name": "Name"}, {"name": "Preference"}],
            "formAdditions": {"Preference": preference, "Source": "web"},
        })
        assert calls == []

        snapshot = validator.form()

        assert calls == [1]
        assert snapshot["Preference"] == "Email"
        assert snapshot["Source"] == "web"
        assert snapshot.fields["Preference"] == "none"
        assert len(snapshot) == 3


class TestInteractions:

    @pytest.fixture
    def validator(self, form, make_validator):
        form.add("Name", "")
        return make_validator({
            "fields": [{"name": "Name", "tests": "required"}],
            "messages": MESSAGES,
        })

    def test_blur_checks_and_counts(self, form, validator):
        result = validator.notify_blur("Name")

        assert result.passed is False
        assert validator.get_field("Name").interaction_count == 1
        assert form.errors == {"Name"}

    def test_focus_shows_and_blur_hides_message(self, form, validator):
        validator.check("Name")

        validator.notify_focus("Name")
        assert form.visible_messages == {"Name"}

        validator.notify_blur("Name")
        assert form.visible_messages == set()

    def test_hover_ignored_while_focused(self, form, validator):
        validator.check("Name")

        form.focus("Name")
        validator.notify_hover("Name", entered=True)
        assert form.visible_messages == set()

        form.focus(None)
        validator.notify_hover("Name", entered=True)
        assert form.visible_messages == {"Name"}
        validator.notify_hover("Name", entered=False)
        assert form.visible_messages == set()

    def test_request_check(self, form, validator):
        form.enter("Name", "Ada")
        assert validator.request_check("Name").passed is True


class TestConfiguration:

    def test_unregistered_test_fails_at_construction(self, form, make_validator):
        form.add("A", "")
        with pytest.raises(UnknownTestError):
            make_validator({"fields": [{"name": "A", "tests": "required, bogus"}]})

    def test_unknown_button_type_rejected(self, make_validator):
        with pytest.raises(ConfigurationError):
            make_validator({"buttons": [{"type": "reset", "binding": "btn"}]})

    def test_duplicate_field_names_rejected(self, form, make_validator):
        form.add("A", "")
        with pytest.raises(ConfigurationError):
            make_validator({"fields": [{"name": "A"}, {"name": "A"}]})

    def test_unknown_option_rejected(self, make_validator):
        with pytest.raises(ConfigurationError):
            make_validator({"showErorrs": False})

    def test_value_binding_alias(self, form, make_validator):
        form.add("#txtZip", "1234")
        validator = make_validator({
            "fields": [{"name": "Zip", "valueBinding": "#txtZip", "tests": "zip-us"}]
        })

        assert validator.get_field("Zip").binding == "#txtZip"
        assert validator.check("Zip").failed_test == "zip-us"

    def test_each_validator_gets_its_own_registry(self, make_validator):
        first = make_validator({})
        second = make_validator({})

        first.registry.register("custom", lambda field, args, validator: True)

        assert "custom" not in second.registry
