"""Test the Ctrl entity."""

import re

import pytest
from hypothesis import given, strategies as st

from formctrl.domain.ctrl import Ctrl
from formctrl.domain.enums import ControlState, ControlType
from formctrl.domain.errors import DomainError, MissingControlNameError
from formctrl.domain.types import ControlProps, OptionItem
from formctrl.formats.registry import FormatRegistry, default_registry


class TestCtrlConstruction:
    """Test building controls from blueprints."""

    def test_minimal_blueprint(self):
        ctrl = Ctrl({"name": "first_name"})

        assert ctrl.name == "first_name"
        assert ctrl.type == ControlType.DEFAULT
        assert ctrl.state == ControlState.NORMAL
        assert ctrl.value == ""
        assert ctrl.message == ""
        assert ctrl.dirty is False

    def test_accepts_control_props(self):
        ctrl = Ctrl(ControlProps(name="age", type=ControlType.NUMBER, value="12 anos"))

        assert ctrl.value == "12"

    @pytest.mark.parametrize("props", [{}, {"name": ""}, None, {"label": "No name"}])
    def test_missing_name_raises(self, props, diagnostics):
        with pytest.raises(MissingControlNameError) as exc_info:
            Ctrl(props, diagnostics=diagnostics)

        assert isinstance(exc_info.value, DomainError)
        assert "`name`" in exc_info.value.message
        assert diagnostics.names() == ["control_missing_name"]

    def test_initial_value_is_filtered(self, valid_cpf):
        ctrl = Ctrl({"name": "cpf", "type": ControlType.CPF, "value": valid_cpf})

        assert ctrl.value == "529.982.247-25"

    def test_initial_value_is_intercepted(self):
        ctrl = Ctrl({"name": "nick", "value": "abc", "interceptors": str.upper})

        assert ctrl.value == "ABC"

    def test_intercepted_initial_value_is_filtered(self):
        """Interceptor output goes through the type filter."""
        ctrl = Ctrl({
            "name": "cep",
            "type": ControlType.CEP,
            "value": "01310",
            "interceptors": lambda v: v + "100",
        })

        assert ctrl.value == "01310-100"

    def test_interceptors_see_raw_initial_value(self, valid_cpf):
        seen = []

        def record(value):
            seen.append(value)
            return value

        ctrl = Ctrl({"name": "cpf", "type": ControlType.CPF, "value": valid_cpf, "interceptors": record})

        assert seen == [valid_cpf]
        assert ctrl.value == "529.982.247-25"

    def test_value_is_read_only(self):
        ctrl = Ctrl({"name": "x"})

        with pytest.raises(AttributeError):
            ctrl.value = "other"

    def test_option_items(self):
        ctrl = Ctrl({
            "name": "color",
            "type": ControlType.DROPDOWN,
            "options": [{"name": "Red", "value": "r"}],
        })

        assert ctrl.options == [OptionItem("Red", "r")]
        assert ctrl.value == []

    def test_repr_and_str(self):
        ctrl = Ctrl({"name": "email", "type": ControlType.EMAIL})

        assert repr(ctrl) == "Ctrl(name='email', type=EMAIL)"
        assert str(ctrl) == "<Ctrl name=email>"


class TestAssignValue:
    """Test the filtered write path."""

    def test_assign_runs_filter(self, valid_cnpj):
        ctrl = Ctrl({"name": "cnpj", "type": ControlType.CNPJ})

        ctrl.assign_value(valid_cnpj)

        assert ctrl.value == "11.222.333/0001-81"

    def test_assign_returns_control(self):
        ctrl = Ctrl({"name": "x"})

        assert ctrl.assign_value("y") is ctrl

    def test_assign_does_not_intercept(self):
        ctrl = Ctrl({"name": "x", "interceptors": str.upper})

        ctrl.assign_value("abc")

        assert ctrl.value == "abc"

    def test_custom_registry_filter(self):
        registry = FormatRegistry().register_filter(ControlType.DEFAULT, str.strip)
        ctrl = Ctrl({"name": "x", "value": "  padded  "}, formats=registry)

        assert ctrl.value == "padded"


class TestApplyInterceptors:
    """Test the interceptor pipeline."""

    def test_no_interceptors(self):
        ctrl = Ctrl({"name": "x"})

        assert ctrl.apply_interceptors("abc") == "abc"

    def test_runs_fifo(self):
        ctrl = Ctrl({"name": "x", "interceptors": [str.upper, lambda v: v + "!"]})

        assert ctrl.apply_interceptors("abc") == "ABC!"

    def test_failure_stops_pipeline(self, diagnostics):
        def boom(value):
            raise ValueError("boom")

        ctrl = Ctrl(
            {"name": "x", "interceptors": [str.upper, boom, lambda v: v + "!"]},
            diagnostics=diagnostics,
        )
        diagnostics.clear()

        assert ctrl.apply_interceptors("abc") == "ABC"

        [event] = diagnostics.get_events_by_name("interceptor_failed")
        assert event["control"] == "x"
        assert event["step"] == 1
        assert event["error_type"] == "ValueError"

    def test_failure_in_first_step_returns_input(self, diagnostics):
        ctrl = Ctrl({"name": "x", "interceptors": [int]}, diagnostics=diagnostics)

        assert ctrl.apply_interceptors("not a number") == "not a number"


class TestChangeHandlers:
    """Test the renderer-facing change hooks."""

    def test_value_change(self):
        calls = []
        ctrl = Ctrl({
            "name": "x",
            "interceptors": str.upper,
            "on_change": lambda event, value: calls.append((event, value)),
        })
        ctrl.invalidate("Old error")

        ctrl.on_value_change("abc")

        assert ctrl.value == "ABC"
        assert ctrl.state == ControlState.NORMAL
        assert ctrl.message == ""
        assert ctrl.dirty is True
        assert calls == [(None, "abc")]

    def test_value_change_filters(self):
        ctrl = Ctrl({"name": "phone", "type": ControlType.PHONE})

        ctrl.on_value_change("11987654321")

        assert ctrl.value == "(11) 98765-4321"

    def test_boolean_change_negates(self):
        calls = []
        ctrl = Ctrl({
            "name": "terms",
            "type": ControlType.BOOLEAN,
            "interceptors": lambda v: "intercepted",
            "on_change": lambda event, value: calls.append(value),
        })

        ctrl.on_boolean_change(False)

        assert ctrl.value is True
        assert calls == [False]

    def test_toggle_adds_and_removes(self):
        ctrl = Ctrl({"name": "tags", "type": ControlType.CHECKBOX_GROUP, "value": ["a"]})

        ctrl.on_value_toggle("b")
        assert ctrl.value == ["a", "b"]

        ctrl.on_value_toggle("a")
        assert ctrl.value == ["b"]

    def test_toggle_does_not_mutate_previous_list(self):
        ctrl = Ctrl({"name": "tags", "type": ControlType.MULTIPLE_OPTION, "value": ["a"]})
        previous = ctrl.value

        ctrl.on_value_toggle("b")

        assert previous == ["a"]
        assert ctrl.value is not previous

    def test_toggle_on_non_list_starts_singleton(self):
        """A plain value is discarded, not merged."""
        ctrl = Ctrl({"name": "x", "value": "old"})

        ctrl.on_value_toggle("new")

        assert ctrl.value == ["new"]

    def test_toggle_intercepts_and_reports_raw_value(self):
        calls = []
        ctrl = Ctrl({
            "name": "tags",
            "type": ControlType.CHECKBOX_GROUP,
            "interceptors": lambda v: v.lower() if isinstance(v, str) else v,
            "on_change": lambda event, value: calls.append(value),
        })

        ctrl.on_value_toggle("A")

        assert ctrl.value == ["a"]
        assert calls == ["A"]

    def test_change_without_callback(self):
        ctrl = Ctrl({"name": "x"})

        ctrl.on_value_change("y")

        assert ctrl.value == "y"

    def test_is_value_selected(self):
        ctrl = Ctrl({"name": "tags", "type": ControlType.CHECKBOX_GROUP, "value": ["a"]})

        assert ctrl.is_value_selected("a") is True
        assert ctrl.is_value_selected("b") is False
        assert Ctrl({"name": "x", "value": "a"}).is_value_selected("a") is False


class TestState:
    """Test state helpers."""

    def test_invalidate_with_message(self):
        ctrl = Ctrl({"name": "x"})

        assert ctrl.invalidate("Taken") is ctrl
        assert ctrl.state == ControlState.ERROR
        assert ctrl.message == "Taken"

    def test_invalidate_generic_message(self):
        ctrl = Ctrl({"name": "x"}).invalidate()

        assert ctrl.message == "Invalid input value provided"

    def test_reset_state_keeps_dirty(self):
        ctrl = Ctrl({"name": "x"})
        ctrl.on_value_change("y")
        ctrl.invalidate()

        ctrl.reset_state()

        assert ctrl.state == ControlState.NORMAL
        assert ctrl.message == ""
        assert ctrl.dirty is True

    def test_reset_state_clean(self):
        ctrl = Ctrl({"name": "x"})
        ctrl.on_value_change("y")

        ctrl.reset_state(clean=True)

        assert ctrl.dirty is False


class TestGetType:
    """Test renderer input type tags."""

    @pytest.mark.parametrize(
        "control_type,expected",
        [
            (ControlType.SINGLE_OPTION, "radio"),
            (ControlType.RADIO_GROUP, "radio"),
            (ControlType.MULTIPLE_OPTION, "checkbox"),
            (ControlType.CHECKBOX_GROUP, "checkbox"),
            (ControlType.BOOLEAN, "checkbox"),
            (ControlType.DROPDOWN, "select"),
            (ControlType.TEXTAREA, "textarea"),
            (ControlType.CPF, "tel"),
            (ControlType.CEP, "tel"),
            (ControlType.CREDIT_CARD, "tel"),
            (ControlType.PASSWORD, "password"),
            (ControlType.EMAIL, "email"),
            (ControlType.DEFAULT, "text"),
            (ControlType.DATE, "text"),
            (ControlType.URL, "text"),
            (ControlType.HIDDEN, "text"),
        ],
    )
    def test_get_type(self, control_type, expected):
        assert Ctrl({"name": "x", "type": control_type}).get_type() == expected


class TestValidate:
    """Test the validation chain."""

    def test_optional_empty_control_is_valid(self):
        ctrl = Ctrl({"name": "x"})

        assert ctrl.validate() is True
        assert ctrl.state == ControlState.NORMAL

    def test_required(self):
        ctrl = Ctrl({"name": "x", "required": True})

        assert ctrl.validate() is False
        assert ctrl.state == ControlState.ERROR
        assert ctrl.message == "This field is required."

    def test_required_on_empty_option_list(self):
        ctrl = Ctrl({"name": "x", "type": ControlType.CHECKBOX_GROUP, "required": True})

        assert ctrl.validate() is False
        assert ctrl.message == "This field is required."

    def test_validate_resets_previous_error(self):
        ctrl = Ctrl({"name": "x"}).invalidate("Server error")

        assert ctrl.validate() is True
        assert ctrl.state == ControlState.NORMAL
        assert ctrl.message == ""

    def test_min_length(self):
        ctrl = Ctrl({"name": "x", "min_length": 3, "value": "ab"})

        assert ctrl.validate() is False
        assert ctrl.message == 'Min length accepted is "3" characters.'

    def test_max_length(self):
        ctrl = Ctrl({"name": "x", "max_length": 3, "value": "abcd"})

        assert ctrl.validate() is False
        assert ctrl.message == 'Max length accepted is "3" characters.'

    def test_length_limits_of_one_are_ignored(self):
        ctrl = Ctrl({"name": "x", "max_length": 1, "value": "abcd"})

        assert ctrl.validate() is True

    def test_length_rules_skip_empty_values(self):
        ctrl = Ctrl({"name": "x", "min_length": 3})

        assert ctrl.validate() is True

    def test_length_of_documents_counts_digits(self, valid_cpf):
        """A masked CPF has 14 characters but 11 digits."""
        ctrl = Ctrl({"name": "cpf", "type": ControlType.CPF, "value": valid_cpf, "max_length": 11})

        assert ctrl.validate() is True

    def test_min_answers(self):
        ctrl = Ctrl({
            "name": "x",
            "type": ControlType.CHECKBOX_GROUP,
            "min_answers": 2,
            "value": ["a"],
        })

        assert ctrl.validate() is False
        assert ctrl.message == 'Please choose at least "2" options.'

    def test_max_answers(self):
        ctrl = Ctrl({
            "name": "x",
            "type": ControlType.CHECKBOX_GROUP,
            "max_answers": 2,
            "value": ["a", "b", "c"],
        })

        assert ctrl.validate() is False
        assert ctrl.message == 'You can\'t choose more than "2" options.'

    def test_regex(self):
        ctrl = Ctrl({"name": "x", "regex": r"^\d+$", "value": "12a"})

        assert ctrl.validate() is False
        assert ctrl.message == "The current value doesn't match the regular expression."

    def test_regex_accepts_compiled_pattern(self):
        ctrl = Ctrl({"name": "x", "regex": re.compile(r"^\d+$"), "value": "123"})

        assert ctrl.validate() is True

    def test_regex_skipped_for_empty_value(self):
        """Required wins over the regex for an empty value."""
        ctrl = Ctrl({"name": "x", "required": True, "regex": r"^\d+$"})

        assert ctrl.validate() is False
        assert ctrl.message == "This field is required."

    def test_last_failing_rule_owns_message(self):
        """Both min_length and the CPF checksum fail; CPF runs later."""
        ctrl = Ctrl({"name": "cpf", "type": ControlType.CPF, "value": "123", "min_length": 11})

        assert ctrl.validate() is False
        assert ctrl.message == "Invalid CPF number."

    def test_custom_format_message(self):
        ctrl = Ctrl({
            "name": "cpf",
            "type": ControlType.CPF,
            "value": "123",
            "cpf_message": "CPF inválido",
        })

        ctrl.validate()

        assert ctrl.message == "CPF inválido"

    @pytest.mark.parametrize(
        "control_type,value,valid",
        [
            (ControlType.DATE, "29/02/2024", True),
            (ControlType.DATE, "29/02/2023", False),
            (ControlType.DATE, "2024-02-29", True),
            (ControlType.EMAIL, "john.doe@example.com", True),
            (ControlType.EMAIL, "john.doe", False),
            (ControlType.URL, "https://example.com/path?q=1", True),
            (ControlType.URL, "example.com", False),
            (ControlType.CNPJ, "11222333000181", True),
            (ControlType.CNPJ, "11222333000182", False),
            (ControlType.CPF, "529.982.247-25", True),
            (ControlType.CPF, "111.111.111-11", False),
            (ControlType.PIS, "12054375634", True),
            (ControlType.PIS, "12054375635", False),
            (ControlType.CREDIT_CARD, "4111 1111 1111 1111", True),
            (ControlType.CREDIT_CARD, "4111111111111112", False),
        ],
    )
    def test_format_rules(self, control_type, value, valid):
        ctrl = Ctrl({"name": "x", "type": control_type, "value": value})

        assert ctrl.validate() is valid
        assert (ctrl.state == ControlState.ERROR) is not valid

    def test_format_rules_only_apply_to_own_type(self):
        ctrl = Ctrl({"name": "x", "value": "not an email"})

        assert ctrl.validate() is True

    def test_custom_validator(self):
        registry = default_registry().copy().register_validator(ControlType.CPF, lambda v: True)
        ctrl = Ctrl({"name": "cpf", "type": ControlType.CPF, "value": "123"}, formats=registry)

        assert ctrl.validate() is True

    @given(st.text(max_size=30))
    def test_validate_is_deterministic(self, text):
        ctrl = Ctrl({"name": "x", "type": ControlType.CPF, "value": text, "min_length": 11})

        first = (ctrl.validate(), ctrl.state, ctrl.message)
        second = (ctrl.validate(), ctrl.state, ctrl.message)

        assert first == second


class TestToJson:
    """Test the curated dictionary."""

    def test_to_json(self):
        ctrl = Ctrl({
            "name": "color",
            "alias": "cor",
            "type": ControlType.RADIO_GROUP,
            "options": [{"name": "Red", "value": "r"}],
            "value": ["r"],
            "regex": "^r$",
            "on_change": lambda event, value: None,
        })

        data = ctrl.to_json()

        assert data["name"] == "color"
        assert data["alias"] == "cor"
        assert data["type"] == 12
        assert data["state"] == 0
        assert data["value"] == ["r"]
        assert data["regex"] == "^r$"
        assert data["options"] == [
            {"name": "Red", "value": "r", "custom": False, "disabled": False, "inline": False}
        ]
        assert "on_change" not in data
        assert "interceptors" not in data
        assert "required_message" not in data

    def test_to_json_without_regex(self):
        assert Ctrl({"name": "x"}).to_json()["regex"] is None
