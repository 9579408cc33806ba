import pytest

from circle_core.catalog import GroupType
from circle_core.form import FormState
from circle_core.validation import parse_decimal, parse_int, validate_form

from conftest import INVITEE, fill_form


def first_error(form):
    result = validate_form(form)
    assert not result.ok
    return result.error


class TestGroupName:
    @pytest.mark.parametrize("name", ["", " ", "   \t  "])
    def test_blank_name_fails_first(self, name):
        """Test that a blank name is reported even when everything else is wrong."""
        form = FormState()
        form.set_field("group_name", name)
        form.set_field("max_members", "abc")
        form.set_field("contribution_amount", "-1")
        form.set_group_type(GroupType.PRIVATE)

        error = first_error(form)

        assert error.field == "group_name"
        assert error.message == "Group name is required"
        assert error.title == "Error"


class TestMaxMembers:
    @pytest.mark.parametrize("value", ["", "0", "1", "-5", "abc", "2.5"])
    def test_minimum_members(self, public_form, value):
        public_form.set_field("max_members", value)

        error = first_error(public_form)

        assert error.field == "max_members"
        assert error.message == "Minimum 2 members required"

    def test_two_members_is_enough(self, public_form):
        public_form.set_field("max_members", "2")

        assert validate_form(public_form).ok

    @pytest.mark.parametrize("value,ok", [("100", True), ("101", False), ("150", False)])
    def test_public_ceiling(self, public_form, value, ok):
        public_form.set_field("max_members", value)

        result = validate_form(public_form)

        assert result.ok is ok
        if not ok:
            assert result.error.message == "Maximum 100 members for public groups"

    @pytest.mark.parametrize("value,ok", [("50", True), ("51", False), ("100", False)])
    def test_private_ceiling(self, private_form, value, ok):
        private_form.set_field("max_members", value)

        result = validate_form(private_form)

        assert result.ok is ok
        if not ok:
            assert result.error.message == "Maximum 50 members for private groups"

    def test_switching_type_changes_ceiling(self, public_form):
        """Test that a valid public size becomes invalid for a private group."""
        public_form.set_field("max_members", "80")
        public_form.add_invited_member(INVITEE)
        assert validate_form(public_form).ok

        public_form.set_group_type(GroupType.PRIVATE)

        assert first_error(public_form).message == "Maximum 50 members for private groups"


class TestContribution:
    @pytest.mark.parametrize("value", ["", "0", "0.00", "-10", "fifty", "NaN", "Infinity"])
    def test_invalid_contribution(self, public_form, value):
        public_form.set_field("contribution_amount", value)

        error = first_error(public_form)

        assert error.field == "contribution_amount"
        assert error.message == "Valid contribution amount is required"

    def test_fractional_contribution(self, public_form):
        public_form.set_field("contribution_amount", "0.01")

        assert validate_form(public_form).ok


class TestCycle:
    @pytest.mark.parametrize("value", ["", "0", "-1", "weekly"])
    def test_invalid_duration(self, public_form, value):
        public_form.set_field("cycle_duration", value)

        error = first_error(public_form)

        assert error.field == "cycle_duration"
        assert error.message == "Cycle duration must be at least 1"

    def test_missing_unit(self, public_form):
        public_form.set_field("cycle_unit", "")

        error = first_error(public_form)

        assert error.field == "cycle_unit"
        assert error.message == "Cycle unit is required"

    def test_unknown_unit(self, public_form):
        public_form.set_field("cycle_unit", "fortnights")

        error = first_error(public_form)

        assert error.field == "cycle_unit"
        assert "days, weeks, months" in error.message

    @pytest.mark.parametrize("unit", ["days", "weeks", "months"])
    def test_known_units(self, public_form, unit):
        public_form.set_field("cycle_unit", unit)

        assert validate_form(public_form).ok


class TestInvitations:
    def test_private_without_invitees(self):
        """Test that a private group needs at least one invitee."""
        form = fill_form(FormState())
        form.set_group_type(GroupType.PRIVATE)

        error = first_error(form)

        assert error.field == "invited_members"
        assert error.title == "Missing invitations"
        assert error.message == "Please invite at least one member to your private group."

    def test_public_without_invitees(self, public_form):
        assert validate_form(public_form).ok

    def test_private_with_invitee(self, private_form):
        assert validate_form(private_form).ok


class TestLockAndToken:
    @pytest.mark.parametrize("amount", ["-1", "abc"])
    def test_invalid_lock_amount(self, public_form, amount):
        public_form.set_lock(True, amount)

        error = first_error(public_form)

        assert error.field == "lock_amount"
        assert error.message == "Lock amount must be zero or greater"

    @pytest.mark.parametrize("amount", ["", "0", "12.5"])
    def test_accepted_lock_amount(self, public_form, amount):
        public_form.set_lock(True, amount)

        assert validate_form(public_form).ok

    def test_lock_amount_ignored_when_disabled(self, public_form):
        public_form.set_lock(False, "-1")

        assert validate_form(public_form).ok

    def test_unknown_token(self, public_form):
        public_form.set_token("doge")

        error = first_error(public_form)

        assert error.field == "selected_token"
        assert error.message == "Unsupported token"


class TestScenarios:
    def test_friends_fund_public(self, public_form):
        """Scenario: a complete public form validates."""
        assert validate_form(public_form).ok

    def test_friends_fund_too_large(self, public_form):
        """Scenario: 150 members exceeds the public ceiling."""
        public_form.set_field("max_members", "150")

        assert first_error(public_form).message == "Maximum 100 members for public groups"

    def test_validation_does_not_mutate(self, private_form):
        before = private_form.snapshot()

        validate_form(private_form)

        assert private_form.snapshot() == before


class TestParsers:
    def test_parse_int(self):
        assert parse_int(" 12 ") == 12
        assert parse_int("1.5") is None
        assert parse_int("") is None

    def test_parse_decimal(self):
        assert str(parse_decimal("50.25")) == "50.25"
        assert parse_decimal("inf") is None
        assert parse_decimal("") is None

    @pytest.mark.parametrize("value", ["1_0", "١٠", "１０", "+", "1 0"])
    def test_parse_int_plain_digits_only(self, value):
        assert parse_int(value) is None

    @pytest.mark.parametrize("value", ["1_000", "1e3", "٥٠", "5,0", "."])
    def test_parse_decimal_plain_digits_only(self, value):
        assert parse_decimal(value) is None

    def test_parse_decimal_forms(self):
        assert parse_decimal(".5") == parse_decimal("0.5")
        assert parse_decimal("5.") == 5
        assert parse_decimal("-3") == -3


class TestNumberFormats:
    @pytest.mark.parametrize("value", ["1_0", "١٠"])
    def test_members_in_other_notation(self, public_form, value):
        public_form.set_field("max_members", value)

        assert first_error(public_form).field == "max_members"

    @pytest.mark.parametrize("value", ["1e3", "5_0", "٥٠"])
    def test_contribution_in_other_notation(self, public_form, value):
        public_form.set_field("contribution_amount", value)

        assert first_error(public_form).field == "contribution_amount"

    def test_cycle_with_separator(self, public_form):
        public_form.set_field("cycle_duration", "1_0")

        assert first_error(public_form).field == "cycle_duration"

    def test_surrounding_spaces_allowed(self, public_form):
        public_form.set_field("max_members", " 10 ")
        public_form.set_field("contribution_amount", " 50 ")

        assert validate_form(public_form).ok
