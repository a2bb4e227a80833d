"""
Behavioral tests run against both validation engines.

Both engines share one canonical rule set, so every scenario here must
produce the same ErrorMap regardless of which engine validates it.
"""

import asyncio
from dataclasses import replace

import pytest

from core.engines import DEFAULT_ENGINE, ENGINES, available_engines, get_engine
from core.errors import ConfigError, ErrorCode
from core.form_model import FIELD_NAMES, RegistrationForm
from core.manual_engine import ManualValidationEngine
from core.rules import MESSAGES
from core.schema_engine import SchemaValidationEngine


@pytest.fixture(params=["schema", "manual"])
def engine(request):
    """Each validation engine in turn."""
    return get_engine(request.param)


class TestWholeForm:
    """Test whole-form outcomes."""

    def test_empty_form_reports_every_field(self, engine, empty_form):
        """Test that an all-empty form yields all ten field keys."""
        errors = engine.validate(empty_form)

        assert set(errors) == set(FIELD_NAMES)
        assert errors["first_name"] == MESSAGES["first_name.required"]
        assert errors["interests"] == MESSAGES["interests.required"]
        assert errors["birth_date"] == MESSAGES["birth_date.required"]

    def test_valid_form_has_no_errors(self, engine, valid_form):
        """Test that a fully valid form yields an empty map."""
        assert engine.validate(valid_form) == {}
        assert engine.is_valid(valid_form)

    def test_validation_is_idempotent(self, engine, valid_form):
        """Test that validating the same snapshot twice gives identical maps."""
        form = replace(valid_form, email="bad", age="abc", interests=())

        first = engine.validate(form)
        second = engine.validate(form)

        assert first == second
        assert set(first) == {"email", "age", "interests"}

    def test_validation_does_not_mutate_snapshot(self, engine, valid_form):
        """Test that the engine leaves its input untouched."""
        form = replace(valid_form, phone_number="123")
        before = form.to_dict()

        engine.validate(form)

        assert form.to_dict() == before

    def test_failures_do_not_short_circuit(self, engine, valid_form):
        """Test that one bad field does not hide another."""
        form = replace(valid_form, first_name="", phone_number="12345", gender="")
        errors = engine.validate(form)

        assert errors == {
            "first_name": MESSAGES["first_name.required"],
            "phone_number": MESSAGES["phone_number.format"],
            "gender": MESSAGES["gender.required"],
        }

    def test_validate_async(self, engine, empty_form):
        """Test the awaitable entry point returns the same map."""
        result = asyncio.run(engine.validate_async(empty_form))
        assert result == engine.validate(empty_form)


class TestFieldRules:
    """Test individual field boundaries."""

    @pytest.mark.parametrize(
        "password,message",
        [
            ("Abcdefg1", MESSAGES["password.symbol"]),
            ("Abcdefg1!", None),
            ("Ab1!", MESSAGES["password.min_length"]),
            ("abcdefg1!", MESSAGES["password.uppercase"]),
        ],
    )
    def test_password(self, engine, valid_form, password, message):
        """Test password complexity boundaries."""
        form = replace(valid_form, password=password, confirm_password=password)
        assert engine.validate(form).get("password") == message

    @pytest.mark.parametrize(
        "age,message",
        [
            ("17", MESSAGES["age.min"]),
            ("18", None),
            ("100", None),
            ("101", MESSAGES["age.max"]),
            ("abc", MESSAGES["age.type"]),
            ("18.5", MESSAGES["age.type"]),
            ("٣٠", MESSAGES["age.type"]),
            ("", MESSAGES["age.required"]),
        ],
    )
    def test_age(self, engine, valid_form, age, message):
        """Test age boundaries and numeric typing."""
        assert engine.validate(replace(valid_form, age=age)).get("age") == message

    @pytest.mark.parametrize(
        "confirm,message",
        [
            ("Abcdefg1", MESSAGES["confirm_password.mismatch"]),
            ("Abcdefg1!", None),
            ("", MESSAGES["confirm_password.required"]),
        ],
    )
    def test_confirm_password(self, engine, valid_form, confirm, message):
        """Test the confirm-password cross-field rule."""
        form = replace(valid_form, password="Abcdefg1!", confirm_password=confirm)
        assert engine.validate(form).get("confirm_password") == message

    def test_confirm_password_checked_against_invalid_password(self, engine, valid_form):
        """Test that the mismatch check still runs when the password itself is weak."""
        form = replace(valid_form, password="weak", confirm_password="different")
        errors = engine.validate(form)

        assert errors["password"] == MESSAGES["password.min_length"]
        assert errors["confirm_password"] == MESSAGES["confirm_password.mismatch"]

    @pytest.mark.parametrize(
        "phone,message",
        [
            ("12345", MESSAGES["phone_number.format"]),
            ("1234567890", None),
            ("123-456-7890", MESSAGES["phone_number.format"]),
            ("١٢٣٤٥٦٧٨٩٠", MESSAGES["phone_number.format"]),
        ],
    )
    def test_phone_number(self, engine, valid_form, phone, message):
        """Test the ten-digit phone number rule."""
        assert engine.validate(replace(valid_form, phone_number=phone)).get("phone_number") == message

    @pytest.mark.parametrize(
        "email,message",
        [
            ("", MESSAGES["email.required"]),
            ("not-an-email", MESSAGES["email.format"]),
            ("jörg@example.com", MESSAGES["email.format"]),
            ("a@b.co", None),
        ],
    )
    def test_email(self, engine, valid_form, email, message):
        """Test required and format rules for email."""
        assert engine.validate(replace(valid_form, email=email)).get("email") == message

    def test_gender_must_be_a_choice(self, engine, valid_form):
        """Test that only the offered genders are accepted."""
        assert engine.validate(replace(valid_form, gender="Robot")).get("gender") == MESSAGES["gender.choice"]
        assert "gender" not in engine.validate(replace(valid_form, gender="Other"))

    def test_interests(self, engine, valid_form):
        """Test that at least one known interest is required."""
        assert engine.validate(replace(valid_form, interests=())).get("interests") == MESSAGES["interests.required"]
        assert engine.validate(replace(valid_form, interests=("chess",))).get("interests") == MESSAGES["interests.choice"]
        assert "interests" not in engine.validate(replace(valid_form, interests=("sports",)))

    @pytest.mark.parametrize(
        "birth_date,message",
        [
            ("", MESSAGES["birth_date.required"]),
            ("2001-02-30", MESSAGES["birth_date.format"]),
            ("20000101", MESSAGES["birth_date.format"]),
            ("2000-W01-1", MESSAGES["birth_date.format"]),
            ("2000-01-01T00:00", MESSAGES["birth_date.format"]),
            ("2000-01-01", None),
        ],
    )
    def test_birth_date(self, engine, valid_form, birth_date, message):
        """Test that the birth date is required and must be a real YYYY-MM-DD date."""
        assert engine.validate(replace(valid_form, birth_date=birth_date)).get("birth_date") == message

    def test_whitespace_only_counts_as_missing(self, engine, valid_form):
        """Test that whitespace-only text fails the required rule."""
        assert engine.validate(replace(valid_form, last_name="   ")).get("last_name") == MESSAGES["last_name.required"]


class TestEngineParity:
    """Test that both engines agree, including error codes."""

    @pytest.mark.parametrize(
        "changes",
        [
            {},
            {"email": "x@", "phone_number": "abc"},
            {"password": "", "confirm_password": "x"},
            {"age": "-1", "gender": "", "interests": ()},
            {"birth_date": "yesterday", "first_name": " "},
        ],
    )
    def test_same_errors_and_codes(self, valid_form, changes):
        """Test identical field errors from both engines."""
        form = replace(valid_form, **changes)

        schema_errors = SchemaValidationEngine().collect(form)
        manual_errors = ManualValidationEngine().collect(form)

        assert [(e.field, e.user_message, e.code) for e in schema_errors] == [
            (e.field, e.user_message, e.code) for e in manual_errors
        ]

    def test_empty_form_error_codes(self, empty_form):
        """Test that every empty-form failure is a missing-field error."""
        for engine_class in ENGINES.values():
            errors = engine_class().collect(empty_form)
            assert {e.code for e in errors} == {ErrorCode.REQUIRED_FIELD_MISSING}


class TestRegistry:
    """Test the engine registry."""

    def test_available_engines(self):
        """Test that both engines are registered."""
        assert available_engines() == ["schema", "manual"]
        assert DEFAULT_ENGINE == "schema"

    def test_get_engine_returns_instances(self):
        """Test creating engines by name."""
        assert isinstance(get_engine("schema"), SchemaValidationEngine)
        assert isinstance(get_engine("manual"), ManualValidationEngine)

    def test_unknown_engine_raises_config_error(self):
        """Test that unknown names raise a configuration error."""
        with pytest.raises(ConfigError) as exc_info:
            get_engine("telepathy")

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID
        assert "telepathy" in exc_info.value.user_message


def test_snapshot_with_extra_whitespace_in_age_is_accepted(valid_form):
    """Test that surrounding whitespace in the age is tolerated by both engines."""
    form = replace(valid_form, age=" 30 ")
    for name in available_engines():
        assert "age" not in get_engine(name).validate(form)


def test_registration_form_from_controller_style_edits():
    """Test validating a snapshot built through the edit helpers."""
    form = RegistrationForm.empty()
    for name, value in [
        ("first_name", "Grace"),
        ("last_name", "Hopper"),
        ("email", "grace@navy.mil"),
        ("phone_number", "5555555555"),
        ("password", "Cobol#1959"),
        ("confirm_password", "Cobol#1959"),
        ("age", "85"),
        ("gender", "Female"),
        ("birth_date", "1906-12-09"),
    ]:
        form = form.with_field(name, value)
    form = form.with_interest("coding", True)

    for name in available_engines():
        assert get_engine(name).validate(form) == {}
