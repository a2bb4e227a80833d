"""
Hand-rolled validation engine.

Each field is checked by its own block of conditionals, in display order,
and failures are accumulated into the result directly. Nothing here
raises for malformed input.
"""

from __future__ import annotations

from .errors import ErrorCode, FieldValidationError
from .form_model import GENDER_CHOICES, INTEREST_CHOICES, RegistrationForm
from .rules import (
    AGE_MAX,
    AGE_MIN,
    MESSAGES,
    is_blank,
    is_valid_email,
    is_valid_phone_number,
    parse_integer,
    parse_iso_date,
    password_problem,
)
from .validation import ValidationEngine


class ManualValidationEngine(ValidationEngine):
    """Validation engine built from plain predicate checks."""

    name = "manual"
    description = "Hand-written checks with regular expressions and conditionals"

    def collect(self, form: RegistrationForm) -> list[FieldValidationError]:
        errors: list[FieldValidationError] = []

        def fail(field: str, key: str, code: ErrorCode) -> None:
            errors.append(FieldValidationError(field=field, user_message=MESSAGES[key], code=code))

        if is_blank(form.first_name):
            fail("first_name", "first_name.required", ErrorCode.REQUIRED_FIELD_MISSING)

        if is_blank(form.last_name):
            fail("last_name", "last_name.required", ErrorCode.REQUIRED_FIELD_MISSING)

        if is_blank(form.email):
            fail("email", "email.required", ErrorCode.REQUIRED_FIELD_MISSING)
        elif not is_valid_email(form.email):
            fail("email", "email.format", ErrorCode.INVALID_FORMAT)

        if is_blank(form.phone_number):
            fail("phone_number", "phone_number.required", ErrorCode.REQUIRED_FIELD_MISSING)
        elif not is_valid_phone_number(form.phone_number):
            fail("phone_number", "phone_number.format", ErrorCode.INVALID_FORMAT)

        if is_blank(form.password):
            fail("password", "password.required", ErrorCode.REQUIRED_FIELD_MISSING)
        else:
            problem = password_problem(form.password)
            if problem == "password.min_length":
                fail("password", problem, ErrorCode.VALUE_OUT_OF_RANGE)
            elif problem:
                fail("password", problem, ErrorCode.INVALID_FORMAT)

        if is_blank(form.confirm_password):
            fail("confirm_password", "confirm_password.required", ErrorCode.REQUIRED_FIELD_MISSING)
        elif form.password != form.confirm_password:
            fail("confirm_password", "confirm_password.mismatch", ErrorCode.FIELD_MISMATCH)

        if is_blank(form.age):
            fail("age", "age.required", ErrorCode.REQUIRED_FIELD_MISSING)
        else:
            age = parse_integer(form.age)
            if age is None:
                fail("age", "age.type", ErrorCode.INVALID_TYPE)
            elif age < AGE_MIN:
                fail("age", "age.min", ErrorCode.VALUE_OUT_OF_RANGE)
            elif age > AGE_MAX:
                fail("age", "age.max", ErrorCode.VALUE_OUT_OF_RANGE)

        if is_blank(form.gender):
            fail("gender", "gender.required", ErrorCode.REQUIRED_FIELD_MISSING)
        elif form.gender not in GENDER_CHOICES:
            fail("gender", "gender.choice", ErrorCode.INVALID_CHOICE)

        if len(form.interests) == 0:
            fail("interests", "interests.required", ErrorCode.REQUIRED_FIELD_MISSING)
        elif any(interest not in INTEREST_CHOICES for interest in form.interests):
            fail("interests", "interests.choice", ErrorCode.INVALID_CHOICE)

        if is_blank(form.birth_date):
            fail("birth_date", "birth_date.required", ErrorCode.REQUIRED_FIELD_MISSING)
        elif parse_iso_date(form.birth_date) is None:
            fail("birth_date", "birth_date.format", ErrorCode.INVALID_FORMAT)

        return errors
