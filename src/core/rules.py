"""
Canonical validation rules for the registration form.

Both validation engines draw their patterns, limits and messages from
this module so the two forms always agree on what a valid registration is.
The rules are expressed as small composable checks: each field owns an
ordered list of FieldRule entries and only the first failing rule per
field is reported.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from .errors import ErrorCode, FieldValidationError
from .form_model import FIELD_NAMES, GENDER_CHOICES, INTEREST_CHOICES, RegistrationForm

# ASCII digits and word characters only
EMAIL_PATTERN = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$", re.ASCII)
PHONE_PATTERN = re.compile(r"^\d{10}$", re.ASCII)
LOWERCASE_PATTERN = re.compile(r"[a-z]")
UPPERCASE_PATTERN = re.compile(r"[A-Z]")
DIGIT_PATTERN = re.compile(r"[0-9]")
# Anything that is not a letter, digit or whitespace counts as a symbol
SYMBOL_PATTERN = re.compile(r"[^A-Za-z0-9\s]")
INTEGER_PATTERN = re.compile(r"^[+-]?\d+$", re.ASCII)
ISO_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

PASSWORD_MIN_LENGTH = 8
AGE_MIN = 18
AGE_MAX = 100

MESSAGES: dict[str, str] = {
    "first_name.required": "First name is required",
    "last_name.required": "Last name is required",
    "email.required": "Email is required",
    "email.format": "Invalid email format",
    "phone_number.required": "Phone number is required",
    "phone_number.format": "Phone number must be 10 digits",
    "password.required": "Password is required",
    "password.min_length": f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
    "password.lowercase": "Password must contain at least one lowercase letter",
    "password.uppercase": "Password must contain at least one uppercase letter",
    "password.digit": "Password must contain at least one number",
    "password.symbol": "Password must contain at least one symbol",
    "confirm_password.required": "Confirm password is required",
    "confirm_password.mismatch": "Passwords must match",
    "age.required": "Age is required",
    "age.type": "Age must be a number",
    "age.min": f"You must be at least {AGE_MIN} years old",
    "age.max": f"You cannot be older than {AGE_MAX} years",
    "gender.required": "Gender is required",
    "gender.choice": f"Gender must be one of {', '.join(GENDER_CHOICES)}",
    "interests.required": "Select at least one interest",
    "interests.choice": "Unknown interest selected",
    "birth_date.required": "Date of birth is required",
    "birth_date.format": "Date of birth must be a valid date",
}

Check = Callable[[Any, RegistrationForm], bool]


@dataclass(frozen=True)
class FieldRule:
    """A single predicate with the error it produces when it fails."""

    check: Check
    code: ErrorCode
    message: str


# Plain predicates, usable on their own


def is_blank(value: Any) -> bool:
    """Return True if a value counts as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Collection):
        return len(value) == 0
    return False


def parse_integer(value: Any) -> int | None:
    """Parse an integer from raw input, returning None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    return None


def parse_iso_date(value: Any) -> date | None:
    """Parse a YYYY-MM-DD date, returning None when it is not one."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone_number(phone_number: str) -> bool:
    return PHONE_PATTERN.fullmatch(phone_number) is not None


def password_problem(password: str) -> str | None:
    """Return the message key of the first complexity rule the password breaks."""
    if len(password) < PASSWORD_MIN_LENGTH:
        return "password.min_length"
    if not LOWERCASE_PATTERN.search(password):
        return "password.lowercase"
    if not UPPERCASE_PATTERN.search(password):
        return "password.uppercase"
    if not DIGIT_PATTERN.search(password):
        return "password.digit"
    if not SYMBOL_PATTERN.search(password):
        return "password.symbol"
    return None


def is_valid_password(password: str) -> bool:
    return password_problem(password) is None


def is_valid_age(age: Any) -> bool:
    value = parse_integer(age)
    return value is not None and AGE_MIN <= value <= AGE_MAX


# Rule combinators


def required(message: str) -> FieldRule:
    return FieldRule(lambda value, _form: not is_blank(value), ErrorCode.REQUIRED_FIELD_MISSING, message)


def matches(pattern: re.Pattern[str], message: str) -> FieldRule:
    return FieldRule(lambda value, _form: pattern.fullmatch(str(value)) is not None, ErrorCode.INVALID_FORMAT, message)


def contains(pattern: re.Pattern[str], message: str) -> FieldRule:
    return FieldRule(lambda value, _form: pattern.search(str(value)) is not None, ErrorCode.INVALID_FORMAT, message)


def min_length(length: int, message: str) -> FieldRule:
    return FieldRule(lambda value, _form: len(value) >= length, ErrorCode.VALUE_OUT_OF_RANGE, message)


def is_integer(message: str) -> FieldRule:
    return FieldRule(lambda value, _form: parse_integer(value) is not None, ErrorCode.INVALID_TYPE, message)


def min_value(minimum: int, message: str) -> FieldRule:
    """Lower bound; only meaningful after is_integer has passed."""

    def check(value: Any, _form: RegistrationForm) -> bool:
        number = parse_integer(value)
        return number is not None and number >= minimum

    return FieldRule(check, ErrorCode.VALUE_OUT_OF_RANGE, message)


def max_value(maximum: int, message: str) -> FieldRule:
    """Upper bound; only meaningful after is_integer has passed."""

    def check(value: Any, _form: RegistrationForm) -> bool:
        number = parse_integer(value)
        return number is not None and number <= maximum

    return FieldRule(check, ErrorCode.VALUE_OUT_OF_RANGE, message)


def one_of(choices: Collection[str], message: str) -> FieldRule:
    return FieldRule(lambda value, _form: value in choices, ErrorCode.INVALID_CHOICE, message)


def non_empty_collection(message: str) -> FieldRule:
    return FieldRule(lambda value, _form: len(value) > 0, ErrorCode.REQUIRED_FIELD_MISSING, message)


def subset_of(choices: Collection[str], message: str) -> FieldRule:
    return FieldRule(lambda value, _form: all(item in choices for item in value), ErrorCode.INVALID_CHOICE, message)


def is_iso_date(message: str) -> FieldRule:
    return FieldRule(lambda value, _form: parse_iso_date(value) is not None, ErrorCode.INVALID_FORMAT, message)


def same_as(other_field: str, message: str) -> FieldRule:
    """Cross-field rule: the value must equal another field of the same snapshot."""
    return FieldRule(lambda value, form: value == getattr(form, other_field), ErrorCode.FIELD_MISMATCH, message)


FORM_RULES: dict[str, tuple[FieldRule, ...]] = {
    "first_name": (required(MESSAGES["first_name.required"]),),
    "last_name": (required(MESSAGES["last_name.required"]),),
    "email": (
        required(MESSAGES["email.required"]),
        matches(EMAIL_PATTERN, MESSAGES["email.format"]),
    ),
    "phone_number": (
        required(MESSAGES["phone_number.required"]),
        matches(PHONE_PATTERN, MESSAGES["phone_number.format"]),
    ),
    "password": (
        required(MESSAGES["password.required"]),
        min_length(PASSWORD_MIN_LENGTH, MESSAGES["password.min_length"]),
        contains(LOWERCASE_PATTERN, MESSAGES["password.lowercase"]),
        contains(UPPERCASE_PATTERN, MESSAGES["password.uppercase"]),
        contains(DIGIT_PATTERN, MESSAGES["password.digit"]),
        contains(SYMBOL_PATTERN, MESSAGES["password.symbol"]),
    ),
    "confirm_password": (
        required(MESSAGES["confirm_password.required"]),
        same_as("password", MESSAGES["confirm_password.mismatch"]),
    ),
    "age": (
        required(MESSAGES["age.required"]),
        is_integer(MESSAGES["age.type"]),
        min_value(AGE_MIN, MESSAGES["age.min"]),
        max_value(AGE_MAX, MESSAGES["age.max"]),
    ),
    "gender": (
        required(MESSAGES["gender.required"]),
        one_of(GENDER_CHOICES, MESSAGES["gender.choice"]),
    ),
    "interests": (
        non_empty_collection(MESSAGES["interests.required"]),
        subset_of(INTEREST_CHOICES, MESSAGES["interests.choice"]),
    ),
    "birth_date": (
        required(MESSAGES["birth_date.required"]),
        is_iso_date(MESSAGES["birth_date.format"]),
    ),
}


def first_failure(value: Any, form: RegistrationForm, rules: Sequence[FieldRule]) -> FieldRule | None:
    """Return the first rule the value breaks, or None if it passes them all."""
    for rule in rules:
        if not rule.check(value, form):
            return rule
    return None


def evaluate_rules(
    form: RegistrationForm, rules: Mapping[str, Sequence[FieldRule]] = FORM_RULES
) -> list[FieldValidationError]:
    """
    Check every field of the form against its rules.

    All fields are evaluated; within a field evaluation stops at the
    first failing rule.

    Args:
        form: Snapshot to validate
        rules: Field -> ordered rules mapping

    Returns:
        One FieldValidationError per failing field, in display order
    """
    errors = []

    for name in (name for name in FIELD_NAMES if name in rules):
        value = getattr(form, name)
        rule = first_failure(value, form, rules[name])
        if rule is not None:
            errors.append(FieldValidationError(field=name, user_message=rule.message, code=rule.code))

    return errors
