"""
Schema-based validation engine.

The registration form is declared as a pydantic model whose fields are
Annotated chains of after-validators, one per rule in the canonical rule
table. pydantic checks every field in a single call and reports all
failures together; within a field the chain stops at the first rule that
fails. Cross-field rules resolve their reference against the full form
snapshot passed in the validation context.
"""

import logging
from datetime import date
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationInfo
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from .errors import ErrorCode, FieldValidationError, FormValidationFailed
from .form_model import FIELD_NAMES, RegistrationForm
from .rules import FORM_RULES, FieldRule, parse_integer, parse_iso_date
from .validation import ValidationEngine

logger = logging.getLogger(__name__)


def _context_form(info: ValidationInfo) -> RegistrationForm:
    """Return the snapshot a cross-field rule should resolve references against."""
    if info.context and isinstance(info.context.get("form"), RegistrationForm):
        return info.context["form"]
    # Without a context only the fields validated so far are available
    return RegistrationForm.from_dict(info.data)


def _as_validator(rule: FieldRule) -> AfterValidator:
    def check(value: Any, info: ValidationInfo) -> Any:
        if not rule.check(value, _context_form(info)):
            raise PydanticCustomError(rule.code.value, rule.message)
        return value

    return AfterValidator(check)


def rule_chain(field: str) -> tuple[AfterValidator, ...]:
    """Build the ordered validator chain for one form field."""
    return tuple(_as_validator(rule) for rule in FORM_RULES[field])


class RegistrationSchema(BaseModel):
    """Declarative schema of a valid registration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    first_name: Annotated[str, *rule_chain("first_name")]
    last_name: Annotated[str, *rule_chain("last_name")]
    email: Annotated[str, *rule_chain("email")]
    phone_number: Annotated[str, *rule_chain("phone_number")]
    password: Annotated[str, *rule_chain("password")]
    confirm_password: Annotated[str, *rule_chain("confirm_password")]
    age: Annotated[str, *rule_chain("age")]
    gender: Annotated[str, *rule_chain("gender")]
    interests: Annotated[tuple[str, ...], *rule_chain("interests")]
    birth_date: Annotated[str, *rule_chain("birth_date")]

    @property
    def age_years(self) -> int:
        value = parse_integer(self.age)
        if value is None:
            raise ValueError(f"age {self.age!r} is not a whole number")
        return value

    @property
    def birth_day(self) -> date:
        value = parse_iso_date(self.birth_date)
        if value is None:
            raise ValueError(f"birth_date {self.birth_date!r} is not a YYYY-MM-DD date")
        return value


def flatten_errors(exc: PydanticValidationError) -> list[FieldValidationError]:
    """
    Flatten pydantic's aggregate error into one FieldValidationError per field.

    Args:
        exc: The aggregate failure raised by model validation

    Returns:
        Field errors in form display order
    """
    by_field: dict[str, FieldValidationError] = {}

    for detail in exc.errors():
        loc = detail.get("loc") or ("form",)
        field = str(loc[0])
        if field in by_field:
            continue

        try:
            code = ErrorCode(detail["type"])
        except ValueError:
            # Raised by pydantic itself rather than by a form rule
            code = ErrorCode.INVALID_TYPE

        by_field[field] = FieldValidationError(
            field=field,
            user_message=detail["msg"],
            code=code,
            technical_message=f"{detail['type']} at {field}: {detail['msg']}",
        )

    order = {name: index for index, name in enumerate(FIELD_NAMES)}
    return sorted(by_field.values(), key=lambda error: order.get(error.field, len(order)))


class SchemaValidationEngine(ValidationEngine):
    """Validation engine that delegates to the pydantic registration schema."""

    name = "schema"
    description = "Declarative schema validated by pydantic"

    def parse(self, form: RegistrationForm) -> RegistrationSchema:
        """
        Validate the form and return the schema instance.

        Raises:
            FormValidationFailed: If any field is invalid
        """
        try:
            return RegistrationSchema.model_validate(form.to_dict(), context={"form": form})
        except PydanticValidationError as exc:
            errors = flatten_errors(exc)
            logger.debug(f"Schema validation failed with {exc.error_count()} error(s)")
            raise FormValidationFailed(errors) from exc

    def collect(self, form: RegistrationForm) -> list[FieldValidationError]:
        try:
            self.parse(form)
        except FormValidationFailed as failure:
            return failure.errors
        return []
