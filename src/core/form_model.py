"""
Registration form data model.

The form is held as an immutable snapshot; every edit produces a new
snapshot so validation always sees a consistent view of the fields.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any

# Field identifiers in display order
FIELD_NAMES: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "phone_number",
    "password",
    "confirm_password",
    "age",
    "gender",
    "interests",
    "birth_date",
)

FIELD_LABELS: dict[str, str] = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "email": "Email",
    "phone_number": "Phone Number",
    "password": "Password",
    "confirm_password": "Confirm Password",
    "age": "Age",
    "gender": "Gender",
    "interests": "Interests",
    "birth_date": "Date Of Birth",
}

GENDER_CHOICES: tuple[str, ...] = ("Male", "Female", "Other")

INTEREST_CHOICES: tuple[str, ...] = ("coding", "sports", "reading")

SECRET_FIELDS: frozenset[str] = frozenset({"password", "confirm_password"})


@dataclass(frozen=True)
class RegistrationForm:
    """
    Snapshot of everything the user has entered.

    Scalar fields hold the raw text exactly as typed; interpretation
    (numbers, dates) is left to the validation engines.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    password: str = ""
    confirm_password: str = ""
    age: str = ""
    gender: str = ""
    interests: tuple[str, ...] = ()
    birth_date: str = ""

    @classmethod
    def empty(cls) -> RegistrationForm:
        """Return the initial, empty form."""
        return cls()

    def with_field(self, name: str, value: Any) -> RegistrationForm:
        """
        Return a copy with one scalar field replaced.

        Args:
            name: Field identifier
            value: New value (stored as text)

        Raises:
            KeyError: If the field does not exist
            ValueError: If the field is not a scalar field
        """
        if name not in FIELD_NAMES:
            raise KeyError(name)
        if name == "interests":
            raise ValueError("Interests are changed with with_interest()")

        text = "" if value is None else str(value)
        return replace(self, **{name: text})

    def with_interest(self, name: str, checked: bool) -> RegistrationForm:
        """
        Return a copy with an interest added or removed.

        Membership is set-like: adding twice keeps one entry and the
        original selection order is preserved.
        """
        if name not in INTEREST_CHOICES:
            raise ValueError(f"Unknown interest: {name!r}")

        if checked:
            if name in self.interests:
                return self
            return replace(self, interests=(*self.interests, name))

        return replace(self, interests=tuple(i for i in self.interests if i != name))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary (interests as a list)."""
        data = asdict(self)
        data["interests"] = list(self.interests)
        return data

    def to_log_dict(self) -> dict[str, Any]:
        """Convert to a dictionary safe for logging, with secrets masked."""
        data = self.to_dict()
        for name in SECRET_FIELDS:
            if data[name]:
                data[name] = "********"
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistrationForm:
        """Build a snapshot from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key == "interests":
                values[key] = tuple(dict.fromkeys(value or ()))
            else:
                values[key] = "" if value is None else str(value)
        return cls(**values)
