"""Result types produced by Verifier.verify."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldStatus(Enum):
    """Outcome for one field of a verified record."""

    VALID = "valid"
    INVALID = "invalid"
    MISSING = "missing"


@dataclass(frozen=True)
class FieldError:
    """A single constraint failure for a field.

    Attributes:
        field: Field name the error relates to
        code: Machine-readable error code (e.g., "REQUIRED", "MAX_LENGTH")
        message: Human-readable message
    """

    field: str
    code: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "code": self.code, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldError":
        return cls(field=data["field"], code=data["code"], message=data.get("message", ""))


@dataclass
class FieldResult:
    """Per-field outcome: status, typed value, and original input value."""

    name: str
    status: FieldStatus
    value: Any = None
    original_value: Any = None
    errors: list[FieldError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "value": self.value,
            "original_value": self.original_value,
            "errors": [e.to_dict() for e in self.errors],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldResult":
        return cls(
            name=data["name"],
            status=FieldStatus(data["status"]),
            value=data.get("value"),
            original_value=data.get("original_value"),
            errors=[FieldError.from_dict(e) for e in data.get("errors", [])],
        )


@dataclass
class VerificationResult:
    """Result of verifying one record against a profile.

    Fields keep the profile's declared order. Missing means a required field
    had no value; invalid means any other constraint failed.
    """

    profile: str
    fields: dict[str, FieldResult] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return all(r.status == FieldStatus.VALID for r in self.fields.values())

    def _names(self, status: FieldStatus) -> list[str]:
        return [name for name, r in self.fields.items() if r.status == status]

    def valids(self) -> list[str]:
        return self._names(FieldStatus.VALID)

    def invalids(self) -> list[str]:
        return self._names(FieldStatus.INVALID)

    def missings(self) -> list[str]:
        return self._names(FieldStatus.MISSING)

    def is_valid(self, name: str) -> bool:
        r = self.fields.get(name)
        return r is not None and r.status == FieldStatus.VALID

    def is_invalid(self, name: str) -> bool:
        r = self.fields.get(name)
        return r is not None and r.status == FieldStatus.INVALID

    def is_missing(self, name: str) -> bool:
        r = self.fields.get(name)
        return r is not None and r.status == FieldStatus.MISSING

    def get_value(self, name: str) -> Any:
        """Typed, filtered value of a valid field; None otherwise."""
        r = self.fields.get(name)
        if r is None or r.status != FieldStatus.VALID:
            return None
        return r.value

    def get_original_value(self, name: str) -> Any:
        r = self.fields.get(name)
        return r.original_value if r is not None else None

    def get_errors(self, name: str) -> list[FieldError]:
        r = self.fields.get(name)
        return list(r.errors) if r is not None else []

    def values(self) -> dict[str, Any]:
        """Typed values of all valid fields."""
        return {
            name: r.value
            for name, r in self.fields.items()
            if r.status == FieldStatus.VALID
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile,
            "success": self.success,
            "fields": [r.to_dict() for r in self.fields.values()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VerificationResult":
        fields = [FieldResult.from_dict(f) for f in data.get("fields", [])]
        return cls(profile=data.get("profile", ""), fields={f.name: f for f in fields})
