"""Profile-driven record verifier.

A Verifier checks a data record against every field of one Profile and
returns a VerificationResult. It satisfies the ``Validator`` protocol, so it
can be registered on a ValidationManager under one or more scopes.
"""

import logging
from collections.abc import Mapping
from typing import Any

from formscope.profiles.loader import FieldDefinition, Profile
from formscope.verification.field_constraints import REQUIRED, FieldConstraintValidator
from formscope.verification.results import FieldResult, FieldStatus, VerificationResult

logger = logging.getLogger(__name__)


class Verifier:
    """Verifies records against a profile of field rules.

    Example:
        verifier = Verifier.from_dict("name", {
            "name_first": {"required": True},
            "name_last": {"required": True},
        })
        result = verifier.verify({"name_first": "Cory"})
        result.success      # False
        result.missings()   # ["name_last"]
    """

    def __init__(self, profile: Profile):
        self.profile = profile
        self._checks = [FieldConstraintValidator(field=f) for f in profile.fields]

    @classmethod
    def from_dict(
        cls,
        name: str,
        fields: Mapping[str, dict[str, Any] | None] | list[dict[str, Any]],
    ) -> "Verifier":
        """Build a verifier from an inline field mapping or list."""
        return cls(Profile.from_dict({"profile": name, "fields": fields}))

    @classmethod
    def from_fields(cls, name: str, fields: list[FieldDefinition]) -> "Verifier":
        return cls(Profile(name=name, fields=list(fields)))

    def verify(self, data: Mapping[str, Any]) -> VerificationResult:
        """Verify a record.

        Keys in ``data`` that the profile does not define are ignored.

        Args:
            data: The record to verify

        Returns:
            VerificationResult with one FieldResult per profile field
        """
        result = VerificationResult(profile=self.profile.name)

        for check in self._checks:
            name = check.field.name
            original = data.get(name)
            value, errors = check.check(original)

            if not errors:
                status = FieldStatus.VALID
            elif errors[0].code == REQUIRED:
                status = FieldStatus.MISSING
            else:
                status = FieldStatus.INVALID

            result.fields[name] = FieldResult(
                name=name,
                status=status,
                value=value if status == FieldStatus.VALID else None,
                original_value=original,
                errors=errors,
            )

        logger.debug(
            "Verified record against profile '%s': %d missing, %d invalid",
            self.profile.name,
            len(result.missings()),
            len(result.invalids()),
        )
        return result

    def __repr__(self) -> str:
        return f"Verifier(profile={self.profile.name!r}, fields={self.profile.field_names!r})"
