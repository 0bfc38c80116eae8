"""Field-level constraint checks.

Each field of a profile is checked in this order:
- Filters (trim, lower, upper, collapse) on string input
- Required check
- Type format validation and coercion (email, phone, number, ...)
- Numeric min/max bounds
- String length bounds
- Custom regex pattern
- Picklist membership
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from formscope.profiles.loader import FieldDefinition, ValidationRules
from formscope.verification.results import FieldError

logger = logging.getLogger(__name__)

REQUIRED = "REQUIRED"


# =============================================================================
# Type-Specific Format Patterns
# =============================================================================

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

# Phone: Flexible pattern supporting international formats
PHONE_PATTERN = re.compile(
    r"^[\+]?[(]?[0-9]{1,3}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,4}[-\s\.]?[0-9]{1,9}$"
)

URL_PATTERN = re.compile(
    r"^https?://[^\s/$.?#].[^\s]*$",
    re.IGNORECASE
)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE
)

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

NUMERIC_TYPES = ("number", "integer")


# =============================================================================
# Field Constraint Validator
# =============================================================================


@dataclass
class FieldConstraintValidator:
    """Checks a single input value against one field definition."""

    field: FieldDefinition

    def check(self, value: Any) -> tuple[Any, list[FieldError]]:
        """Filter, coerce and check a value.

        Returns:
            (typed value, errors). The typed value is only meaningful when
            errors is empty.
        """
        value = self._apply_filters(value)

        if self._is_empty(value) and self.field.default is not None:
            value = self.field.default

        rules = self.field.validation

        if self._is_empty(value):
            if rules.required:
                return None, [self._error(REQUIRED, f"{self.field.display_name} is required")]
            return None, []

        value, type_error = self._coerce(value)
        if type_error:
            # Don't continue if type is invalid
            return value, [self._error(f"INVALID_{self.field.type.upper()}", type_error)]

        errors: list[FieldError] = []

        if self.field.type in NUMERIC_TYPES:
            errors.extend(self._validate_numeric_bounds(value, rules))

        errors.extend(self._validate_string_length(value, rules))

        if rules.pattern:
            pattern_error = self._validate_pattern(value, rules.pattern)
            if pattern_error:
                errors.append(pattern_error)

        if self.field.type in ("picklist", "multi_picklist"):
            errors.extend(self._validate_picklist(value))

        return value, errors

    def _error(self, code: str, message: str) -> FieldError:
        return FieldError(field=self.field.name, code=code, message=message)

    def _is_empty(self, value: Any) -> bool:
        """Check if a value is considered empty."""
        if value is None:
            return True
        if isinstance(value, str) and value.strip() == "":
            return True
        if isinstance(value, (list, dict)) and len(value) == 0:
            return True
        return False

    def _apply_filters(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        for name in self.field.filters:
            if name == "trim":
                value = value.strip()
            elif name == "lower":
                value = value.lower()
            elif name == "upper":
                value = value.upper()
            elif name == "collapse":
                value = " ".join(value.split())
        return value

    def _coerce(self, value: Any) -> tuple[Any, str | None]:
        """Validate value against type-specific format.

        Returns (typed value, error message or None).
        """
        field_type = self.field.type
        label = self.field.display_name

        if field_type == "email":
            if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
                return value, f"{label} must be a valid email address"

        elif field_type == "phone":
            if not isinstance(value, str) or not PHONE_PATTERN.match(value):
                return value, f"{label} must be a valid phone number"

        elif field_type == "url":
            if not isinstance(value, str) or not URL_PATTERN.match(value):
                return value, f"{label} must be a valid URL"

        elif field_type == "uuid":
            if not isinstance(value, str) or not UUID_PATTERN.match(value):
                return value, f"{label} must be a valid UUID"

        elif field_type == "integer":
            if isinstance(value, bool):
                return value, f"{label} must be a whole number"
            if isinstance(value, int):
                return value, None
            if isinstance(value, float) and value.is_integer():
                return int(value), None
            if isinstance(value, str) and INTEGER_PATTERN.match(value.strip()):
                return int(value), None
            return value, f"{label} must be a whole number"

        elif field_type == "number":
            if isinstance(value, bool):
                return value, f"{label} must be a number"
            if isinstance(value, int):
                return value, None
            if isinstance(value, float) and math.isfinite(value):
                return value, None
            if isinstance(value, str):
                text = value.strip()
                if INTEGER_PATTERN.match(text):
                    return int(text), None
                try:
                    number = float(text)
                except ValueError:
                    number = math.nan
                if math.isfinite(number):
                    return number, None
            return value, f"{label} must be a number"

        elif field_type == "checkbox":
            if isinstance(value, bool):
                return value, None
            if value in (0, 1):
                return bool(value), None
            if isinstance(value, str) and value.lower() in ("true", "false"):
                return value.lower() == "true", None
            return value, f"{label} must be a boolean"

        elif field_type == "date":
            # YAML loads unquoted dates as date objects
            if isinstance(value, datetime):
                return value, f"{label} must be a valid date (YYYY-MM-DD)"
            if isinstance(value, date):
                return value.isoformat(), None
            if not isinstance(value, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", value):
                return value, f"{label} must be a valid date (YYYY-MM-DD)"
            try:
                date.fromisoformat(value)
            except ValueError:
                return value, f"{label} must be a valid date (YYYY-MM-DD)"

        elif field_type == "datetime":
            if isinstance(value, datetime):
                return value.isoformat(), None
            if not isinstance(value, str) or not re.match(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}", value):
                return value, f"{label} must be a valid datetime"
            try:
                datetime.fromisoformat(value)
            except ValueError:
                return value, f"{label} must be a valid datetime"

        return value, None

    def _validate_numeric_bounds(
        self, value: Any, rules: ValidationRules
    ) -> list[FieldError]:
        """Validate numeric min/max bounds."""
        errors = []

        if rules.min is not None and value < rules.min:
            errors.append(self._error(
                "MIN_VALUE", f"{self.field.display_name} must be at least {rules.min}"
            ))

        if rules.max is not None and value > rules.max:
            errors.append(self._error(
                "MAX_VALUE", f"{self.field.display_name} must be at most {rules.max}"
            ))

        return errors

    def _validate_string_length(
        self, value: Any, rules: ValidationRules
    ) -> list[FieldError]:
        """Validate string length bounds."""
        errors = []

        if not isinstance(value, str):
            return errors

        length = len(value)

        if rules.min_length is not None and length < rules.min_length:
            errors.append(self._error(
                "MIN_LENGTH",
                f"{self.field.display_name} must be at least {rules.min_length} characters",
            ))

        if rules.max_length is not None and length > rules.max_length:
            errors.append(self._error(
                "MAX_LENGTH",
                f"{self.field.display_name} must be at most {rules.max_length} characters",
            ))

        return errors

    def _validate_pattern(self, value: Any, pattern: str) -> FieldError | None:
        """Validate value against custom regex pattern."""
        if not isinstance(value, str):
            return None

        try:
            if not re.match(pattern, value):
                return self._error(
                    "PATTERN_MISMATCH", f"{self.field.display_name} format is invalid"
                )
        except re.error:
            logger.warning(
                "Ignoring invalid pattern %r on field '%s'", pattern, self.field.name
            )
            return None

        return None

    def _validate_picklist(self, value: Any) -> list[FieldError]:
        """Validate picklist value is one of the allowed options."""
        if not self.field.options:
            return []  # No options defined, skip validation

        valid_values = list(self.field.options)
        if self.field.type == "multi_picklist" and isinstance(value, list):
            candidates = value
        else:
            candidates = [value]

        return [
            self._error(
                "INVALID_OPTION",
                f"'{v}' is not a valid option for {self.field.display_name}",
            )
            for v in candidates
            if v not in valid_values
        ]
