"""Profile-driven field verification.

Usage:
    from formscope.verification import Verifier

    verifier = Verifier.from_dict("address", {"address1": {"required": True}})
    result = verifier.verify({"address1": "123 Test Street"})
"""

from formscope.verification.field_constraints import (
    EMAIL_PATTERN,
    PHONE_PATTERN,
    URL_PATTERN,
    UUID_PATTERN,
    FieldConstraintValidator,
)
from formscope.verification.results import (
    FieldError,
    FieldResult,
    FieldStatus,
    VerificationResult,
)
from formscope.verification.verifier import Verifier

__all__ = [
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
    "URL_PATTERN",
    "UUID_PATTERN",
    "FieldConstraintValidator",
    "FieldError",
    "FieldResult",
    "FieldStatus",
    "VerificationResult",
    "Verifier",
]
