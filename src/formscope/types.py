"""Collaborator protocols for the validation manager.

The manager never inspects verifiers or results beyond these protocols:
- Validator: anything with ``verify(data) -> Result``
- Result: anything exposing a boolean ``success``
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

Record = Mapping[str, Any]


@runtime_checkable
class Result(Protocol):
    """Protocol for the outcome of a single ``verify`` call.

    Results that should be turned into messages also need ``missings()`` and
    ``invalids()``; results that should survive ``freeze`` need ``to_dict()``.
    """

    @property
    def success(self) -> bool:
        """True if the verified record passed every rule."""
        ...


@runtime_checkable
class Validator(Protocol):
    """Protocol that all verifiers registered on a manager must implement.

    Verifiers are stateless with respect to the manager: the same instance
    may be registered under several scopes.
    """

    def verify(self, data: Record) -> Result:
        """Verify a data record.

        Args:
            data: The record to check

        Returns:
            A Result. A failed verification is a normal return value.
        """
        ...
