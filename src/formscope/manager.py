"""Validation manager: several verifiers, one message stack.

The manager keeps two mappings keyed by scope name:
- verifiers: scope -> Validator (anything with ``verify(data)``)
- results: scope -> Result of the last ``verify`` for that scope

and derives a single MessageStack from all stored results on demand.

Usage:
    manager = ValidationManager()
    address = Verifier.from_dict("address", {"address1": {"required": True}})

    # Addresses are the same, reuse the verifier
    manager.set_verifier("billing_address", address)
    manager.set_verifier("shipping_address", address)

    manager.verify("billing_address", bill_data)
    manager.verify("shipping_address", ship_data)

    # Later...
    manager.success()
    manager.get_results("billing_address")
    manager.messages_for_scope("shipping_address")
"""

import json
import logging
from collections.abc import Callable
from typing import Any

import yaml

from formscope.errors import ConfigurationError, SerializationError
from formscope.messages.parser import ResultParser
from formscope.messages.stack import MessageStack
from formscope.types import Record, Result, Validator
from formscope.verification.results import VerificationResult

logger = logging.getLogger(__name__)

ResultFactory = Callable[[dict[str, Any]], Result]


class ValidationManager:
    """Manages multiple verifiers under named scopes with one message stack.

    The message stack is built lazily, the first time ``messages`` (or
    ``messages_for_scope``) is read, from the results stored at that moment.
    After that, changes to the results are NOT reflected in the stack until
    ``rebuild_messages()`` is called. Read messages only after every
    ``verify`` call is done, or rebuild explicitly.

    Not thread-safe. Share an instance across threads only behind a lock.
    """

    def __init__(self) -> None:
        self.verifiers: dict[str, Validator] = {}
        self.results: dict[str, Result] = {}
        self._messages: MessageStack | None = None

    # -------------------------------------------------------------------------
    # Verifiers
    # -------------------------------------------------------------------------

    def set_verifier(self, scope: str, verifier: Validator) -> None:
        """Register a verifier for a scope. Replaces any existing one."""
        if scope in self.verifiers:
            logger.debug("Replacing verifier for scope '%s'", scope)
        self.verifiers[scope] = verifier

    register = set_verifier

    def get_verifier(self, scope: str) -> Validator | None:
        return self.verifiers.get(scope)

    def remove_verifier(self, scope: str) -> Validator | None:
        """Drop the verifier for a scope. Any stored result is kept."""
        return self.verifiers.pop(scope, None)

    def scopes(self) -> set[str]:
        """Scopes that currently have a verifier (not necessarily a result)."""
        return set(self.verifiers)

    # -------------------------------------------------------------------------
    # Verification and results
    # -------------------------------------------------------------------------

    def verify(self, scope: str, data: Record) -> Result:
        """Verify data with the verifier registered for ``scope``.

        The result is stored under ``scope``, replacing any previous one. A
        message stack that was already built is left untouched.

        Args:
            scope: Scope whose verifier should run
            data: The record to verify

        Returns:
            The result returned by the verifier (the stored object itself)

        Raises:
            ConfigurationError: If no verifier is registered for ``scope``
        """
        verifier = self.verifiers.get(scope)
        if verifier is None:
            raise ConfigurationError(f"No verifier for scope: {scope}")

        result = verifier.verify(data)
        self.results[scope] = result
        logger.debug("Verified scope '%s': success=%s", scope, result.success)

        if self._messages is not None:
            logger.debug(
                "Message stack already built; scope '%s' not reflected until rebuild",
                scope,
            )
        return result

    def get_results(self, scope: str) -> Result | None:
        return self.results.get(scope)

    def set_results(self, scope: str, result: Result) -> None:
        self.results[scope] = result

    def success(self) -> bool:
        """True if every stored result succeeded. True when nothing is stored."""
        return all(result.success for result in self.results.values())

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    @property
    def messages(self) -> MessageStack:
        """The message stack for all scopes, built on first access."""
        if self._messages is None:
            self._messages = self._build_messages()
        return self._messages

    @property
    def has_messages(self) -> bool:
        """Whether the message stack has been built. Does not build it."""
        return self._messages is not None

    def messages_for_scope(self, scope: str) -> MessageStack:
        return self.messages.for_scope(scope)

    def rebuild_messages(self) -> MessageStack:
        """Discard the built stack and build a new one from current results."""
        self._messages = self._build_messages()
        return self._messages

    def _build_messages(self) -> MessageStack:
        stack = MessageStack()
        for scope, result in self.results.items():
            ResultParser.parse(stack, scope, result)
        logger.debug(
            "Built message stack: %d message(s) across %d scope(s)",
            stack.count,
            len(self.results),
        )
        return stack

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serializable state. Verifiers are never included.

        Raises:
            SerializationError: If a stored result has no ``to_dict()``
        """
        results: dict[str, Any] = {}
        for scope, result in self.results.items():
            to_dict = getattr(result, "to_dict", None)
            if to_dict is None:
                raise SerializationError(
                    f"Result for scope '{scope}' ({type(result).__name__}) "
                    "cannot be serialized: no to_dict()"
                )
            results[scope] = to_dict()

        return {
            "results": results,
            "messages": self._messages.to_dict() if self._messages is not None else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        result_factory: ResultFactory = VerificationResult.from_dict,
    ) -> "ValidationManager":
        """Restore a manager. The verifier mapping starts empty."""
        manager = cls()
        results = data.get("results") or {}
        if not isinstance(results, dict):
            raise SerializationError("Invalid manager state: 'results' must be a mapping")
        try:
            for scope, raw in results.items():
                if not isinstance(raw, dict):
                    raise SerializationError(
                        f"Invalid manager state: result for scope '{scope}' must be a mapping"
                    )
                manager.results[scope] = result_factory(raw)
            if data.get("messages") is not None:
                manager._messages = MessageStack.from_dict(data["messages"])
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise SerializationError(f"Invalid manager state: {exc}") from exc
        return manager

    def freeze(self, format: str = "json") -> str:
        """Serialize results and messages to a JSON or YAML string."""
        if format not in ("json", "yaml"):
            raise SerializationError(f"Unsupported format '{format}'. Expected json or yaml")

        state = self.to_dict()
        try:
            if format == "json":
                # Dates parsed from YAML input are written as ISO strings
                return json.dumps(state, sort_keys=True, default=str, allow_nan=False)
            return yaml.safe_dump(state, sort_keys=True)
        except (TypeError, ValueError, yaml.YAMLError) as exc:
            raise SerializationError(f"Cannot serialize manager state: {exc}") from exc

    @classmethod
    def thaw(
        cls,
        payload: str,
        format: str = "json",
        result_factory: ResultFactory = VerificationResult.from_dict,
    ) -> "ValidationManager":
        """Restore a manager from ``freeze`` output.

        Verifiers are not serialized: set them again before calling ``verify``.
        """
        try:
            if format == "json":
                data = json.loads(payload)
            elif format == "yaml":
                data = yaml.safe_load(payload)
            else:
                raise SerializationError(
                    f"Unsupported format '{format}'. Expected json or yaml"
                )
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise SerializationError(f"Cannot parse frozen manager: {exc}") from exc

        if not isinstance(data, dict):
            raise SerializationError("Frozen manager must be a mapping")
        return cls.from_dict(data, result_factory=result_factory)

    def __repr__(self) -> str:
        return (
            f"ValidationManager(scopes={sorted(self.verifiers)!r}, "
            f"results={sorted(self.results)!r}, messages_built={self.has_messages})"
        )
