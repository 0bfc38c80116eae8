"""Turn verification results into stack messages.

For every missing field a ``missing_<field>`` error is added, and for every
invalid field an ``invalid_<field>`` error, in the result's field order.
"""

import logging
from typing import Any

from formscope.messages.stack import Level, Message, MessageStack
from formscope.verification.results import VerificationResult

logger = logging.getLogger(__name__)


class ResultParser:
    """Parses a result into messages on a MessageStack.

    Works with VerificationResult and with any result object exposing
    ``missings()`` and ``invalids()``.
    """

    @classmethod
    def parse(cls, stack: MessageStack, scope: str, result: Any) -> None:
        """Append the messages for ``result`` to ``stack``.

        Args:
            stack: The stack to append to
            scope: Scope name stamped on every message
            result: The result to parse
        """
        if isinstance(result, VerificationResult):
            cls._parse_verification_result(stack, scope, result)
            return

        if not (hasattr(result, "missings") and hasattr(result, "invalids")):
            logger.debug(
                "Result for scope '%s' (%s) has no field outcomes; no messages added",
                scope,
                type(result).__name__,
            )
            return

        for name in result.missings():
            stack.add(Message(
                msgid=f"missing_{name}",
                scope=scope,
                subject=name,
                level=Level.ERROR,
            ))
        for name in result.invalids():
            stack.add(Message(
                msgid=f"invalid_{name}",
                scope=scope,
                subject=name,
                level=Level.ERROR,
            ))

    @classmethod
    def _parse_verification_result(
        cls, stack: MessageStack, scope: str, result: VerificationResult
    ) -> None:
        for name in result.missings():
            errors = result.get_errors(name)
            stack.add(Message(
                msgid=f"missing_{name}",
                scope=scope,
                subject=name,
                level=Level.ERROR,
                params={"code": errors[0].code} if errors else {},
                text=errors[0].message if errors else "",
            ))

        for name in result.invalids():
            errors = result.get_errors(name)
            params: dict[str, Any] = {"value": result.get_original_value(name)}
            if errors:
                params["code"] = errors[0].code
                params["codes"] = [e.code for e in errors]
            stack.add(Message(
                msgid=f"invalid_{name}",
                scope=scope,
                subject=name,
                level=Level.ERROR,
                params=params,
                text="; ".join(e.message for e in errors),
            ))
