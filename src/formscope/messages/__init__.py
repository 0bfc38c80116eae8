"""Diagnostic messages: the stack and the result parser."""

from formscope.messages.parser import ResultParser
from formscope.messages.stack import Level, Message, MessageStack

__all__ = [
    "Level",
    "Message",
    "MessageStack",
    "ResultParser",
]
