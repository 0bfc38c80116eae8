"""formscope: manage several validators under named scopes.

Usage:
    from formscope import ValidationManager, Verifier

    manager = ValidationManager()
    manager.set_verifier("name", Verifier.from_dict("name", {
        "name_first": {"required": True},
        "name_last": {"required": True},
    }))
    manager.verify("name", {"name_first": "Cory"})

    manager.success()                   # False
    manager.messages_for_scope("name")  # one "missing_name_last" message
"""

from formscope.config import ManagerConfig
from formscope.errors import (
    ConfigurationError,
    FormscopeError,
    ProfileError,
    SerializationError,
)
from formscope.manager import ValidationManager
from formscope.messages import Level, Message, MessageStack, ResultParser
from formscope.profiles import FieldDefinition, Profile, ProfileLoader, ValidationRules
from formscope.types import Result, Validator
from formscope.verification import (
    FieldError,
    FieldResult,
    FieldStatus,
    VerificationResult,
    Verifier,
)

__version__ = "0.4.0"

__all__ = [
    # Manager
    "ValidationManager",
    # Protocols
    "Result",
    "Validator",
    # Verification
    "FieldError",
    "FieldResult",
    "FieldStatus",
    "VerificationResult",
    "Verifier",
    # Profiles
    "FieldDefinition",
    "Profile",
    "ProfileLoader",
    "ValidationRules",
    # Messages
    "Level",
    "Message",
    "MessageStack",
    "ResultParser",
    # Config and errors
    "ManagerConfig",
    "ConfigurationError",
    "FormscopeError",
    "ProfileError",
    "SerializationError",
]
