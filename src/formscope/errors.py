"""Exception types for formscope.

A failed validation is not an error: a result with ``success == False`` is a
normal outcome. These exceptions cover programming and setup mistakes only.
"""


class FormscopeError(Exception):
    """Base error for formscope exceptions."""
    pass


class ConfigurationError(FormscopeError):
    """A manager or application setting is wrong.

    Raised when ``verify`` is called for a scope that has no verifier, or
    when an environment setting has an unsupported value.
    """
    pass


class ProfileError(FormscopeError):
    """A profile definition could not be read or is malformed."""
    pass


class SerializationError(FormscopeError):
    """The manager state could not be frozen or thawed."""
    pass
