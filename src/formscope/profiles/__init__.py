"""Field profiles: definitions, YAML loading and schema checks."""

from formscope.profiles.loader import (
    FieldDefinition,
    Profile,
    ProfileLoader,
    ValidationRules,
    load_profile_file,
)
from formscope.profiles.schema import (
    ProfileIssue,
    validate_profile_file,
    validate_profiles_dir,
)

__all__ = [
    "FieldDefinition",
    "Profile",
    "ProfileIssue",
    "ProfileLoader",
    "ValidationRules",
    "load_profile_file",
    "validate_profile_file",
    "validate_profiles_dir",
]
