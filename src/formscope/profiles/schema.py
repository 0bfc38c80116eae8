"""
profiles/schema.py: JSON Schema validation for profile YAML files.

Usage:
    from formscope.profiles.schema import validate_profiles_dir

    issues = validate_profiles_dir(Path("profiles"))
    for issue in issues:
        print(issue)

Schema checks catch structural mistakes (unknown keys, wrong types) before
the loader turns documents into Profile objects.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

FIELD_TYPES = [
    "text",
    "string",
    "email",
    "phone",
    "url",
    "uuid",
    "number",
    "integer",
    "checkbox",
    "date",
    "datetime",
    "picklist",
    "multi_picklist",
]

_RULES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "required": {"type": "boolean"},
        "min": {"type": "number"},
        "max": {"type": "number"},
        "minLength": {"type": "integer", "minimum": 0},
        "maxLength": {"type": "integer", "minimum": 0},
        "min_length": {"type": "integer", "minimum": 0},
        "max_length": {"type": "integer", "minimum": 0},
        "pattern": {"type": "string"},
    },
}

_FIELD_BODY: dict[str, Any] = {
    "type": {"enum": FIELD_TYPES},
    "displayName": {"type": "string"},
    "display_name": {"type": "string"},
    "required": {"type": "boolean"},
    "default": {},
    "options": {"type": "array"},
    "filters": {
        "oneOf": [
            {"enum": ["trim", "lower", "upper", "collapse"]},
            {
                "type": "array",
                "items": {"enum": ["trim", "lower", "upper", "collapse"]},
            },
        ]
    },
    "validation": _RULES_SCHEMA,
}

PROFILE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "formscope profile",
    "type": "object",
    "required": ["profile", "fields"],
    "additionalProperties": False,
    "properties": {
        "profile": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "fields": {
            "oneOf": [
                {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name"],
                        "additionalProperties": False,
                        "properties": {"name": {"type": "string"}, **_FIELD_BODY},
                    },
                },
                {
                    "type": "object",
                    "additionalProperties": {
                        "type": ["object", "null"],
                        "additionalProperties": False,
                        "properties": _FIELD_BODY,
                    },
                },
            ]
        },
    },
}


# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------


@dataclass
class ProfileIssue:
    """A single schema finding for a profile YAML file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "fields[0]/type"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_profile_file(yaml_path: Path) -> list[ProfileIssue]:
    """
    Validate a single profile YAML file against the profile schema.

    Files without a top-level ``profile`` key produce a warning, since the
    loader skips them.

    Returns:
        A list of :class:`ProfileIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ProfileIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [
            ProfileIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    if isinstance(doc, dict) and "profile" not in doc:
        return [
            ProfileIssue(
                file=yaml_path,
                message="No 'profile' key; file is ignored by the loader",
                severity="warning",
            )
        ]

    validator = Draft202012Validator(PROFILE_SCHEMA)
    return [
        ProfileIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]


def validate_profiles_dir(profiles_dir: Path, *, strict: bool = False) -> list[ProfileIssue]:
    """
    Validate every YAML file under *profiles_dir*.

    Args:
        profiles_dir: Directory containing profile files.
        strict:       If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`ProfileIssue` objects across all files.
    """
    if not profiles_dir.is_dir():
        return [
            ProfileIssue(
                file=profiles_dir,
                message=f"Profiles directory does not exist: {profiles_dir}",
            )
        ]

    all_issues: list[ProfileIssue] = []
    files = sorted(list(profiles_dir.glob("*.yaml")) + list(profiles_dir.glob("*.yml")))
    for yaml_file in files:
        file_issues = validate_profile_file(yaml_file)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    logger.debug("Checked %d profile file(s) in %s", len(files), profiles_dir)
    return all_issues
