"""Load field profiles from YAML files.

A profile document looks like:

    profile: name
    fields:
      - name: name_first
        type: text
        validation:
          required: true
      - name: name_last
        validation:
          required: true
          maxLength: 40

The ``fields`` key also accepts a mapping of field name to definition.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formscope.errors import ProfileError

FILTERS = ("trim", "lower", "upper", "collapse")


@dataclass
class ValidationRules:
    required: bool = False
    min: float | None = None
    max: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationRules":
        return cls(
            required=bool(data.get("required", False)),
            min=data.get("min"),
            max=data.get("max"),
            min_length=data.get("minLength", data.get("min_length")),
            max_length=data.get("maxLength", data.get("max_length")),
            pattern=data.get("pattern"),
        )


@dataclass
class FieldDefinition:
    name: str
    type: str = "text"
    display_name: str = ""
    default: Any = None
    options: list[Any] | None = None
    filters: list[str] = field(default_factory=list)
    validation: ValidationRules = field(default_factory=ValidationRules)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = _humanize(self.name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldDefinition":
        """Create a FieldDefinition from a YAML/JSON dict.

        ``required`` may be given at the top level as a shorthand for
        ``validation.required``.
        """
        if not isinstance(data, dict) or "name" not in data:
            raise ProfileError(f"Field definition has no name: {data!r}")

        rules = dict(data.get("validation") or {})
        if "required" in data:
            rules.setdefault("required", data["required"])

        filters = data.get("filters") or []
        if isinstance(filters, str):
            filters = [filters]
        unknown = [f for f in filters if f not in FILTERS]
        if unknown:
            raise ProfileError(
                f"Field '{data['name']}' uses unknown filter(s): {', '.join(unknown)}"
            )

        options = data.get("options")
        if options is not None:
            options = [
                opt.get("value") if isinstance(opt, dict) else opt for opt in options
            ]

        return cls(
            name=data["name"],
            type=data.get("type", "text"),
            display_name=data.get("displayName", data.get("display_name", "")),
            default=data.get("default"),
            options=options,
            filters=list(filters),
            validation=ValidationRules.from_dict(rules),
        )


@dataclass
class Profile:
    """An ordered set of field definitions verified together."""

    name: str
    fields: list[FieldDefinition] = field(default_factory=list)

    def get_field(self, name: str) -> FieldDefinition | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create a Profile from a YAML/JSON dict with ``profile`` and ``fields`` keys."""
        name = data.get("profile") or data.get("name")
        if not name:
            raise ProfileError("Profile document has no 'profile' name")

        raw_fields = data.get("fields") or []
        if isinstance(raw_fields, dict):
            for field_name, body in raw_fields.items():
                if body is not None and not isinstance(body, dict):
                    raise ProfileError(
                        f"Profile '{name}' field '{field_name}' must be a mapping, "
                        f"got {type(body).__name__}"
                    )
            raw_fields = [
                {"name": field_name, **(body or {})}
                for field_name, body in raw_fields.items()
            ]

        fields = [FieldDefinition.from_dict(f) for f in raw_fields]
        seen: set[str] = set()
        for f in fields:
            if f.name in seen:
                raise ProfileError(f"Profile '{name}' defines field '{f.name}' twice")
            seen.add(f.name)

        return cls(name=name, fields=fields)


class ProfileLoader:
    """Loads profile definitions from a directory of YAML files."""

    def __init__(self, profiles_path: Path):
        self.profiles_path = profiles_path
        self.profiles: dict[str, Profile] = {}
        self._sources: dict[str, Path] = {}

    def load_all(self) -> None:
        """Load every ``*.yaml`` / ``*.yml`` file that declares a profile.

        Raises:
            ProfileError: If the directory is missing, a file cannot be
                parsed, or two files declare the same profile name
        """
        if not self.profiles_path.is_dir():
            raise ProfileError(f"Profiles directory not found: {self.profiles_path}")

        profiles: dict[str, Profile] = {}
        sources: dict[str, Path] = {}
        files = sorted(
            list(self.profiles_path.glob("*.yaml")) + list(self.profiles_path.glob("*.yml"))
        )
        for yaml_file in files:
            profile = load_profile_file(yaml_file)
            if profile is None:
                continue
            if profile.name in profiles:
                raise ProfileError(
                    f"Duplicate profile '{profile.name}' in both "
                    f"'{sources[profile.name].name}' and '{yaml_file.name}'"
                )
            profiles[profile.name] = profile
            sources[profile.name] = yaml_file

        self.profiles = profiles
        self._sources = sources

    def get_profile(self, name: str) -> Profile | None:
        return self.profiles.get(name)

    def list_profiles(self) -> list[str]:
        return sorted(self.profiles.keys())


def load_profile_file(path: Path) -> Profile | None:
    """Load a single profile file. Returns None if the file declares no profile."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ProfileError(f"Cannot parse {path}: {exc}") from exc

    if not data or not isinstance(data, dict) or "profile" not in data:
        return None
    return Profile.from_dict(data)


def _humanize(name: str) -> str:
    """``name_first`` -> ``Name First``; ``nameFirst`` -> ``Name First``."""
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0 and name[i - 1].islower():
            out.append(" ")
        out.append(" " if ch in "_-" else ch)
    return "".join(out).strip().title()
