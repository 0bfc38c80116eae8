"""Check CLI command: verify a multi-scope data file.

The data file is a YAML mapping of scope name to profile and record:

    billing_address:
      profile: address
      data:
        address1: 123 Test Street
    shipping_address:
      profile: address
      data: {}
"""

from pathlib import Path

import click
import yaml

from formscope.errors import ProfileError, SerializationError
from formscope.manager import ValidationManager
from formscope.profiles.loader import ProfileLoader
from formscope.verification.verifier import Verifier


def _load_data_file(path: Path) -> dict:
    try:
        with path.open() as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise click.BadParameter(f"cannot parse {path}: {exc}", param_hint="DATA_FILE")
    if not isinstance(data, dict):
        raise click.BadParameter(
            f"{path} must contain a mapping of scope -> entry", param_hint="DATA_FILE"
        )

    for scope, entry in data.items():
        if entry is None:
            data[scope] = entry = {}
        if not isinstance(entry, dict):
            raise click.BadParameter(
                f"scope '{scope}' must be a mapping with 'profile' and 'data' keys",
                param_hint="DATA_FILE",
            )
        if entry.get("data") is not None and not isinstance(entry["data"], dict):
            raise click.BadParameter(
                f"'data' of scope '{scope}' must be a mapping",
                param_hint="DATA_FILE",
            )
    return data


@click.command()
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--profiles",
    "profiles_path",
    default=None,
    type=click.Path(path_type=Path),
    help="Profiles directory (default: FORMSCOPE_PROFILES_PATH or ./profiles).",
)
@click.option(
    "--freeze",
    "freeze_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the frozen manager state to this file.",
)
@click.pass_context
def check(
    ctx: click.Context,
    data_file: Path,
    profiles_path: Path | None,
    freeze_path: Path | None,
):
    """Verify every scope in DATA_FILE against its profile."""
    config = ctx.obj
    loader = ProfileLoader(profiles_path or config.profiles_path)
    try:
        loader.load_all()
    except ProfileError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

    entries = _load_data_file(data_file)

    # Verifiers are shared between scopes that use the same profile
    verifiers: dict[str, Verifier] = {}
    manager = ValidationManager()
    for scope, entry in entries.items():
        profile_name = entry.get("profile", scope)
        profile = loader.get_profile(profile_name)
        if profile is None:
            click.echo(
                f"Error: scope '{scope}' uses unknown profile '{profile_name}'. "
                "Available: " + ", ".join(loader.list_profiles()),
                err=True,
            )
            raise SystemExit(2)
        if profile_name not in verifiers:
            verifiers[profile_name] = Verifier(profile)
        manager.set_verifier(scope, verifiers[profile_name])

    for scope, entry in entries.items():
        manager.verify(scope, entry.get("data") or {})

    for scope in entries:
        result = manager.get_results(scope)
        if result.success:
            click.echo(click.style(f"✓ {scope}", fg="green"))
            continue
        click.echo(click.style(f"✗ {scope}", fg="red"))
        for message in manager.messages_for_scope(scope):
            detail = f": {message.text}" if message.text else ""
            click.echo(f"    [{message.level.value.upper()}] {message.msgid}{detail}")

    if freeze_path is not None:
        freeze_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            frozen = manager.freeze(config.freeze_format)
        except SerializationError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(2)
        freeze_path.write_text(frozen, encoding="utf-8")
        click.echo(f"Manager state saved: {freeze_path}")

    if not manager.success():
        failed = sum(1 for s in entries if not manager.get_results(s).success)
        click.echo(click.style(f"\n{failed} scope(s) failed verification", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style(f"\nAll {len(entries)} scope(s) verified.", fg="green", bold=True))
