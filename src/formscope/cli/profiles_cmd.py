"""Profile CLI commands: validate and list."""

from pathlib import Path

import click

from formscope.errors import ProfileError
from formscope.profiles.loader import ProfileLoader
from formscope.profiles.schema import validate_profiles_dir


def _profiles_path(ctx: click.Context, path: Path | None) -> Path:
    return path if path is not None else ctx.obj.profiles_path


@click.group()
def profiles():
    """Profile commands."""
    pass


@profiles.command()
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(path_type=Path),
    help="Profiles directory (default: FORMSCOPE_PROFILES_PATH or ./profiles).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.pass_context
def validate(ctx: click.Context, target_path: Path | None, strict: bool):
    """Validate profile YAML files against the profile schema."""
    profiles_path = _profiles_path(ctx, target_path)

    # ── Schema validation ───────────────────────────────────────────────────
    issues = validate_profiles_dir(profiles_path, strict=strict)
    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    # ── Semantic (loader) validation ────────────────────────────────────────
    loader = ProfileLoader(profiles_path)
    try:
        loader.load_all()
    except ProfileError as e:
        click.echo(click.style(f"\nProfile loading failed: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(f"\nLoaded {len(loader.profiles)} profile(s).")
    click.echo(click.style("All profiles are valid.", fg="green", bold=True))


@profiles.command("list")
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(path_type=Path),
    help="Profiles directory (default: FORMSCOPE_PROFILES_PATH or ./profiles).",
)
@click.pass_context
def list_cmd(ctx: click.Context, target_path: Path | None):
    """List loaded profiles and their fields."""
    loader = ProfileLoader(_profiles_path(ctx, target_path))
    try:
        loader.load_all()
    except ProfileError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if not loader.profiles:
        click.echo("No profiles found.")
        return

    for name in loader.list_profiles():
        profile = loader.get_profile(name)
        required = [f.name for f in profile.fields if f.validation.required]
        click.echo(
            f"  {name} ({len(profile.fields)} fields"
            + (f", required: {', '.join(required)}" if required else "")
            + ")"
        )
