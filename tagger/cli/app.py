from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer

from tagger import __version__
from tagger.cli._helpers import exit_with_error
from tagger.cli.context import build_context
from tagger.core.errors import ErrorCode
from tagger.core.result import Err
from tagger.output.console import ConsoleProtocol
from tagger.services.tagging import TaggingService
from tagger.versioning import Component, Version


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def _parse_component(raw: str | None) -> Component | None:
    if raw is None:
        return None
    component = Component.parse(raw)
    if component is None:
        typer.echo(f"error: invalid --bump: {raw} (expected major, minor or patch)", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return component


def _prompt_component(console: ConsoleProtocol, default: str) -> Callable[[Version], Component]:
    def choose(floor: Version) -> Component:
        while True:
            raw = typer.prompt(f"Component to increment from {floor}", default=default)
            component = Component.parse(raw)
            if component is not None:
                return component
            console.error("expected major, minor or patch")

    return choose


@app.command()
def tag(
    target: str | None = typer.Option(
        None, "--tag", "-t", help="Tag this exact version instead of proposing one"
    ),
    bump: str | None = typer.Option(
        None, "--bump", "-b", help="Component to increment: major, minor or patch"
    ),
    repo_path: Path = typer.Option(Path("."), "--repo", "-C", help="Repository to tag"),
    config_path: Path | None = typer.Option(None, "--config", help="Settings file (TOML)"),
    fetch: bool | None = typer.Option(
        None, "--fetch/--no-fetch", help="Fetch tags from the remote first"
    ),
    push: bool = typer.Option(True, "--push/--no-push", help="Push the new tag"),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Accept the proposal and push without prompting"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the proposal without tagging"),
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Create the next release or pre-release tag on HEAD."""
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    component = _parse_component(bump)
    ctx = build_context(repo_path, config_path)
    config = ctx.config

    if yes:
        default_component = Component.parse(config.default_bump) or Component.PATCH
        service = TaggingService(
            repo=ctx.repo,
            config=config,
            console=ctx.console,
            choose_component=lambda _floor: default_component,
        )
    else:
        service = TaggingService(
            repo=ctx.repo,
            config=config,
            console=ctx.console,
            choose_component=_prompt_component(ctx.console, config.default_bump),
            edit_version=lambda proposal: typer.prompt(
                "Enter new tag version", default=proposal.to_tag(config.tag_prefix)
            ),
            confirm=(
                (lambda msg: typer.confirm(msg, default=True)) if config.prompt_push else None
            ),
        )

    result = service.run(
        fetch=config.fetch if fetch is None else fetch,
        push=push,
        target=target,
        component=component,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        exit_with_error(result.error, ctx.console)


def main() -> None:
    app()
