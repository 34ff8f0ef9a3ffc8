from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from tagger.core.config import TaggerConfig, load_config, load_repo_config
from tagger.core.errors import ErrorCode
from tagger.core.result import Err
from tagger.git.repository import Repository
from tagger.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Repository handle, settings and console, built once per invocation."""

    repo: Repository
    config: TaggerConfig
    console: ConsoleProtocol


def build_context(repo_path: Path, config_path: Path | None = None) -> CLIContext:
    try:
        root = repo_path.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --repo: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    repo = Repository(root)
    top = repo.root()
    config_root = top.value if not isinstance(top, Err) else root

    config_result = (
        load_config(config_path.expanduser())
        if config_path is not None
        else load_repo_config(config_root)
    )
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(repo=repo, config=config_result.value, console=RichConsole())
