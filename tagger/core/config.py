"""Typed configuration loading.

Settings are read from, in order of precedence:
- an explicit path (``--config``)
- ``.tagger.toml`` at the repository root
- the ``[tool.tagger]`` table of ``pyproject.toml`` at the repository root

Missing files fall back to defaults. Example ``.tagger.toml``:

    tag_prefix = "v"
    canonical_branches = ["main", "master"]
    collision_stride = 100
    remote = "origin"
    default_bump = "patch"
    fetch = true
    prompt_push = true
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "TaggerConfig",
    "load_config",
    "load_repo_config",
]

CONFIG_FILE_NAME = ".tagger.toml"

DEFAULT_TAG_PREFIX = "v"
DEFAULT_CANONICAL_BRANCHES = ("main", "master")
DEFAULT_COLLISION_STRIDE = 100
DEFAULT_REMOTE = "origin"
DEFAULT_BUMP = "patch"

_BUMP_CHOICES = ("major", "minor", "patch")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class TaggerConfig:
    """Settings for the tagger command."""

    tag_prefix: str = DEFAULT_TAG_PREFIX
    canonical_branches: tuple[str, ...] = DEFAULT_CANONICAL_BRANCHES
    collision_stride: int = DEFAULT_COLLISION_STRIDE
    remote: str = DEFAULT_REMOTE
    default_bump: str = DEFAULT_BUMP
    fetch: bool = True
    prompt_push: bool = True

    def is_canonical(self, branch: str) -> bool:
        return branch in self.canonical_branches

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> TaggerConfig:
        """Create a config from a parsed TOML table.

        Raises:
            ValueError: If a value is present but out of range.
        """
        prefix = get_str(data, "tag_prefix")
        branches = get_str_list(data, "canonical_branches")
        stride = get_int(data, "collision_stride")
        remote = get_str(data, "remote")
        bump = get_str(data, "default_bump")

        if stride is not None and stride < 1:
            raise ValueError(f"collision_stride must be >= 1 (got {stride})")
        if bump is not None and bump.lower() not in _BUMP_CHOICES:
            raise ValueError(f"default_bump must be one of {', '.join(_BUMP_CHOICES)} (got {bump!r})")
        if branches is not None and not branches:
            raise ValueError("canonical_branches must not be empty")

        fetch = get_bool(data, "fetch")
        prompt_push = get_bool(data, "prompt_push")

        return cls(
            tag_prefix=DEFAULT_TAG_PREFIX if prefix is None else prefix,
            canonical_branches=tuple(branches) if branches else DEFAULT_CANONICAL_BRANCHES,
            collision_stride=stride or DEFAULT_COLLISION_STRIDE,
            remote=remote or DEFAULT_REMOTE,
            default_bump=bump.lower() if bump else DEFAULT_BUMP,
            fetch=True if fetch is None else fetch,
            prompt_push=True if prompt_push is None else prompt_push,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        data = as_str_dict(tomllib.loads(path.read_bytes().decode("utf-8")))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def _build(data: StrDict, path: Path) -> Result[TaggerConfig, ConfigError]:
    try:
        return Ok(TaggerConfig.from_dict(data))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_config(path: Path) -> Result[TaggerConfig, ConfigError]:
    """Load configuration from a standalone TOML file."""
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed
    return _build(parsed.value, path)


def load_repo_config(root: Path) -> Result[TaggerConfig, ConfigError]:
    """Load configuration for a repository, falling back to defaults.

    ``.tagger.toml`` wins over ``[tool.tagger]`` in ``pyproject.toml``.
    """
    dedicated = root / CONFIG_FILE_NAME
    if dedicated.is_file():
        return load_config(dedicated)

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        parsed = _parse_toml(pyproject)
        if isinstance(parsed, Err):
            return parsed
        tool = get_table(parsed.value, "tool") or {}
        section = get_table(tool, "tagger")
        if section is not None:
            return _build(section, pyproject)

    return Ok(TaggerConfig())
