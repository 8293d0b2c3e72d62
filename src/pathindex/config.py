"""
pathindex Configuration Loader.

Loads search path settings from .pathindex.yaml and the environment.

Precedence (lowest to highest):
- built-in defaults
- .pathindex.yaml
- environment (PATHINDEX_STRICT, PATHINDEX_VERBOSE, $env_var roots)
- explicit overrides (CLI flags)
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jsonschema
import yaml

from pathindex.errors import ConfigError
from pathindex.search_path import DEFAULT_ENV_VAR, SearchPath

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".pathindex.yaml"
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "config.schema.json"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """
    Find .pathindex.yaml by searching upward from start.

    Args:
        start: Starting directory (default: cwd)

    Returns:
        Path to the config file, or None if no parent directory has one
    """
    current = (start or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def load_schema() -> Dict[str, Any]:
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def _env_flag(environ: Mapping[str, str], key: str) -> Optional[bool]:
    raw = environ.get(key)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{key} must be one of 1/0, true/false, yes/no, on/off (got {raw!r})")


@dataclass
class SearchPathConfig:
    """Settings needed to build a SearchPath."""

    strict: bool = False
    verbose: bool = False
    roots: List[str] = field(default_factory=list)
    env_var: str = DEFAULT_ENV_VAR
    source: Optional[Path] = None

    @staticmethod
    def split_path(value: str) -> List[str]:
        """Split an os.pathsep-delimited root list, dropping empty segments."""
        return [p for p in value.split(os.pathsep) if p]

    @classmethod
    def from_file(cls, config_path: Path) -> "SearchPathConfig":
        """
        Load and validate a .pathindex.yaml file.

        Relative roots are resolved against the directory holding the file.

        Raises:
            ConfigError: if the file is missing, not YAML, or fails the schema
        """
        if not config_path.exists():
            raise ConfigError(f"Config not found: {config_path}")
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        try:
            jsonschema.validate(data, load_schema())
        except jsonschema.ValidationError as e:
            location = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigError(f"Invalid {config_path} at {location}: {e.message}") from e

        base = config_path.resolve().parent
        roots = [
            r if "://" in r or r.startswith("file:") else str(base / r)
            for r in data.get("roots", [])
        ]
        return cls(
            strict=data.get("strict", False),
            verbose=data.get("verbose", False),
            roots=roots,
            env_var=data.get("env_var", DEFAULT_ENV_VAR),
            source=config_path,
        )

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        search_from: Optional[Path] = None,
    ) -> "SearchPathConfig":
        """
        Load file settings, then apply environment overrides.

        Args:
            config_path: Explicit config file (default: search upward)
            environ: Environment mapping (default: os.environ)
            search_from: Directory to start the upward search from

        Returns:
            Merged configuration (defaults if no file is found)
        """
        environ = os.environ if environ is None else environ
        if config_path is None:
            config_path = find_config_file(search_from)

        if config_path is not None:
            logger.debug("Loading config from %s", config_path)
            config = cls.from_file(config_path)
        else:
            config = cls()

        return config.with_environment(environ)

    def with_environment(self, environ: Mapping[str, str]) -> "SearchPathConfig":
        strict = _env_flag(environ, "PATHINDEX_STRICT")
        verbose = _env_flag(environ, "PATHINDEX_VERBOSE")
        extra = self.split_path(environ.get(self.env_var, ""))
        return replace(
            self,
            strict=self.strict if strict is None else strict,
            verbose=self.verbose if verbose is None else verbose,
            roots=self.roots + extra,
        )

    def build_search_path(self) -> SearchPath:
        return SearchPath(self.roots, strict=self.strict, verbose=self.verbose)
