"""Configuration model and loaders for execable.

Responsibilities:
- Define launcher configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.
- Wire a configured `AppletLauncher` from the resolved settings.

Key types:
- `ExecableConfig`: normalized applet and launch settings.
- `ConfigLoader`: static construction helpers for `ExecableConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .applets import StaticAppletRegistry
from .argv import INITIAL_ARGV_CAPACITY
from .launcher import AppletLauncher, ExecveFunc, ExecvpeFunc
from .parsing import clean_token, require_switch, split_list_value
from .telemetry.logger import ExecLogger

_DEFAULT_EXEC_PATHS = ("/proc/self/exe",)
_EXEC_PATH_SEPARATOR = ":"
_APPLET_SEPARATOR = ","

ENV_PREFER_APPLETS = "EXECABLE_PREFER_APPLETS"
ENV_EXEC_PATHS = "EXECABLE_EXEC_PATHS"
ENV_APPLETS = "EXECABLE_APPLETS"


@dataclass(slots=True)
class ExecableConfig:
    """Runtime configuration for resolution and launch.

    Attributes:
        prefer_applets: Try registered applets before searching `PATH`.
        exec_paths: Absolute self-image paths tried, in order, for applets.
        applets: Names of the built-in applets.
        initial_argv_capacity: Starting capacity of built argument vectors.
        max_argv_capacity: Optional growth limit for built argument vectors.
    """

    prefer_applets: bool = True
    exec_paths: tuple[str, ...] = _DEFAULT_EXEC_PATHS
    applets: tuple[str, ...] = ()
    initial_argv_capacity: int = INITIAL_ARGV_CAPACITY
    max_argv_capacity: int | None = None

    def validate(self) -> None:
        """Validate configuration values before building a launcher."""

        for exec_path in self.exec_paths:
            if not os.path.isabs(exec_path):
                raise ValueError(f"`exec_paths` entry `{exec_path}` must be an absolute path.")
        if self.initial_argv_capacity <= 0:
            raise ValueError("`initial_argv_capacity` must be a positive integer.")
        if self.max_argv_capacity is not None and (
            self.max_argv_capacity < self.initial_argv_capacity
        ):
            raise ValueError(
                "`max_argv_capacity` must not be below `initial_argv_capacity`."
            )

    def build_registry(self) -> StaticAppletRegistry:
        """Return the applet registry described by this configuration."""

        return StaticAppletRegistry(self.applets)

    def build_launcher(
        self,
        *,
        logger: ExecLogger | None = None,
        execve: ExecveFunc | None = None,
        execvpe: ExecvpeFunc | None = None,
    ) -> AppletLauncher:
        """Create a launcher wired to this configuration."""

        self.validate()
        return AppletLauncher(
            self.build_registry(),
            self.exec_paths,
            prefer_applets=self.prefer_applets,
            execve=execve,
            execvpe=execvpe,
            logger=logger,
        )


class ConfigLoader:
    """Factory methods for building `ExecableConfig` instances."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "prefer_applets",
            "exec_paths",
            "applets",
            "initial_argv_capacity",
            "max_argv_capacity",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> ExecableConfig:
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If `path` does not exist.
            ValueError: If the payload is not a mapping or holds invalid values.
        """

        raw_text = path.read_text(encoding="utf-8")
        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file `{path}` is not valid YAML: {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"Config file `{path}` must contain a mapping at the top level.")
        return ConfigLoader._build_config_from_mapping(payload, f"Config file `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ExecableConfig:
        """Load configuration from `EXECABLE_*` environment variables.

        Unset variables keep their dataclass defaults.
        """

        source = os.environ if env is None else env
        prefer_applets = True
        raw_prefer = clean_token(source.get(ENV_PREFER_APPLETS))
        if raw_prefer is not None:
            prefer_applets = require_switch(raw_prefer, f"`{ENV_PREFER_APPLETS}`")

        exec_paths = _DEFAULT_EXEC_PATHS
        raw_exec_paths = source.get(ENV_EXEC_PATHS)
        if raw_exec_paths is not None:
            exec_paths = split_list_value(raw_exec_paths, _EXEC_PATH_SEPARATOR)

        applets: tuple[str, ...] = ()
        raw_applets = source.get(ENV_APPLETS)
        if raw_applets is not None:
            applets = split_list_value(raw_applets, _APPLET_SEPARATOR)

        config = ExecableConfig(
            prefer_applets=prefer_applets,
            exec_paths=exec_paths,
            applets=applets,
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ExecableConfig:
        """Build and validate configuration from a parsed mapping payload."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        exec_paths = ConfigLoader._optional_string_list(
            payload, "exec_paths", source_label, _EXEC_PATH_SEPARATOR
        )
        config = ExecableConfig(
            prefer_applets=ConfigLoader._optional_boolean(
                payload, "prefer_applets", source_label, default=True
            ),
            exec_paths=_DEFAULT_EXEC_PATHS if exec_paths is None else exec_paths,
            applets=ConfigLoader._optional_string_list(
                payload, "applets", source_label, _APPLET_SEPARATOR
            )
            or (),
            initial_argv_capacity=ConfigLoader._optional_positive_int(
                payload, "initial_argv_capacity", source_label
            )
            or INITIAL_ARGV_CAPACITY,
            max_argv_capacity=ConfigLoader._optional_positive_int(
                payload, "max_argv_capacity", source_label
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read an on/off field, returning `default` when absent."""

        if key not in payload:
            return default
        return require_switch(payload[key], f"{source_label} field `{key}`")

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> int | None:
        """Read a positive integer field, returning `None` when absent or blank."""

        if key not in payload:
            return None

        raw_value = payload[key]
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = clean_token(raw_value)
            if normalized is None:
                return None
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` must be a positive integer."
                ) from exc

        if parsed <= 0:
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_string_list(
        payload: Mapping[str, Any], key: str, source_label: str, separator: str
    ) -> tuple[str, ...] | None:
        """Read a list of strings given as a YAML sequence or a delimited string."""

        if key not in payload:
            return None

        raw = payload[key]
        if raw is None:
            return ()
        if isinstance(raw, str):
            return split_list_value(raw, separator)
        if not isinstance(raw, list):
            raise ValueError(f"{source_label} field `{key}` must be a list of strings.")

        items: list[str] = []
        for raw_item in raw:
            item = clean_token(raw_item)
            if item is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank entry.")
            items.append(item)
        return tuple(items)
