"""Container configuration with layered loading.

Sources are layered with the following precedence:
1. Default values (lowest priority)
2. JSON configuration file
3. Environment variables
4. Command-line arguments (highest priority)
"""
from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from gimple.exceptions import ConfigurationError

SHARE_STRATEGIES = ("flag", "sentinel")
TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
FALSE_STRINGS = {"0", "false", "no", "n", "off", ""}


@dataclass(frozen=True)
class ContainerConfig:
    """Container behaviour settings.

    Attributes:
        share_strategy: How shared factories decide whether a value is cached.
            "flag" tracks an explicit populated flag, so the wrapped factory runs
            at most once. "sentinel" treats a cached None as empty and re-runs
            the factory until it returns something else.
        debug: Log every service resolution
    """
    share_strategy: str = "flag"
    debug: bool = False

    def __post_init__(self):
        if self.share_strategy not in SHARE_STRATEGIES:
            raise ConfigurationError(f"Invalid share_strategy: {self.share_strategy}")


class ConfigLoader:
    """Builds a ContainerConfig from defaults, a JSON file, the environment and CLI flags."""

    def __init__(self, config_path: Path = Path("gimple.json")):
        self.config_path = config_path

    def load(self, argv: Optional[List[str]] = None) -> Tuple[ContainerConfig, List[str]]:
        """Load configuration with hierarchy: defaults → file → env → CLI.

        Args:
            argv: Command-line arguments to parse, or None to skip CLI parsing

        Returns:
            Tuple of (ContainerConfig instance, unknown CLI arguments)
        """
        config_dict = self._get_defaults()
        config_dict.update(self._load_json_config())
        config_dict.update(self._load_env_overrides())

        unknown_args: List[str] = []
        if argv is not None:
            cli_overrides, unknown_args = self._parse_cli_args(argv)
            config_dict.update(cli_overrides)

        return self._build_config(config_dict), unknown_args

    def _get_defaults(self) -> Dict[str, Any]:
        return {
            "share_strategy": "flag",
            "debug": False,
        }

    def _load_json_config(self) -> Dict[str, Any]:
        """Read the JSON config file; a missing or malformed file yields no overrides."""
        if not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load {self.config_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {self.config_path}: expected a JSON object")
            return {}
        return data

    def _load_env_overrides(self) -> Dict[str, Any]:
        """Load overrides from GIMPLE_SHARE_STRATEGY and GIMPLE_DEBUG."""
        overrides: Dict[str, Any] = {}

        share_strategy = os.getenv("GIMPLE_SHARE_STRATEGY")
        if share_strategy:
            overrides["share_strategy"] = share_strategy.strip().lower()

        debug = os.getenv("GIMPLE_DEBUG")
        if debug is not None:
            overrides["debug"] = debug

        return overrides

    def _parse_cli_args(self, argv: List[str]) -> Tuple[Dict[str, Any], List[str]]:
        parser = argparse.ArgumentParser(add_help=False)
        parser.add_argument(
            "--share-strategy",
            choices=list(SHARE_STRATEGIES),
            help="Cache gate used by shared factories"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Log every service resolution"
        )

        known, unknown = parser.parse_known_args(argv)

        overrides: Dict[str, Any] = {}
        if known.share_strategy:
            overrides["share_strategy"] = known.share_strategy
        if known.debug:
            overrides["debug"] = True

        return overrides, unknown

    def _build_config(self, config_dict: Dict[str, Any]) -> ContainerConfig:
        """Build and validate the final configuration object.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        return ContainerConfig(
            share_strategy=config_dict.get("share_strategy", "flag"),
            debug=self._parse_bool("debug", config_dict.get("debug", False)),
        )

    @staticmethod
    def _parse_bool(name: str, value: Any) -> bool:
        """Accept a real bool or its text form ("1"/"0", "true"/"false", "yes"/"no", "on"/"off").

        Raises:
            ConfigurationError: If value is neither
        """
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in TRUE_STRINGS:
                return True
            if text in FALSE_STRINGS:
                return False
        raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def load_config(argv: Optional[List[str]] = None) -> ContainerConfig:
    """Load configuration from the default sources, discarding unknown CLI arguments."""
    config, _ = ConfigLoader().load(argv)
    return config


__all__ = ["ContainerConfig", "ConfigLoader", "SHARE_STRATEGIES", "load_config"]
