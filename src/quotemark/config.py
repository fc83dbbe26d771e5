"""Parser configuration.

Settings can be passed directly or loaded from a YAML file:

    flowed: true
    indent: "    "
    blocks: [divider, attribution]
    summary_length: 200
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from quotemark.blocks import BLOCK_NAMES, MATCHERS_BY_NAME, BlockMatcher
from quotemark.exceptions import ConfigError
from quotemark.pipeline.renderer import DEFAULT_INDENT
from quotemark.pipeline.search import SUMMARY_LENGTH

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "quotemark.yaml"


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Settings for MessageBodyParser.

    Attributes:
        flowed: Treat the body as format=flowed (trailing-space continuation).
        indent: Indentation per nesting level in rendered HTML.
        blocks: Names of enabled block matchers, in priority order.
        summary_length: Maximum length of the search summary.
    """

    flowed: bool = False
    indent: str = DEFAULT_INDENT
    blocks: tuple[str, ...] = BLOCK_NAMES
    summary_length: int = SUMMARY_LENGTH

    @property
    def matchers(self) -> tuple[BlockMatcher, ...]:
        """Enabled block matchers in configured order."""
        return tuple(MATCHERS_BY_NAME[name] for name in self.blocks)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ParserConfig":
        """Build a config from a mapping, validating keys and types.

        Args:
            data: Parsed configuration, e.g. from YAML.

        Returns:
            ParserConfig with defaults for missing keys.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigError(message="Unknown configuration key", key=str(key))

        values: dict[str, Any] = {}

        if "flowed" in data:
            if not isinstance(data["flowed"], bool):
                raise ConfigError(message="Expected a boolean", key="flowed")
            values["flowed"] = data["flowed"]

        if "indent" in data:
            indent = data["indent"]
            if not isinstance(indent, str) or indent.strip():
                raise ConfigError(message="Expected a whitespace string", key="indent")
            values["indent"] = indent

        if "blocks" in data:
            blocks = data["blocks"]
            if not isinstance(blocks, (list, tuple)) or not all(isinstance(name, str) for name in blocks):
                raise ConfigError(message="Expected a list of block names", key="blocks")
            for name in blocks:
                if name not in BLOCK_NAMES:
                    raise ConfigError(message=f"Unknown block '{name}'", key="blocks")
            values["blocks"] = tuple(blocks)

        if "summary_length" in data:
            length = data["summary_length"]
            if isinstance(length, bool) or not isinstance(length, int) or length < 0:
                raise ConfigError(message="Expected a non-negative integer", key="summary_length")
            values["summary_length"] = length

        return cls(**values)


def _default_candidates() -> list[Path]:
    return [
        Path(CONFIG_FILE_NAME),
        Path(__file__).parent.parent.parent / "config" / CONFIG_FILE_NAME,
    ]


def load_config(path: Path | str | None = None) -> ParserConfig:
    """Load configuration from YAML.

    Args:
        path: Config file. If None, quotemark.yaml in the working directory
            and config/quotemark.yaml in the repository are tried in turn;
            defaults are used when neither exists.

    Returns:
        The loaded ParserConfig.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    if path is not None:
        candidates = [Path(path)]
        if not candidates[0].exists():
            raise ConfigError(message=f"Config file not found: {path}")
    else:
        candidates = [candidate for candidate in _default_candidates() if candidate.exists()]

    if not candidates:
        return ParserConfig()

    config_path = candidates[0]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(message=f"Could not read {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(message=f"Expected a mapping in {config_path}")

    config = ParserConfig.from_mapping(data)
    logger.info("Loaded parser config from %s", config_path)

    return config
