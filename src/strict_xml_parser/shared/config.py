"""Configuration classes for strict XML parsing.

The grammar accepted by the parser is fixed; configuration covers the ambient
behaviour around it: how files are read, how results are rendered, and how
much the parser logs.
"""

import json
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_OUTPUT_FORMATS = ["text", "json"]


@dataclass
class ApiConfig:
    """Configuration for API layer behavior."""

    file_encoding: str = "utf-8"
    include_timing_info: bool = False

    def __post_init__(self) -> None:
        """Validate API configuration."""
        if not self.file_encoding:
            raise ValueError("file_encoding cannot be empty")


@dataclass
class OutputConfig:
    """Configuration for rendering parsed documents."""

    default_output_format: str = "text"
    show_inner_text: bool = True
    indent: int = 2

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.default_output_format not in VALID_OUTPUT_FORMATS:
            raise ValueError(
                f"default_output_format must be one of {VALID_OUTPUT_FORMATS}"
            )
        if self.indent < 0:
            raise ValueError("indent must be >= 0")


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


_COMPONENT_TYPES = {
    "api": ApiConfig,
    "output": OutputConfig,
    "global_": GlobalConfig,
}


def _component_of(key: str) -> Optional[str]:
    """Component named by a ``<component>__<field>`` override key, if any."""
    for component in _COMPONENT_TYPES:
        if key.startswith(component + "__"):
            return component
    return None


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Complete configuration for the parser, its API and its CLI.

    Immutable; use :meth:`override` to derive a modified copy.
    """

    api: ApiConfig = field(default_factory=ApiConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.api.__post_init__()
            self.output.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; component fields use
                ``<component>__<field>``

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> config = ParserConfig().override(
            ...     output__default_output_format="json",
            ...     global___logging_level="DEBUG",
            ... )
        """
        changes: Dict[str, Dict[str, Any]] = {name: {} for name in _COMPONENT_TYPES}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            component = _component_of(key)
            if component is not None:
                changes[component][key[len(component) + 2:]] = value
            elif "__" in key:
                raise ConfigValidationError(
                    f"Unknown configuration component: {key.split('__', 1)[0]}",
                    field_name=key,
                    suggestions=list(_COMPONENT_TYPES),
                )
            else:
                top_level[key] = value

        try:
            for component, component_changes in changes.items():
                if component_changes:
                    top_level[component] = replace(
                        getattr(self, component), **component_changes
                    )
            return replace(self, **top_level)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored; missing keys keep their defaults.

        Args:
            data: Dictionary as produced by :meth:`to_dict`

        Returns:
            ParserConfig instance created from dictionary
        """
        values: Dict[str, Any] = {
            key: data[key] for key in ("name", "description") if key in data
        }
        try:
            for component, component_type in _COMPONENT_TYPES.items():
                section = data.get(component)
                if not isinstance(section, dict):
                    continue
                known = {f.name for f in fields(component_type)}
                values[component] = component_type(
                    **{k: v for k, v in section.items() if k in known}
                )
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(
                f"Failed to deserialize to {cls.__name__}: {e}"
            ) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def diagnostic(cls) -> "ParserConfig":
        """Create configuration preset with verbose logging and timing info."""
        return cls(
            api=ApiConfig(include_timing_info=True),
            global_=GlobalConfig(logging_level="DEBUG"),
            name="diagnostic",
            description="Debug logging and per-parse timing information",
        )

    @classmethod
    def quiet(cls) -> "ParserConfig":
        """Create configuration preset that only logs errors."""
        return cls(
            output=OutputConfig(show_inner_text=False),
            global_=GlobalConfig(logging_level="ERROR"),
            name="quiet",
            description="Error-only logging and compact text output",
        )
