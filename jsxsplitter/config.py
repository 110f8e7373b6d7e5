"""
Configuration system for JSX Splitter

Provides configuration management with support for files and environment variables.
Includes validation, default value handling, and configuration merging.
"""

import os
import json
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "JSXSPLITTER_"


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigurationManager:
    """Manages configuration loading, validation, and merging."""

    DEFAULT_CONFIG_PATHS = [
        "jsxsplitter.json",
        "jsxsplitter.yaml",
        "jsxsplitter.yml",
        ".jsxsplitter.json",
        ".jsxsplitter.yaml",
        ".jsxsplitter.yml",
        os.path.expanduser("~/.jsxsplitter.json"),
        os.path.expanduser("~/.jsxsplitter.yaml"),
        os.path.expanduser("~/.jsxsplitter.yml"),
    ]

    @staticmethod
    def find_config_file(search_paths: Optional[List[str]] = None) -> Optional[str]:
        """Find the first existing configuration file."""
        paths = search_paths or ConfigurationManager.DEFAULT_CONFIG_PATHS

        for path in paths:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping")
        return data

    @staticmethod
    def load_env_config() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        generation = {}
        for key in ("framework_name", "framework_module", "indent_unit"):
            value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if value:
                generation[key] = value

        for key in ("max_inline_params", "max_inline_reference_props"):
            value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if value:
                try:
                    generation[key] = int(value)
                except ValueError:
                    logger.warning(f"Invalid {ENV_PREFIX}{key.upper()} value, using default")

        if os.getenv(f"{ENV_PREFIX}SORT_IMPORTS"):
            generation["sort_imports"] = _env_flag(os.getenv(f"{ENV_PREFIX}SORT_IMPORTS"))

        if generation:
            config["generation"] = generation

        analysis = {}
        if os.getenv(f"{ENV_PREFIX}EXTRA_GLOBALS"):
            analysis["extra_globals"] = [
                name.strip()
                for name in os.getenv(f"{ENV_PREFIX}EXTRA_GLOBALS").split(",")
                if name.strip()
            ]

        if os.getenv(f"{ENV_PREFIX}INCLUDE_BROWSER_GLOBALS"):
            analysis["include_browser_globals"] = _env_flag(
                os.getenv(f"{ENV_PREFIX}INCLUDE_BROWSER_GLOBALS")
            )

        if analysis:
            config["analysis"] = analysis

        return config

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries, with later ones taking precedence."""
        result = {}

        for config in configs:
            if not config:
                continue

            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = ConfigurationManager.merge_configs(result[key], value)
                else:
                    result[key] = value

        return result

    @staticmethod
    def validate_config(config_data: Dict[str, Any]) -> None:
        """Validate configuration data."""
        if "generation" in config_data:
            generation = config_data["generation"]

            for key in ("max_inline_params", "max_inline_reference_props"):
                if key in generation:
                    value = generation[key]
                    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                        raise ConfigurationError(f"{key} must be a non-negative integer")

            for key in ("framework_name", "framework_module"):
                if key in generation and not (
                    isinstance(generation[key], str) and generation[key].strip()
                ):
                    raise ConfigurationError(f"{key} must be a non-empty string")

            if "indent_unit" in generation:
                indent = generation["indent_unit"]
                if not isinstance(indent, str) or not indent or indent.strip():
                    raise ConfigurationError("indent_unit must be non-empty whitespace")

        if "analysis" in config_data:
            analysis = config_data["analysis"]

            if "extra_globals" in analysis:
                extra = analysis["extra_globals"]
                if not isinstance(extra, list) or not all(isinstance(name, str) for name in extra):
                    raise ConfigurationError("extra_globals must be a list of names")

        if "prompt" in config_data:
            for key, value in config_data["prompt"].items():
                if not isinstance(value, str):
                    raise ConfigurationError(f"prompt.{key} must be a string")


@dataclass
class GenerationConfig:
    """Configuration for generated component code."""

    framework_name: str = "React"
    framework_module: str = "react"
    indent_unit: str = "  "
    max_inline_params: int = 2
    max_inline_reference_props: int = 3
    sort_imports: bool = True


@dataclass
class AnalysisConfig:
    """Configuration for the analysis oracle."""

    extra_globals: List[str] = field(default_factory=list)
    include_browser_globals: bool = True


@dataclass
class PromptConfig:
    """Texts of the component name prompt."""

    prompt: str = "Choose a name for the new component"
    placeholder: str = "New component name..."


@dataclass
class SplitterConfig:
    """Main configuration class for JSX Splitter."""

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)

    @classmethod
    def default(cls) -> "SplitterConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        use_env: bool = True,
        validate: bool = True,
    ) -> "SplitterConfig":
        """
        Load configuration from multiple sources with precedence:
        1. Default values
        2. Configuration file
        3. Environment variables (if use_env=True)

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            use_env: Whether to load environment variables
            validate: Whether to validate the configuration
        """
        configs_to_merge = []

        file_config = {}
        if config_path:
            file_config = ConfigurationManager.load_config_file(config_path)
        else:
            found_config = ConfigurationManager.find_config_file()
            if found_config:
                file_config = ConfigurationManager.load_config_file(found_config)
                logger.info(f"Loaded configuration from: {found_config}")

        configs_to_merge.append(file_config)

        if use_env:
            configs_to_merge.append(ConfigurationManager.load_env_config())

        merged_config = ConfigurationManager.merge_configs(*configs_to_merge)

        if validate:
            ConfigurationManager.validate_config(merged_config)

        sections = {}
        for name, section_cls in (
            ("generation", GenerationConfig),
            ("analysis", AnalysisConfig),
            ("prompt", PromptConfig),
        ):
            section = section_cls()
            for key, value in (merged_config.get(name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.warning(f"Ignoring unknown configuration key: {name}.{key}")
            sections[name] = section

        return cls(**sections)

    @classmethod
    def from_file(cls, config_path: str) -> "SplitterConfig":
        """Load configuration from a JSON or YAML file."""
        return cls.load(config_path=config_path, use_env=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "generation": asdict(self.generation),
            "analysis": asdict(self.analysis),
            "prompt": asdict(self.prompt),
        }

    def to_file(self, config_path: str, format: str = "json") -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration
            format: File format ('json' or 'yaml')
        """
        config_data = self.to_dict()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                if format.lower() == "yaml":
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
                else:
                    json.dump(config_data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration file: {e}")

    def validate(self) -> None:
        """Validate the current configuration."""
        ConfigurationManager.validate_config(self.to_dict())

    def get_config_summary(self) -> str:
        """Get a human-readable summary of the configuration."""
        extra = ", ".join(self.analysis.extra_globals) or "none"
        return f"""JSX Splitter Configuration Summary:
Generation:
  - Framework: {self.generation.framework_name} from '{self.generation.framework_module}'
  - Indent unit: {self.generation.indent_unit!r}
  - Max inline params: {self.generation.max_inline_params}
  - Max inline reference props: {self.generation.max_inline_reference_props}
  - Sort imports: {self.generation.sort_imports}

Analysis:
  - Extra globals: {extra}
  - Browser globals: {self.analysis.include_browser_globals}

Prompt:
  - Prompt: {self.prompt.prompt}
  - Placeholder: {self.prompt.placeholder}
"""


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> SplitterConfig:
    """
    Load configuration from file and/or environment variables.

    Args:
        config_path: Path to configuration file
        use_env: Whether to load environment variables

    Returns:
        SplitterConfig: Loaded configuration
    """
    return SplitterConfig.load(config_path=config_path, use_env=use_env)
