"""
Configuration management and loading.

Handles generation endpoint settings and project settings.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict

import yaml

from movie_budget.sdk.ollama_client import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT


@dataclass(frozen=True)
class GenerationConfig:
    """Where and how to reach the text-generation endpoint."""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate endpoint values."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        if not self.model or not self.model.strip():
            raise ValueError("model cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


@dataclass(frozen=True)
class ProjectConfig:
    """Project-level settings shown alongside the budget."""
    name: str = "Feature Film Project"
    currency: str = "USD"
    total_budget: float = 2500000.0
    start_date: date = date(2024, 1, 1)
    end_date: date = date(2024, 12, 31)

    def __post_init__(self):
        """Validate project values."""
        if not self.name or not self.name.strip():
            raise ValueError("project name cannot be empty")
        if len(self.currency) != 3 or not self.currency.isalpha():
            raise ValueError("currency must be a 3-letter code")
        if self.total_budget < 0:
            raise ValueError("total_budget must be >= 0")
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        object.__setattr__(self, "currency", self.currency.upper())


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    project: ProjectConfig = field(default_factory=ProjectConfig)


def default_app_config() -> AppConfig:
    """Configuration used when no file is given."""
    return AppConfig()


def load_app_config(path: str) -> AppConfig:
    """Load and validate application configuration from YAML file.

    Both sections are optional; missing values take their defaults.
    Unknown keys are rejected so typos do not silently fall back.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    allowed_top_keys = {'generation', 'project'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    generation = _parse_generation_config(_section(raw_config, 'generation'))
    project = _parse_project_config(_section(raw_config, 'project'))

    return AppConfig(generation=generation, project=project)


def _section(raw_config: Dict, name: str) -> Dict[str, Any]:
    data = raw_config.get(name) or {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")
    return data


def _check_keys(data: Dict, allowed_keys: set, path: str) -> None:
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")


def _parse_generation_config(data: Dict[str, Any]) -> GenerationConfig:
    """Parse and validate the generation section.

    Raises:
        ValueError: If configuration is invalid
    """
    _check_keys(data, {'base_url', 'model', 'timeout'}, "generation")

    values: Dict[str, Any] = {}
    for key in ('base_url', 'model'):
        if key in data:
            if not isinstance(data[key], str):
                raise ValueError(f"'{key}' in generation must be a string")
            values[key] = data[key]

    if 'timeout' in data:
        timeout = data['timeout']
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ValueError("'timeout' in generation must be a number")
        values['timeout'] = float(timeout)

    return GenerationConfig(**values)


def _parse_project_config(data: Dict[str, Any]) -> ProjectConfig:
    """Parse and validate the project section.

    Raises:
        ValueError: If configuration is invalid
    """
    _check_keys(
        data,
        {'name', 'currency', 'total_budget', 'start_date', 'end_date'},
        "project",
    )

    values: Dict[str, Any] = {}
    for key in ('name', 'currency'):
        if key in data:
            if not isinstance(data[key], str):
                raise ValueError(f"'{key}' in project must be a string")
            values[key] = data[key]

    if 'total_budget' in data:
        total = data['total_budget']
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            raise ValueError("'total_budget' in project must be a number")
        values['total_budget'] = float(total)

    for key in ('start_date', 'end_date'):
        if key in data:
            values[key] = _parse_date(data[key], f"project.{key}")

    return ProjectConfig(**values)


def _parse_date(value: Any, path: str) -> date:
    # PyYAML already turns unquoted ISO dates into date objects
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValueError(f"'{path}' must be an ISO date (YYYY-MM-DD)")
