"""
Configuration for livemark parsers.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from livemark.livemark_exceptions import ConfigError


def _copy_list(value: Any) -> Any:
    """Copy a list value; anything else is kept as-is for validate() to report."""
    return list(value) if isinstance(value, list) else value


@dataclass
class LivemarkConfig:
    """
    Settings that can be expressed without code.

    Rule objects themselves are passed to the parser directly; a configuration file can only switch named
    rules off and tune how delimiters behave.
    """

    disabled_line_rules: List[str] = field(default_factory=list)
    disabled_inline_rules: List[str] = field(default_factory=list)
    strict_flanking_delimiters: str = "_"

    @classmethod
    def create_default(cls) -> 'LivemarkConfig':
        """Create a configuration with every rule enabled."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> 'LivemarkConfig':
        """
        Create a configuration from parsed data.

        Args:
            data: Dictionary of settings; missing keys keep their defaults

        Returns:
            The configuration
        """
        if not data:
            return cls.create_default()

        return cls(
            disabled_line_rules=_copy_list(data.get('disabled_line_rules') or []),
            disabled_inline_rules=_copy_list(data.get('disabled_inline_rules') or []),
            strict_flanking_delimiters=data.get('strict_flanking_delimiters', '_')
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> 'LivemarkConfig':
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the configuration file

        Returns:
            The configuration

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If the file is not valid YAML or does not hold a mapping
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)

            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}", {'path': config_path}) from e

        if data is not None and not isinstance(data, dict):
            raise ConfigError(
                f"Configuration in {config_path} must be a mapping",
                {'path': config_path, 'type': type(data).__name__}
            )

        return cls.from_dict(data)

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        data = {
            'disabled_line_rules': self.disabled_line_rules,
            'disabled_inline_rules': self.disabled_inline_rules,
            'strict_flanking_delimiters': self.strict_flanking_delimiters
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=True)

    def validate(self) -> List[str]:
        """
        Check the configuration for problems.

        Returns:
            A list of error messages, empty if the configuration is valid
        """
        errors = []

        for key in ('disabled_line_rules', 'disabled_inline_rules'):
            names = getattr(self, key)
            if not isinstance(names, list):
                errors.append(f"{key} must be a list of rule names, got {type(names).__name__}")
                continue

            for name in names:
                if not isinstance(name, str) or not name:
                    errors.append(f"{key} entries must be rule names, got {name!r}")

        if not isinstance(self.strict_flanking_delimiters, str):
            errors.append("strict_flanking_delimiters must be a string of delimiter characters")

        return errors

    def line_overrides(self) -> Dict[str, None]:
        """Get line grammar overrides that disable the configured rules."""
        return dict.fromkeys(self.disabled_line_rules)

    def inline_overrides(self) -> Dict[str, None]:
        """Get inline grammar overrides that disable the configured rules."""
        return dict.fromkeys(self.disabled_inline_rules)
