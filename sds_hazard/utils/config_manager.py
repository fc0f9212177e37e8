"""
Configuration management for the classification core.

Handles loading, updating, and persisting configuration including
match thresholds, scoring weights, extraction windows and rule overrides.
"""

import copy
import logging
import math
from pathlib import Path
from typing import Any, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / 'config' / 'classifier_config.yaml'


class ConfigManager:
    """
    Manages classifier configuration.

    Provides methods to load, update, and persist configuration. Sections
    missing from the YAML file fall back to ``DEFAULT_CONFIG`` key by key.
    """

    DEFAULT_CONFIG = {
        'thresholds': {
            'auto_select': 0.9,
            'accept': 0.7,
        },
        'weights': {
            'product_name': 0.4,
            'cas_number': 0.3,
            'manufacturer': 0.2,
            'content_match': 0.1,
        },
        'quality': {
            'readable_threshold': 30,
        },
        'extraction': {
            'section2_window': 3000,
            'section2_fallback': 2000,
            'section8_window': 2000,
            'max_p_codes': 20,
            'min_statement_length': 10,
            'first_aid_max_chars': 500,
            'locate_section8': True,
            'search_property_sections': True,
        },
        'batch': {
            'max_workers': 4,
        },
        'rules': {},
    }

    POSITIVE_INT_PARAMS = (
        'section2_window', 'section2_fallback', 'section8_window',
        'max_p_codes', 'min_statement_length', 'first_aid_max_chars',
    )

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)

    @classmethod
    def from_default_location(cls) -> 'ConfigManager':
        """Load ``config/classifier_config.yaml`` from the project root."""
        return cls(DEFAULT_CONFIG_PATH)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)

            if not loaded_config:
                logger.warning(f"Empty config file at {path}, using defaults")
                self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)
            else:
                self.config = self._merge_with_defaults(loaded_config)

            self.config_path = path
            logger.info(f"Loaded configuration from {path}")

            return self.config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

    def get_threshold(self, name: str) -> float:
        """
        Matcher threshold by name ('auto_select' or 'accept').

        Raises:
            KeyError: If the threshold is not configured
        """
        thresholds = self.config.get('thresholds', {})
        if name not in thresholds:
            raise KeyError(f"Unknown threshold '{name}'")
        return float(thresholds[name])

    def update_threshold(self, name: str, value: float) -> None:
        """Set one matcher threshold; see ``update_thresholds_bulk``."""
        self.update_thresholds_bulk({name: value})

    def update_thresholds_bulk(self, thresholds: dict[str, float]) -> None:
        """
        Set several matcher thresholds.

        Nothing is written unless every value lies in [0, 1].

        Raises:
            ValueError: If any value is out of range
        """
        out_of_range = {name: v for name, v in thresholds.items() if not 0.0 <= v <= 1.0}
        if out_of_range:
            raise ValueError(f"Thresholds must be between 0 and 1, got {out_of_range}")

        section = self.config.setdefault('thresholds', {})
        for name, value in thresholds.items():
            logger.info(f"Threshold '{name}': {section.get(name)} -> {value}")
            section[name] = value

    def get_weights(self) -> dict[str, float]:
        """Matcher scoring weights keyed by component name."""
        return {name: float(value) for name, value in self.config.get('weights', {}).items()}

    def get_extraction_param(self, name: str) -> Any:
        """
        Get an extraction parameter by name.

        Raises:
            KeyError: If parameter not found
        """
        if name not in self.config.get('extraction', {}):
            raise KeyError(f"Extraction parameter '{name}' not found in configuration")

        return self.config['extraction'][name]

    def get_quality_param(self, name: str) -> Any:
        if name not in self.config.get('quality', {}):
            raise KeyError(f"Quality parameter '{name}' not found in configuration")

        return self.config['quality'][name]

    def get_batch_param(self, name: str) -> Any:
        if name not in self.config.get('batch', {}):
            raise KeyError(f"Batch parameter '{name}' not found in configuration")

        return self.config['batch'][name]

    def get_rule_overrides(self) -> dict[str, Any]:
        """Rule table overrides for ``RuleSet.from_overrides`` (may be empty)."""
        return self._deep_copy_dict(self.config.get('rules') or {})

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(save_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    self.config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            logger.info(f"Saved configuration to {save_path}")

        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    def get_all_config(self) -> dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Full configuration dictionary
        """
        return self._deep_copy_dict(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = self._deep_copy_dict(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def _deep_copy_dict(self, d: dict) -> dict:
        """Deep copy a dictionary."""
        return copy.deepcopy(d)

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate thresholds
        thresholds = self.config.get('thresholds', {})
        for name, value in thresholds.items():
            if not isinstance(value, (int, float)):
                errors.append(f"Threshold '{name}' must be numeric, got {type(value)}")
            elif not 0.0 <= value <= 1.0:
                errors.append(f"Threshold '{name}' must be between 0 and 1, got {value}")

        # Validate weights
        weights = self.config.get('weights', {})
        if any(not isinstance(v, (int, float)) or v < 0 for v in weights.values()):
            errors.append("Weights must be non-negative numbers")
        elif weights and not math.isclose(sum(weights.values()), 1.0, abs_tol=1e-6):
            errors.append(f"Weights must sum to 1, got {sum(weights.values())}")

        readable = self.config.get('quality', {}).get('readable_threshold')
        if readable is not None and (not isinstance(readable, int) or not 0 <= readable <= 100):
            errors.append("readable_threshold must be an integer between 0 and 100")

        # Validate extraction parameters
        extraction = self.config.get('extraction', {})
        for name in self.POSITIVE_INT_PARAMS:
            if name in extraction:
                value = extraction[name]
                if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                    errors.append(f"{name} must be a positive integer")

        max_workers = self.config.get('batch', {}).get('max_workers')
        if max_workers is not None and (not isinstance(max_workers, int) or max_workers < 1):
            errors.append("max_workers must be a positive integer")

        return errors
