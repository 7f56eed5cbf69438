"""
Configuration Manager
=====================

This module implements the central configuration management for the toolkit.

The configuration manager is responsible for:
- Loading configuration from YAML/JSON files
- Merging hierarchical configurations
- Providing typed access to configuration values
- Validating configuration ranges

Configuration Hierarchy:
-----------------------
1. Default config (hardcoded below, mirrored in configs/default.yaml)
2. Loaded files, merged in load order
3. Runtime overrides (programmatic)

Each level overrides values from previous levels.

Example Usage:
    ```python
    from perceptron_ensemble.core.config import get_config

    config = get_config()
    config.load('configs/default.yaml')

    size = config.get_int('ensemble.size')          # 50
    config.set('ensemble.proportion', 0.7)

    ensemble_defaults = config.get_section('classifiers.perceptron_ensemble')
    ```
"""

from typing import Dict, List, Optional, Any, Union
from pathlib import Path
import yaml
import json
import logging
import threading
from copy import deepcopy

from perceptron_ensemble.core.exceptions import ConfigValidationError

# Configure logging
logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Central configuration manager.

    Implements the Singleton pattern with thread-safe access.

    Attributes:
        _instance: Singleton instance
        _lock: Thread lock
        _config: Hierarchical configuration dictionary
        _sources: Track which file each value came from
        _defaults: Default values
    """

    _instance: Optional['ConfigManager'] = None
    _lock: threading.Lock = threading.Lock()

    # =========================================================================
    # SINGLETON PATTERN
    # =========================================================================

    def __new__(cls) -> 'ConfigManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the configuration manager."""
        if self._initialized:
            return

        self._config: Dict[str, Any] = {}
        self._sources: Dict[str, str] = {}
        self._loaded_files: List[str] = []
        self._defaults: Dict[str, Any] = {}

        self._init_defaults()

        self._initialized = True
        logger.info("ConfigManager initialized")

    @classmethod
    def get_instance(cls) -> 'ConfigManager':
        """
        Get the singleton configuration manager.

        Returns:
            ConfigManager: The singleton instance
        """
        return cls()

    @classmethod
    def reset(cls) -> None:
        """Reset the configuration manager (mainly for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance._config.clear()
                cls._instance._sources.clear()
                cls._instance._loaded_files.clear()
                cls._instance._initialized = False
            cls._instance = None
        logger.info("ConfigManager reset")

    # =========================================================================
    # DEFAULT CONFIGURATION
    # =========================================================================

    def _init_defaults(self) -> None:
        """Initialize hardcoded default values."""
        self._defaults = {
            'project': {
                'name': 'perceptron-ensemble',
                'version': '1.0.0',
            },

            # Weight learning (both online and batch rules)
            'training': {
                'learning_rate': 1.0,
                'max_iterations': 1000,
                'bias': False,
                'target_encoding': 'signed',   # 'signed' or 'binary'
                'random_state': None,
            },

            'standardization': {
                'mode': 'zscore',              # 'zscore' or 'legacy'
                'zero_variance': 'raise',      # 'raise' or 'zero'
            },

            # Online vs batch choice by cross-validation
            'selection': {
                'n_folds': 10,
                'random_state': 1,
                'n_jobs': 1,
            },

            'ensemble': {
                'size': 50,
                'proportion': 0.5,             # fraction of features kept
                'n_jobs': 1,
                'random_state': None,
            },

            # Per-classifier presets used by ClassifierFactory
            'classifiers': {
                'perceptron': {
                    'algorithm': 'online',
                    'standardize': False,
                    'model_selection': False,
                },
                'enhanced_perceptron': {
                    'algorithm': 'online',
                    'standardize': True,
                    'model_selection': False,
                },
                'perceptron_ensemble': {
                    'member': {
                        'algorithm': 'online',
                        'standardize': True,
                        'model_selection': False,
                    },
                },
            },

            'benchmark': {
                'output_dir': 'results',
                'n_neighbors': 1,
                'random_state': 0,
            },

            'logging': {
                'level': 'INFO',
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'file': None,
            },
        }

        self._config = deepcopy(self._defaults)
        logger.debug("Default configuration initialized")

    # =========================================================================
    # LOADING CONFIGURATION
    # =========================================================================

    def load(self,
             path: Union[str, Path],
             merge: bool = True) -> 'ConfigManager':
        """
        Load configuration from a file.

        Args:
            path: Path to configuration file (YAML or JSON)
            merge: If True, merge with existing config. If False, replace.

        Returns:
            Self for method chaining

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        elif path.suffix.lower() == '.json':
            with open(path, 'r') as f:
                data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")

        if merge:
            self._merge_config(data, str(path))
        else:
            self._config = data
            self._sources = {k: str(path) for k in data}

        self._loaded_files.append(str(path))
        logger.info(f"Loaded configuration from {path}")

        return self

    def _merge_config(self,
                      new_config: Dict[str, Any],
                      source: str) -> None:
        """
        Deep merge new configuration into existing.

        Args:
            new_config: New configuration to merge
            source: Source identifier (file path)
        """
        def deep_merge(base: Dict, update: Dict, prefix: str = '') -> Dict:
            for key, value in update.items():
                full_key = f"{prefix}.{key}" if prefix else key

                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value, full_key)
                else:
                    base[key] = value
                    self._sources[full_key] = source

            return base

        deep_merge(self._config, new_config)

    # =========================================================================
    # ACCESSING CONFIGURATION
    # =========================================================================

    def get(self,
            key: str,
            default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'ensemble.size')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('ensemble.proportion')
            0.5
        """
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Get configuration value as integer."""
        value = self.get(key, default)
        return int(value) if value is not None else default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Get configuration value as float."""
        value = self.get(key, default)
        return float(value) if value is not None else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as boolean."""
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', 'yes', '1', 'on')
        return bool(value) if value is not None else default

    def get_section(self, key: str) -> Dict[str, Any]:
        """
        Get a configuration section as dictionary.

        Args:
            key: Section key (e.g., 'classifiers.perceptron')

        Returns:
            Configuration section as dict (deep copy)
        """
        value = self.get(key, {})
        return deepcopy(value) if isinstance(value, dict) else {}

    def get_source(self, key: str) -> str:
        """Get the source (file) where a value was defined."""
        return self._sources.get(key, 'default')

    # =========================================================================
    # MODIFYING CONFIGURATION
    # =========================================================================

    def set(self,
            key: str,
            value: Any,
            source: str = 'runtime') -> 'ConfigManager':
        """
        Set a configuration value.

        Args:
            key: Configuration key (dot notation)
            value: Value to set
            source: Source identifier

        Returns:
            Self for method chaining
        """
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        self._sources[key] = source

        logger.debug(f"Set {key} = {value}")
        return self

    def update(self,
               values: Dict[str, Any],
               source: str = 'runtime') -> 'ConfigManager':
        """Update multiple configuration values."""
        for key, value in values.items():
            self.set(key, value, source)
        return self

    # =========================================================================
    # SAVING CONFIGURATION
    # =========================================================================

    def save(self,
             path: Union[str, Path],
             sections: Optional[List[str]] = None) -> None:
        """
        Save configuration to a file.

        Args:
            path: Output file path
            sections: If specified, only save these sections
        """
        path = Path(path)

        if sections:
            data = {s: self.get_section(s) for s in sections}
        else:
            data = deepcopy(self._config)

        path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'w') as f:
                yaml.safe_dump(data, f, default_flow_style=False)
        elif path.suffix.lower() == '.json':
            with open(path, 'w') as f:
                json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {path.suffix}")

        logger.info(f"Saved configuration to {path}")

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self) -> List[str]:
        """
        Validate configuration ranges.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        proportion = self.get('ensemble.proportion')
        if proportion is None or not 0 < proportion <= 1:
            errors.append(f"ensemble.proportion must be in (0, 1], got {proportion}")

        size = self.get('ensemble.size')
        if not isinstance(size, int) or size < 1:
            errors.append(f"ensemble.size must be a positive integer, got {size}")

        max_iterations = self.get('training.max_iterations')
        if not isinstance(max_iterations, int) or max_iterations < 1:
            errors.append(
                f"training.max_iterations must be a positive integer, got {max_iterations}"
            )

        learning_rate = self.get('training.learning_rate')
        if learning_rate is None or learning_rate <= 0:
            errors.append(f"training.learning_rate must be > 0, got {learning_rate}")

        mode = self.get('standardization.mode')
        if mode not in ('zscore', 'legacy'):
            errors.append(f"standardization.mode must be 'zscore' or 'legacy', got {mode}")

        return errors

    def assert_valid(self) -> None:
        """
        Raise if the configuration is invalid.

        Raises:
            ConfigValidationError: With every failing check
        """
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)

    def summary(self) -> str:
        """Get configuration summary."""
        lines = [
            "Configuration Summary",
            "=" * 40,
            f"Loaded files: {len(self._loaded_files)}",
        ]

        for file in self._loaded_files:
            lines.append(f"  - {file}")

        lines.append("\nKey Settings:")
        lines.append(f"  - Max iterations: {self.get('training.max_iterations')}")
        lines.append(f"  - Standardization: {self.get('standardization.mode')}")
        lines.append(f"  - Ensemble size: {self.get('ensemble.size')}")
        lines.append(f"  - Feature proportion: {self.get('ensemble.proportion')}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ConfigManager(files={len(self._loaded_files)})"

    def __getitem__(self, key: str) -> Any:
        """Allow dict-style access: config['key']."""
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        """Allow dict-style setting: config['key'] = value."""
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        """Allow 'key in config' syntax."""
        return self.get(key) is not None


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_config() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    return ConfigManager.get_instance()


def load_config(path: Union[str, Path]) -> ConfigManager:
    """Load configuration from file into the singleton."""
    return get_config().load(path)
