"""
Classifier Factory - Dynamic Classifier Creation
================================================

This module provides a factory for creating classifier instances by name,
with defaults taken from the global ConfigManager.

Supported Classifiers:
    - 'perceptron': Plain perceptron on raw features
    - 'enhanced_perceptron': Standardized linear model, online/batch rule
    - 'perceptron_ensemble': Majority vote over random feature subsets

Default resolution (later entries win):
    1. Class defaults
    2. ``training``, ``standardization`` and ``selection`` config sections
    3. ``ensemble`` section (ensemble only)
    4. ``classifiers.<name>`` section
    5. Keyword arguments passed to create()

Example:
    ```python
    from perceptron_ensemble.classifiers.factory import ClassifierFactory

    clf = ClassifierFactory.create('enhanced_perceptron', algorithm='batch')

    ensemble = ClassifierFactory.create('perceptron_ensemble', size=25,
                                        random_state=42)

    config = {'name': 'perceptron', 'max_iterations': 200}
    clf = ClassifierFactory.from_config(config)
    ```
"""

from typing import Dict, Any, Optional, Type, List
import logging

from perceptron_ensemble.core.config import get_config
from perceptron_ensemble.core.exceptions import ComponentNotFoundError
from .base import BaseClassifier
from .models.linear import LinearClassifier, Perceptron
from .models.ensemble import BaggedEnsemble


logger = logging.getLogger(__name__)


# =============================================================================
# CLASSIFIER REGISTRY
# =============================================================================

_CLASSIFIER_REGISTRY: Dict[str, Type[BaseClassifier]] = {
    'perceptron': Perceptron,
    'enhanced_perceptron': LinearClassifier,
    'perceptron_ensemble': BaggedEnsemble,
}

# Extra defaults for classifiers registered at runtime
_DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {}


def _linear_defaults() -> Dict[str, Any]:
    """LinearClassifier settings drawn from the shared config sections."""
    config = get_config()
    training = config.get_section('training')
    standardization = config.get_section('standardization')
    selection = config.get_section('selection')

    return {
        'learning_rate': training.get('learning_rate', 1.0),
        'max_iterations': training.get('max_iterations', 1000),
        'bias': training.get('bias', False),
        'target_encoding': training.get('target_encoding', 'signed'),
        'random_state': training.get('random_state'),
        'standardization_mode': standardization.get('mode', 'zscore'),
        'zero_variance': standardization.get('zero_variance', 'raise'),
        'selection_folds': selection.get('n_folds', 10),
        'selection_seed': selection.get('random_state', 1),
        'selection_n_jobs': selection.get('n_jobs', 1),
    }


def _config_defaults(name: str) -> Dict[str, Any]:
    """Defaults for a classifier from the global configuration."""
    config = get_config()
    section = config.get_section(f'classifiers.{name}')

    if name == 'perceptron_ensemble':
        ensemble = config.get_section('ensemble')
        defaults = {
            'size': ensemble.get('size', 50),
            'proportion': ensemble.get('proportion', 0.5),
            'n_jobs': ensemble.get('n_jobs', 1),
            'random_state': ensemble.get('random_state'),
        }
        member = _linear_defaults()
        member.pop('random_state')
        member.update(section.pop('member', {}))
        defaults['member'] = member
    elif name in ('perceptron', 'enhanced_perceptron'):
        defaults = _linear_defaults()
    else:
        defaults = {}

    defaults.update(_DEFAULT_CONFIGS.get(name, {}))
    defaults.update(section)
    return defaults


# =============================================================================
# CLASSIFIER FACTORY
# =============================================================================

class ClassifierFactory:
    """
    Factory class for creating classifier instances.

    Class Methods:
        - create: Create classifier by name with kwargs
        - from_config: Create classifier from configuration dict
        - register: Register new classifier type
        - list_classifiers: List available classifiers
        - get_default_config: Get resolved default config for classifier
        - get_classifier_info: Get information about classifier
    """

    @classmethod
    def create(cls, name: str, **kwargs) -> BaseClassifier:
        """
        Create and initialize a classifier by name.

        Args:
            name: Classifier name
            **kwargs: Classifier-specific parameters (override config)

        Returns:
            Initialized classifier instance

        Raises:
            ComponentNotFoundError: If classifier name is not registered

        Example:
            >>> clf = ClassifierFactory.create('perceptron', max_iterations=100)
        """
        name = name.lower()

        if name not in _CLASSIFIER_REGISTRY:
            raise ComponentNotFoundError('classifier', name, list(_CLASSIFIER_REGISTRY))

        config = _config_defaults(name)
        member_overrides = kwargs.pop('member', None)
        config.update(kwargs)
        if member_overrides:
            config['member'] = {**config.get('member', {}), **member_overrides}

        classifier = _CLASSIFIER_REGISTRY[name]()
        classifier.initialize(config)

        logger.debug(f"Created {name} classifier with config: {config}")
        return classifier

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> BaseClassifier:
        """
        Create classifier from configuration dictionary.

        Args:
            config: Configuration dict with 'name' (or 'type') key and parameters
        """
        config = config.copy()
        name = config.pop('name', config.pop('type', None))

        if name is None:
            raise ValueError("Config must contain 'name' or 'type' key")

        return cls.create(name, **config)

    @classmethod
    def register(cls,
                 name: str,
                 classifier_cls: Type[BaseClassifier],
                 default_config: Optional[Dict[str, Any]] = None) -> None:
        """
        Register a new classifier type.

        Args:
            name: Unique name for the classifier
            classifier_cls: Classifier class (must inherit from BaseClassifier)
            default_config: Default configuration parameters
        """
        name = name.lower()

        if not issubclass(classifier_cls, BaseClassifier):
            raise TypeError(
                f"Classifier class must inherit from BaseClassifier, "
                f"got {classifier_cls}"
            )

        _CLASSIFIER_REGISTRY[name] = classifier_cls
        if default_config is not None:
            _DEFAULT_CONFIGS[name] = dict(default_config)

        logger.info(f"Registered classifier: {name}")

    @classmethod
    def list_classifiers(cls) -> List[str]:
        """List available classifier names."""
        return list(_CLASSIFIER_REGISTRY.keys())

    @classmethod
    def get_default_config(cls, name: str) -> Dict[str, Any]:
        """Resolved default configuration for a classifier."""
        name = name.lower()
        if name not in _CLASSIFIER_REGISTRY:
            raise ComponentNotFoundError('classifier', name, list(_CLASSIFIER_REGISTRY))
        return _config_defaults(name)

    @classmethod
    def get_classifier_info(cls, name: str) -> Dict[str, Any]:
        """Name, class, defaults and docstring of a classifier."""
        default_config = cls.get_default_config(name)
        classifier_cls = _CLASSIFIER_REGISTRY[name.lower()]
        return {
            'name': name.lower(),
            'class': classifier_cls.__name__,
            'default_config': default_config,
            'docstring': classifier_cls.__doc__,
        }

    @classmethod
    def is_available(cls, name: str) -> bool:
        return name.lower() in _CLASSIFIER_REGISTRY


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_classifier(name: str, **kwargs) -> BaseClassifier:
    """Shortcut for ClassifierFactory.create()."""
    return ClassifierFactory.create(name, **kwargs)


def create_perceptron(**kwargs) -> Perceptron:
    """
    Plain perceptron: raw features, online rule.

    Example:
        >>> clf = create_perceptron(random_state=0)
    """
    return ClassifierFactory.create('perceptron', **kwargs)


def create_enhanced_perceptron(algorithm: str = 'online',
                               model_selection: bool = False,
                               **kwargs) -> LinearClassifier:
    """
    Standardized linear classifier.

    Args:
        algorithm: 'online' or 'batch' (ignored when model_selection is True)
        model_selection: Choose the rule by cross-validation
    """
    return ClassifierFactory.create(
        'enhanced_perceptron',
        algorithm=algorithm,
        model_selection=model_selection,
        **kwargs
    )


def create_ensemble(size: Optional[int] = None,
                    proportion: Optional[float] = None,
                    **kwargs) -> BaggedEnsemble:
    """
    Random-subspace ensemble.

    Args:
        size: Number of members (config default: 50)
        proportion: Fraction of features kept per member (config default: 0.5)
        **kwargs: Other ensemble options; 'member' holds member settings

    Example:
        >>> ensemble = create_ensemble(size=10, random_state=7,
        ...                            member={'algorithm': 'batch'})
    """
    if size is not None:
        kwargs['size'] = size
    if proportion is not None:
        kwargs['proportion'] = proportion
    return ClassifierFactory.create('perceptron_ensemble', **kwargs)
