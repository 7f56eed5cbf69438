"""
Component Registry
==================

This module implements the central component registry for the toolkit.

The registry is responsible for:
- Managing all pluggable components (trainers, classifiers, loaders)
- Dynamic component instantiation based on configuration
- Component discovery by name

Design Pattern: Service Locator + Factory
----------------------------------------
Learning rules are looked up by name ('online', 'batch'), so a classifier
configured with ``algorithm: batch`` never imports a concrete trainer class.

Component Categories:
--------------------
- trainer: Weight-learning rules (online, batch)
- classifier: Classification models (perceptron, ensemble)
- preprocessor: Feature preprocessing (standardizer)
- data_loader: Dataset loaders (arff)

Example Usage:
    ```python
    from perceptron_ensemble.core.registry import get_registry

    registry = get_registry()
    trainer = registry.create('trainer', 'online', {'max_iterations': 200})
    print(registry.list('trainer'))
    # ['online', 'batch']
    ```
"""

from typing import Dict, List, Optional, Any, Type, Callable, Union
from collections import defaultdict
import logging
import threading

from perceptron_ensemble.core.exceptions import (
    PerceptronEnsembleError,
    ComponentError,
    ComponentNotFoundError,
    RegistrationError,
)

# Configure logging
logger = logging.getLogger(__name__)


class ComponentRegistry:
    """
    Central registry for all toolkit components.

    Implements the Singleton pattern to ensure a single registry instance.
    Thread-safe for concurrent access.

    Component Registration:
        Components can be registered as:
        1. Class: Will be instantiated (and initialized with config) when created
        2. Factory function: Will be called with the config to create an instance
    """

    _instance: Optional['ComponentRegistry'] = None
    _lock: threading.Lock = threading.Lock()

    # =========================================================================
    # SINGLETON PATTERN
    # =========================================================================

    def __new__(cls) -> 'ComponentRegistry':
        """Singleton pattern implementation."""
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the registry (only once for singleton)."""
        if self._initialized:
            return

        # category -> name -> class/factory
        self._components: Dict[str, Dict[str, Any]] = defaultdict(dict)

        # category -> name -> callable
        self._factories: Dict[str, Dict[str, Callable]] = defaultdict(dict)

        # category -> name -> metadata dict
        self._metadata: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)

        self._categories: List[str] = [
            'trainer',
            'classifier',
            'preprocessor',
            'data_loader',
        ]

        self._initialized = True
        logger.info("ComponentRegistry initialized")

    @classmethod
    def get_instance(cls) -> 'ComponentRegistry':
        """Get the singleton registry instance."""
        return cls()

    # =========================================================================
    # REGISTRATION METHODS
    # =========================================================================

    def register(self,
                 category: str,
                 name: str,
                 component: Union[Type, Callable],
                 metadata: Optional[Dict[str, Any]] = None,
                 overwrite: bool = False) -> 'ComponentRegistry':
        """
        Register a component with the registry.

        Args:
            category: Component category (e.g., 'trainer', 'classifier')
            name: Unique name within the category
            component: Component class or factory function
            metadata: Optional metadata (description, etc.)
            overwrite: Whether to overwrite existing registration

        Returns:
            Self for method chaining

        Raises:
            RegistrationError: If category is invalid or name already taken
        """
        if category not in self._categories:
            raise RegistrationError(
                category, name,
                f"Invalid category. Valid categories: {self._categories}"
            )

        with self._lock:
            existing = self._components[category].get(name)
            if existing is not None and existing is not component and not overwrite:
                raise RegistrationError(
                    category, name, "A different component is already registered"
                )

            self._components[category][name] = component
            if not isinstance(component, type):
                self._factories[category][name] = component

            default_metadata = {
                'name': name,
                'category': category,
                'type': 'class' if isinstance(component, type) else 'factory',
                'module': getattr(component, '__module__', 'unknown'),
                'class_name': getattr(component, '__name__', str(component)),
            }
            self._metadata[category][name] = {**default_metadata, **(metadata or {})}

        logger.debug(f"Registered {category}/{name}")
        return self

    def unregister(self, category: str, name: str) -> 'ComponentRegistry':
        """Remove a component from the registry."""
        with self._lock:
            if name in self._components.get(category, {}):
                del self._components[category][name]
                self._metadata[category].pop(name, None)
                self._factories[category].pop(name, None)
                logger.debug(f"Unregistered {category}/{name}")

        return self

    # =========================================================================
    # COMPONENT CREATION
    # =========================================================================

    def create(self,
               category: str,
               name: str,
               config: Optional[Dict[str, Any]] = None,
               **kwargs) -> Any:
        """
        Create a component instance.

        Args:
            category: Component category
            name: Component name
            config: Configuration dictionary for initialization
            **kwargs: Additional arguments passed to constructor

        Returns:
            Component instance

        Raises:
            ComponentNotFoundError: If component is not registered
            ComponentError: If instantiation fails for a non-toolkit reason
        """
        if not self.has(category, name):
            raise ComponentNotFoundError(category, name, self.list(category))

        component = self._components[category][name]
        config = config or {}

        try:
            if name in self._factories.get(category, {}):
                instance = self._factories[category][name](config, **kwargs)
            else:
                instance = component(**kwargs)
                if hasattr(instance, 'initialize'):
                    instance.initialize(config)
        except PerceptronEnsembleError:
            raise
        except (TypeError, ValueError) as e:
            raise ComponentError(
                f"Failed to create component '{category}/{name}'", str(e)
            ) from e

        logger.debug(f"Created {category}/{name}")
        return instance

    # =========================================================================
    # QUERY METHODS
    # =========================================================================

    def list(self, category: Optional[str] = None) -> Union[List[str], Dict[str, List[str]]]:
        """
        List registered components.

        Args:
            category: If specified, list only this category.

        Returns:
            List of names, or dict of category -> names
        """
        if category:
            return list(self._components.get(category, {}).keys())
        return {
            cat: list(comps.keys())
            for cat, comps in self._components.items()
            if comps
        }

    def get(self, category: str, name: str) -> Any:
        """
        Get a registered component (class/factory, not instance).

        Raises:
            ComponentNotFoundError: If not found
        """
        if not self.has(category, name):
            raise ComponentNotFoundError(category, name, self.list(category))
        return self._components[category][name]

    def has(self, category: str, name: str) -> bool:
        """Check if a component is registered."""
        return name in self._components.get(category, {})

    def get_metadata(self,
                     category: str,
                     name: str) -> Dict[str, Any]:
        """Get component metadata."""
        return self._metadata.get(category, {}).get(name, {})

    def summary(self) -> str:
        """Get a summary of registered components."""
        lines = ["Component Registry Summary", "=" * 40]

        for category in sorted(self._categories):
            components = self.list(category)
            if components:
                lines.append(f"\n{category}:")
                for name in sorted(components):
                    meta = self.get_metadata(category, name)
                    desc = meta.get('description', 'No description')
                    lines.append(f"  - {name}: {desc}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        total = sum(len(c) for c in self._components.values())
        return f"ComponentRegistry(components={total})"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_registry() -> ComponentRegistry:
    """Get the singleton ComponentRegistry instance."""
    return ComponentRegistry.get_instance()


def create(category: str,
           name: str,
           config: Optional[Dict[str, Any]] = None,
           **kwargs) -> Any:
    """Create a component from the global registry."""
    return get_registry().create(category, name, config, **kwargs)


# =============================================================================
# DECORATOR FOR REGISTRATION
# =============================================================================

def registered(category: str,
               name: Optional[str] = None,
               metadata: Optional[Dict[str, Any]] = None):
    """
    Decorator for automatic component registration.

    Args:
        category: Component category
        name: Component name (defaults to lowercase class name)
        metadata: Optional metadata

    Example:
        >>> @registered('trainer', 'online')
        ... class OnlineTrainer(BaseTrainer):
        ...     pass
    """
    def decorator(cls):
        component_name = name or cls.__name__.lower()
        get_registry().register(category, component_name, cls, metadata)
        return cls

    return decorator
