"""
Utilities Module
================

Common helpers shared by the toolkit.

Available Modules:
-----------------
- logging: Centralized logging configuration
- validation: Argument and array validation
- parallel: Ordered thread-pool execution

Example Usage:
    ```python
    from perceptron_ensemble.utils import (
        setup_logging, get_logger, validate_features, run_parallel
    )

    setup_logging(level='INFO')
    logger = get_logger(__name__)

    X = validate_features(X)
    ```
"""

# =============================================================================
# Logging Utilities
# =============================================================================
from perceptron_ensemble.utils.logging import (
    setup_logging,
    setup_logging_from_config,
    get_logger,
    set_level,
    log_execution_time,
    LogLevel,
    ColoredFormatter,
)

# =============================================================================
# Validation Utilities
# =============================================================================
from perceptron_ensemble.utils.validation import (
    check_type,
    check_range,
    check_positive,
    check_probability,
    check_choice,
    validate_config_value,
    validate_array,
    validate_features,
    validate_binary_labels,
    ensure_2d,
    validate_same_length,
)

# =============================================================================
# Parallel Execution
# =============================================================================
from perceptron_ensemble.utils.parallel import (
    run_parallel,
    resolve_workers,
)

__all__ = [
    # Logging
    'setup_logging',
    'setup_logging_from_config',
    'get_logger',
    'set_level',
    'log_execution_time',
    'LogLevel',
    'ColoredFormatter',

    # Validation
    'check_type',
    'check_range',
    'check_positive',
    'check_probability',
    'check_choice',
    'validate_config_value',
    'validate_array',
    'validate_features',
    'validate_binary_labels',
    'ensure_2d',
    'validate_same_length',

    # Parallel
    'run_parallel',
    'resolve_workers',
]
