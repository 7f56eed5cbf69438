"""
Training Module
===============

Weight-learning rules for linear classifiers.

- OnlineTrainer: perceptron rule, per-instance updates, early stop
- BatchTrainer: accumulated updates, one per epoch, fixed epoch count
- ModelSelector: cross-validated choice between the two

Trainers register themselves under the 'trainer' category so they can be
resolved by name:

    ```python
    from perceptron_ensemble.core import get_registry

    trainer = get_registry().create('trainer', 'batch', {'max_iterations': 200})
    ```
"""

from perceptron_ensemble.training.base import BaseTrainer, TARGET_ENCODINGS
from perceptron_ensemble.training.online import OnlineTrainer
from perceptron_ensemble.training.batch import BatchTrainer
from perceptron_ensemble.training.selection import ModelSelector, ALGORITHMS

__all__ = [
    'BaseTrainer',
    'TARGET_ENCODINGS',
    'OnlineTrainer',
    'BatchTrainer',
    'ModelSelector',
    'ALGORITHMS',
]
