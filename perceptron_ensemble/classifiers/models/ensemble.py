"""
BaggedEnsemble - Random-Subspace Ensemble of Linear Classifiers
===============================================================

Each of ``size`` members (default 50) is a LinearClassifier trained on a
random subset of the features. The members vote and the majority wins.

Feature subsets:
---------------
``floor(n_features * (1 - proportion))`` distinct feature indices are
excluded per member (``proportion`` is the fraction kept, default 0.5).
Indices are drawn uniformly with retry-on-collision from the member's own
generator. The draw has a fixed attempt budget; a request that cannot be
satisfied raises ExhaustedRandomDrawError instead of looping.

The kept-index set of every member is computed once from its exclusions and
used both for training and for projecting query instances, so the order in
which columns are dropped never matters.

Voting:
------
- Each member votes 0 or 1
- Class 0 wins only with strictly more votes; ties go to class 1
- predict_proba returns the vote fractions

Reproducibility:
---------------
Member seeds come from ``np.random.SeedSequence(random_state).spawn(size)``,
so training members on a thread pool (``n_jobs > 1``) gives the same model
as training them one after another.

Example:
    ```python
    from perceptron_ensemble.classifiers import BaggedEnsemble

    ensemble = BaggedEnsemble()
    ensemble.initialize({'size': 25, 'proportion': 0.5, 'random_state': 42,
                         'n_jobs': 4})
    ensemble.fit(X_train, y_train)

    labels = ensemble.predict(X_test)
    votes = ensemble.vote_counts(X_test)      # (n_samples, 2)
    ```
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Any, Tuple
import numpy as np
import logging

from perceptron_ensemble.core.registry import registered
from perceptron_ensemble.core.types.model import FeatureMask
from perceptron_ensemble.core.exceptions import ExhaustedRandomDrawError
from perceptron_ensemble.utils.parallel import run_parallel
from perceptron_ensemble.utils.validation import check_type, validate_config_value
from perceptron_ensemble.classifiers.base import BaseClassifier
from perceptron_ensemble.classifiers.models.linear import LinearClassifier


logger = logging.getLogger(__name__)


# Attempts per requested exclusion before the draw is abandoned
DRAW_ATTEMPTS_PER_INDEX = 100


@dataclass(frozen=True)
class EnsembleMember:
    """A trained member and the features it was trained without."""
    classifier: LinearClassifier
    mask: FeatureMask


def n_excluded_features(n_features: int, proportion: float) -> int:
    """Number of features left out of each member."""
    return int(np.floor(n_features * (1.0 - proportion)))


def draw_excluded_features(n_features: int,
                           n_exclude: int,
                           rng: np.random.Generator,
                           max_attempts: Optional[int] = None) -> Tuple[int, ...]:
    """
    Draw ``n_exclude`` distinct feature indices with retry-on-collision.

    Args:
        n_features: Number of available features
        n_exclude: Number of distinct indices to draw
        rng: Member generator
        max_attempts: Total draw budget (default: 100 per requested index)

    Returns:
        Sorted tuple of excluded indices

    Raises:
        ExhaustedRandomDrawError: If fewer than one feature would remain or
            the budget runs out
    """
    if n_exclude < 0:
        raise ExhaustedRandomDrawError(n_exclude, n_features, "negative exclusion count")
    if n_exclude >= n_features:
        raise ExhaustedRandomDrawError(
            n_exclude, n_features, "at least one feature must remain per member"
        )

    if max_attempts is None:
        max_attempts = DRAW_ATTEMPTS_PER_INDEX * max(n_exclude, 1)

    excluded = set()
    attempts = 0
    while len(excluded) < n_exclude:
        if attempts >= max_attempts:
            raise ExhaustedRandomDrawError(
                n_exclude, n_features, f"draw budget of {max_attempts} attempts used up"
            )
        attempts += 1
        excluded.add(int(rng.integers(n_features)))

    return tuple(sorted(excluded))


@registered('classifier', 'perceptron_ensemble',
            metadata={'description': 'Majority vote over random feature subsets'})
class BaggedEnsemble(BaseClassifier):
    """
    Majority-vote ensemble of LinearClassifiers on random feature subsets.

    Configuration Options:
        - size: Number of members (default: 50)
        - proportion: Fraction of features kept per member (default: 0.5)
        - n_jobs: Members trained concurrently (default: 1)
        - random_state: Seed for feature draws and member weights
        - max_draw_attempts: Draw budget per member (default: 100 per index)
        - member: LinearClassifier configuration for every member

    Attributes:
        _members: Trained EnsembleMembers, in member order
    """

    def __init__(self):
        super().__init__()
        self._members: List[EnsembleMember] = []
        self._initialize_implementation(self._config)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def name(self) -> str:
        return 'perceptron_ensemble'

    @property
    def size(self) -> int:
        return self._config['size']

    @property
    def proportion(self) -> float:
        return self._config['proportion']

    @property
    def members_(self) -> List[EnsembleMember]:
        return list(self._members)

    @property
    def masks_(self) -> List[FeatureMask]:
        return [member.mask for member in self._members]

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def _default_config(self) -> Dict[str, Any]:
        return {
            'size': 50,
            'proportion': 0.5,
            'n_jobs': 1,
            'random_state': None,
            'max_draw_attempts': None,
            'member': {
                'algorithm': 'online',
                'standardize': True,
                'model_selection': False,
            },
        }

    def _initialize_implementation(self, config: Dict[str, Any]) -> None:
        validate_config_value(config, 'size', expected_type=int, min_val=1)
        validate_config_value(config, 'proportion', expected_type=(int, float),
                              min_val=0.0, max_val=1.0)
        validate_config_value(config, 'n_jobs', expected_type=int)
        check_type(config.get('member', {}), dict, name='member')

    # =========================================================================
    # TRAINING
    # =========================================================================

    def _fit_implementation(self, X: np.ndarray, y: np.ndarray, **kwargs) -> None:
        n_features = X.shape[1]
        n_exclude = n_excluded_features(n_features, self.proportion)

        logger.info(
            f"Training {self.size} members on {n_features - n_exclude}/{n_features} "
            f"features each"
        )

        member_seeds = np.random.SeedSequence(self._random_state).spawn(self.size)
        max_attempts = self._config.get('max_draw_attempts')

        def train_member(seed: np.random.SeedSequence) -> EnsembleMember:
            mask_seed, weight_seed = seed.spawn(2)
            excluded = draw_excluded_features(
                n_features, n_exclude, np.random.default_rng(mask_seed), max_attempts
            )
            mask = FeatureMask(excluded=excluded, n_features=n_features)

            member_config = dict(self._config.get('member', {}))
            member_config['random_state'] = int(weight_seed.generate_state(1)[0])

            classifier = LinearClassifier()
            classifier.initialize(member_config)
            classifier.fit(mask.apply(X), y)
            return EnsembleMember(classifier=classifier, mask=mask)

        self._members = run_parallel(train_member, member_seeds,
                                     n_jobs=self._config['n_jobs'])

        self._training_history = {
            'member_epochs': [m.classifier.weights_.n_epochs for m in self._members],
            'member_converged': [m.classifier.weights_.converged for m in self._members],
            'member_algorithm': [m.classifier.algorithm_ for m in self._members],
        }
        self._metadata['size'] = self.size
        self._metadata['features_per_member'] = n_features - n_exclude

        logger.info(
            f"Ensemble trained: {sum(self._training_history['member_converged'])}"
            f"/{self.size} members converged"
        )

    # =========================================================================
    # PREDICTION
    # =========================================================================

    def _member_predictions(self, X: np.ndarray) -> np.ndarray:
        """Votes of every member, shape (size, n_samples)."""
        return np.vstack([
            member.classifier.predict(member.mask.apply(X)) for member in self._members
        ])

    def _votes(self, X: np.ndarray) -> np.ndarray:
        predictions = self._member_predictions(X)
        votes_1 = np.sum(predictions == 1, axis=0)
        votes_0 = np.sum(predictions == 0, axis=0)
        return np.column_stack([votes_0, votes_1])

    def vote_counts(self, X: np.ndarray) -> np.ndarray:
        """
        Tally member votes.

        Returns:
            Integer array (n_samples, 2): votes for class 0 and class 1.
            Each row sums to ``size``.
        """
        X = self._validate_prediction_input(X)
        return self._votes(X)

    def _predict_implementation(self, X: np.ndarray) -> np.ndarray:
        votes = self._votes(X)
        return np.where(votes[:, 0] > votes[:, 1], 0, 1).astype(np.int64)

    def _predict_proba_implementation(self, X: np.ndarray) -> np.ndarray:
        return self._votes(X) / float(len(self._members))
