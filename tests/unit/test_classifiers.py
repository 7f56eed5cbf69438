"""
Unit Tests for Classifiers
==========================

This module contains unit tests for the linear classifiers, the
random-subspace ensemble and the classifier factory.

Test Coverage:
- LinearClassifier: training, decision rule, standardization, selection
- Perceptron: raw-feature preset restrictions
- BaggedEnsemble: feature draws, voting, seeding, parallel training
- ClassifierFactory: creation by name, config defaults, registration

Run tests:
    pytest tests/unit/test_classifiers.py -v
"""

import pytest
import numpy as np

from perceptron_ensemble.core.config import get_config
from perceptron_ensemble.core.types.dataset import Dataset, NOMINAL, NUMERIC
from perceptron_ensemble.core.exceptions import (
    ComponentNotFoundError,
    DegenerateStandardizationError,
    ExhaustedRandomDrawError,
    InvalidInputKindError,
    ModelNotFittedError,
    PredictionError,
)
from perceptron_ensemble.classifiers import (
    BaseClassifier,
    BaggedEnsemble,
    ClassifierFactory,
    LinearClassifier,
    Perceptron,
    create_classifier,
    create_enhanced_perceptron,
    create_ensemble,
    create_perceptron,
)
from perceptron_ensemble.classifiers.models.ensemble import (
    DRAW_ATTEMPTS_PER_INDEX,
    draw_excluded_features,
    n_excluded_features,
)


# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture
def small_member():
    """Cheap member settings for ensemble tests."""
    return {'max_iterations': 20}


@pytest.fixture
def fitted_ensemble(random_data, small_member):
    X, y = random_data
    ensemble = BaggedEnsemble()
    ensemble.initialize({'size': 7, 'proportion': 0.5, 'random_state': 3,
                         'member': small_member})
    ensemble.fit(X, y)
    return ensemble


# =============================================================================
# LINEAR CLASSIFIER TESTS
# =============================================================================

class TestLinearClassifier:
    """Test suite for LinearClassifier."""

    def test_creation(self):
        clf = LinearClassifier()
        assert clf.name == 'enhanced_perceptron'
        assert not clf.is_fitted
        assert clf.config['algorithm'] == 'online'
        assert clf.config['standardize'] is True
        assert clf.weights_ is None
        np.testing.assert_array_equal(clf.classes_, [0, 1])

    def test_separable_data_held_out(self, separable_data):
        X_train, y_train, X_test, y_test = separable_data
        clf = LinearClassifier()
        clf.initialize({'standardize': False, 'random_state': 0})
        clf.fit(X_train, y_train)

        assert clf.weights_.converged
        np.testing.assert_array_equal(clf.predict(X_test), y_test)
        np.testing.assert_array_equal(clf.predict(X_train), y_train)

    def test_batch_rule_on_separable_data(self, separable_data):
        X_train, y_train, X_test, y_test = separable_data
        clf = LinearClassifier()
        clf.initialize({'algorithm': 'batch', 'standardize': False,
                        'max_iterations': 50, 'random_state': 0})
        clf.fit(X_train, y_train)

        assert clf.algorithm_ == 'batch'
        assert clf.weights_.n_epochs == 50
        np.testing.assert_array_equal(clf.predict(X_test), y_test)

    def test_xor_reports_not_converged(self, xor_data):
        X, y = xor_data
        clf = LinearClassifier()
        clf.initialize({'standardize': False, 'random_state': 0})
        clf.fit(X, y)
        assert clf.weights_.n_epochs == 1000
        assert not clf.weights_.converged
        assert clf.get_training_history()['converged'] == [False]

    def test_decision_rule(self, separable_data):
        X, y, _, _ = separable_data
        clf = LinearClassifier()
        clf.initialize({'standardize': False, 'random_state': 0})
        clf.fit(X, y)

        w = clf.weights_.weights
        expected = (X @ w > w.sum()).astype(int)
        np.testing.assert_array_equal(clf.predict(X), expected)
        np.testing.assert_array_equal(clf.decision_function(X) > 0, expected == 1)

    def test_standardized_decision_rule(self, separable_data):
        X_train, y_train, X_test, _ = separable_data
        clf = LinearClassifier()
        clf.initialize({'random_state': 0})
        clf.fit(X_train, y_train)

        params = clf.standardization_params_
        w = clf.weights_.weights
        Z = (X_train - params.means) / params.stds
        # threshold sum(w) in z-space puts the boundary at z = 1, not the mean
        np.testing.assert_allclose(clf.decision_function(X_train), (Z - 1.0) @ w)

        # class 1 points within one std of the mean land on the class 0 side
        np.testing.assert_array_equal(clf.predict(X_train), [0, 0, 1, 1, 0, 0, 0, 0])
        np.testing.assert_array_equal(clf.predict(X_test), [0, 1, 0, 0])

    def test_predict_proba_is_one_hot(self, random_data):
        X, y = random_data
        clf = LinearClassifier()
        clf.initialize({'max_iterations': 20, 'random_state': 0})
        clf.fit(X, y)

        proba = clf.predict_proba(X)
        labels = clf.predict(X)
        assert proba.shape == (len(X), 2)
        np.testing.assert_array_equal(proba.sum(axis=1), 1.0)
        np.testing.assert_array_equal(proba.argmax(axis=1), labels)

    def test_standardization_params(self, random_data):
        X, y = random_data
        clf = LinearClassifier()
        clf.initialize({'max_iterations': 10, 'random_state': 0})
        clf.fit(X, y)

        params = clf.standardization_params_
        np.testing.assert_allclose(params.means, X.mean(axis=0))
        np.testing.assert_allclose(params.stds, X.std(axis=0))

    def test_predict_does_not_modify_input(self, random_data):
        X, y = random_data
        clf = LinearClassifier()
        clf.initialize({'max_iterations': 10, 'random_state': 0})
        clf.fit(X, y)

        original = X.copy()
        clf.predict(X)
        clf.predict_proba(X)
        np.testing.assert_array_equal(X, original)

    def test_single_instance_prediction(self, separable_data):
        X, y, X_test, y_test = separable_data
        clf = LinearClassifier()
        clf.initialize({'standardize': False, 'random_state': 0})
        clf.fit(X, y)

        assert clf.predict_one(X_test[0]) == 1
        assert clf.predict_one(X_test[3]) == 0
        np.testing.assert_array_equal(clf.distribution_for_instance(X_test[0]), [0.0, 1.0])

    def test_same_seed_same_model(self, random_data):
        X, y = random_data
        a = create_enhanced_perceptron(max_iterations=15, random_state=4).fit(X, y)
        b = create_enhanced_perceptron(max_iterations=15, random_state=4).fit(X, y)
        np.testing.assert_array_equal(a.weights_.weights, b.weights_.weights)

    def test_constant_column_raises(self):
        X = np.array([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0], [4.0, 5.0]])
        y = np.array([0, 0, 1, 1])
        with pytest.raises(DegenerateStandardizationError):
            LinearClassifier().fit(X, y)

    def test_constant_column_zero_policy(self):
        X = np.array([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0], [4.0, 5.0]])
        y = np.array([0, 0, 1, 1])
        clf = LinearClassifier()
        clf.initialize({'zero_variance': 'zero', 'random_state': 0})
        clf.fit(X, y)
        assert np.all(np.isfinite(clf.weights_.weights))

    def test_predict_before_fit(self):
        with pytest.raises(ModelNotFittedError):
            LinearClassifier().predict(np.ones((2, 2)))

    def test_wrong_feature_count(self, separable_data):
        X, y, _, _ = separable_data
        clf = LinearClassifier()
        clf.initialize({'standardize': False, 'random_state': 0})
        clf.fit(X, y)
        with pytest.raises(PredictionError):
            clf.predict(np.ones((1, 3)))

    def test_non_numeric_input(self):
        X = np.array([['a', 'b'], ['c', 'd']])
        with pytest.raises(InvalidInputKindError):
            LinearClassifier().fit(X, np.array([0, 1]))

    def test_build_classifier_rejects_nominal(self, separable_data):
        X, y, _, _ = separable_data
        dataset = Dataset(X=X, y=y, attribute_kinds=[NUMERIC, NOMINAL])
        clf = LinearClassifier()
        with pytest.raises(InvalidInputKindError):
            clf.build_classifier(dataset)
        assert not clf.is_fitted

    def test_build_classifier(self, separable_data):
        X, y, X_test, y_test = separable_data
        clf = create_perceptron(random_state=0)
        clf.build_classifier(Dataset.from_arrays(X, y, name='toy'))
        assert clf.is_fitted
        assert clf.get_metadata()['dataset'] == 'toy'
        np.testing.assert_array_equal(clf.predict(X_test), y_test)

    def test_model_selection(self, random_data):
        X, y = random_data
        clf = LinearClassifier()
        clf.initialize({'model_selection': True, 'max_iterations': 10,
                        'random_state': 0})
        clf.fit(X, y)

        assert clf.algorithm_ in ('online', 'batch')
        assert set(clf.selection_scores_) == {'online', 'batch'}
        for score in clf.selection_scores_.values():
            assert 0.0 <= score <= 100.0

    def test_model_selection_is_reproducible(self, random_data):
        X, y = random_data
        config = {'model_selection': True, 'max_iterations': 10, 'random_state': 0}
        a, b = LinearClassifier(), LinearClassifier()
        a.initialize(config)
        b.initialize(config)
        a.fit(X, y)
        b.fit(X, y)
        assert a.selection_scores_ == b.selection_scores_
        assert a.algorithm_ == b.algorithm_

    def test_no_selection_scores_without_selection(self, random_data):
        X, y = random_data
        clf = LinearClassifier()
        clf.initialize({'max_iterations': 5})
        clf.fit(X, y)
        assert clf.selection_scores_ == {}

    def test_fit_callback(self, xor_data):
        X, y = xor_data
        clf = LinearClassifier()
        clf.initialize({'standardize': False, 'random_state': 0})
        clf.fit(X, y, callback=lambda epoch, w: epoch == 5)
        assert clf.weights_.n_epochs == 5

    def test_invalid_algorithm(self):
        clf = LinearClassifier()
        with pytest.raises(ValueError):
            clf.initialize({'algorithm': 'adam'})

    def test_set_params(self, separable_data):
        X, y, _, _ = separable_data
        clf = LinearClassifier()
        clf.set_params(algorithm='batch', standardize=False, max_iterations=3)
        clf.fit(X, y)
        assert clf.algorithm_ == 'batch'
        assert clf.weights_.n_epochs == 3


# =============================================================================
# PERCEPTRON TESTS
# =============================================================================

class TestPerceptron:
    """Test suite for the plain perceptron preset."""

    def test_defaults(self):
        clf = Perceptron()
        assert clf.name == 'perceptron'
        assert clf.config['standardize'] is False
        assert clf.config['algorithm'] == 'online'

    def test_batch_rule_is_ignored(self, separable_data):
        X, y, _, _ = separable_data
        clf = Perceptron()
        clf.initialize({'algorithm': 'batch', 'model_selection': True,
                        'random_state': 0})
        assert clf.config['algorithm'] == 'online'
        assert clf.config['model_selection'] is False

        clf.fit(X, y)
        assert clf.algorithm_ == 'online'

    def test_is_linear_classifier(self):
        assert isinstance(Perceptron(), LinearClassifier)
        assert isinstance(Perceptron(), BaseClassifier)


# =============================================================================
# FEATURE DRAW TESTS
# =============================================================================

class TestFeatureDraw:
    """Tests for the ensemble's excluded-feature sampler."""

    @pytest.mark.parametrize('n_features, proportion, expected', [
        (10, 0.5, 5),
        (5, 0.5, 2),
        (7, 0.7, 2),
        (4, 1.0, 0),
        (4, 0.0, 4),
    ])
    def test_n_excluded(self, n_features, proportion, expected):
        assert n_excluded_features(n_features, proportion) == expected

    def test_draw_is_distinct_and_sorted(self):
        excluded = draw_excluded_features(20, 8, np.random.default_rng(0))
        assert len(excluded) == 8
        assert len(set(excluded)) == 8
        assert list(excluded) == sorted(excluded)
        assert all(0 <= i < 20 for i in excluded)

    def test_draw_nothing(self):
        assert draw_excluded_features(5, 0, np.random.default_rng(0)) == ()

    def test_draw_is_seeded(self):
        a = draw_excluded_features(50, 10, np.random.default_rng(7))
        b = draw_excluded_features(50, 10, np.random.default_rng(7))
        assert a == b

    def test_too_many_requested(self):
        with pytest.raises(ExhaustedRandomDrawError):
            draw_excluded_features(4, 4, np.random.default_rng(0))

    def test_negative_request(self):
        with pytest.raises(ExhaustedRandomDrawError):
            draw_excluded_features(4, -1, np.random.default_rng(0))

    def test_budget_runs_out(self):
        with pytest.raises(ExhaustedRandomDrawError) as exc_info:
            draw_excluded_features(10, 5, np.random.default_rng(0), max_attempts=3)
        assert exc_info.value.requested == 5
        assert exc_info.value.available == 10

    def test_default_budget(self):
        assert DRAW_ATTEMPTS_PER_INDEX == 100


# =============================================================================
# ENSEMBLE TESTS
# =============================================================================

class TestBaggedEnsemble:
    """Test suite for BaggedEnsemble."""

    def test_defaults(self):
        ensemble = BaggedEnsemble()
        assert ensemble.name == 'perceptron_ensemble'
        assert ensemble.size == 50
        assert ensemble.proportion == 0.5

    def test_members_and_masks(self, fitted_ensemble, random_data):
        X, _ = random_data
        n_features = X.shape[1]

        assert len(fitted_ensemble.members_) == 7
        for mask in fitted_ensemble.masks_:
            assert len(mask.excluded) == n_excluded_features(n_features, 0.5)
            assert sorted(set(mask.kept) | set(mask.excluded)) == list(range(n_features))
            assert not set(mask.kept) & set(mask.excluded)

    def test_member_feature_counts(self, fitted_ensemble):
        for member in fitted_ensemble.members_:
            assert member.classifier.n_features == member.mask.n_kept

    def test_vote_counts(self, fitted_ensemble, random_data):
        X, _ = random_data
        votes = fitted_ensemble.vote_counts(X)
        assert votes.shape == (len(X), 2)
        np.testing.assert_array_equal(votes.sum(axis=1), 7)

    def test_predict_follows_votes(self, fitted_ensemble, random_data):
        X, _ = random_data
        votes = fitted_ensemble.vote_counts(X)
        expected = np.where(votes[:, 0] > votes[:, 1], 0, 1)
        np.testing.assert_array_equal(fitted_ensemble.predict(X), expected)

    def test_predict_proba_is_vote_fraction(self, fitted_ensemble, random_data):
        X, _ = random_data
        proba = fitted_ensemble.predict_proba(X)
        np.testing.assert_allclose(proba, fitted_ensemble.vote_counts(X) / 7.0)
        np.testing.assert_allclose(proba.sum(axis=1), 1.0)

    def test_tie_goes_to_class_one(self, fitted_ensemble, random_data, monkeypatch):
        X, _ = random_data
        # four members, two instances: 2-2 and 3-1 for class 0
        member_votes = np.array([[0, 0], [0, 0], [1, 0], [1, 1]])
        monkeypatch.setattr(fitted_ensemble, '_member_predictions',
                            lambda X: member_votes)
        np.testing.assert_array_equal(fitted_ensemble.predict(X[:2]), [1, 0])

    def test_separable_data(self, separable_data):
        X_train, y_train, X_test, y_test = separable_data
        ensemble = create_ensemble(size=9, random_state=0,
                                   member={'standardize': False})
        ensemble.fit(X_train, y_train)
        np.testing.assert_array_equal(ensemble.predict(X_test), y_test)

    def test_same_seed_same_ensemble(self, random_data, small_member):
        X, y = random_data
        a = create_ensemble(size=5, random_state=12, member=small_member).fit(X, y)
        b = create_ensemble(size=5, random_state=12, member=small_member).fit(X, y)

        assert a.masks_ == b.masks_
        for ma, mb in zip(a.members_, b.members_):
            np.testing.assert_array_equal(ma.classifier.weights_.weights,
                                          mb.classifier.weights_.weights)

    def test_parallel_matches_sequential(self, random_data, small_member):
        X, y = random_data
        sequential = create_ensemble(size=8, random_state=5, n_jobs=1,
                                     member=small_member).fit(X, y)
        parallel = create_ensemble(size=8, random_state=5, n_jobs=4,
                                   member=small_member).fit(X, y)

        assert sequential.masks_ == parallel.masks_
        for ms, mp in zip(sequential.members_, parallel.members_):
            np.testing.assert_array_equal(ms.classifier.weights_.weights,
                                          mp.classifier.weights_.weights)
        np.testing.assert_array_equal(sequential.predict(X), parallel.predict(X))

    def test_members_differ(self, fitted_ensemble):
        masks = {mask.excluded for mask in fitted_ensemble.masks_}
        assert len(masks) > 1

    def test_member_configuration(self, random_data):
        X, y = random_data
        ensemble = create_ensemble(size=3, random_state=0,
                                   member={'algorithm': 'batch', 'max_iterations': 4})
        ensemble.fit(X, y)

        history = ensemble.get_training_history()
        assert history['member_algorithm'] == ['batch'] * 3
        assert history['member_epochs'] == [4] * 3
        assert len(history['member_converged']) == 3

    def test_full_proportion_keeps_every_feature(self, random_data, small_member):
        X, y = random_data
        ensemble = create_ensemble(size=2, proportion=1.0, random_state=0,
                                   member=small_member).fit(X, y)
        for mask in ensemble.masks_:
            assert mask.excluded == ()

    def test_zero_proportion_raises(self, random_data, small_member):
        X, y = random_data
        ensemble = create_ensemble(size=2, proportion=0.0, random_state=0,
                                   member=small_member)
        with pytest.raises(ExhaustedRandomDrawError):
            ensemble.fit(X, y)

    def test_small_draw_budget_raises(self, random_data, small_member):
        X, y = random_data
        ensemble = create_ensemble(size=2, proportion=0.2, random_state=0,
                                   max_draw_attempts=1, member=small_member)
        with pytest.raises(ExhaustedRandomDrawError):
            ensemble.fit(X, y)

    @pytest.mark.parametrize('config', [
        {'size': 0},
        {'size': 2.5},
        {'proportion': 1.5},
        {'proportion': -0.5},
        {'member': 'online'},
    ])
    def test_invalid_config(self, config):
        with pytest.raises((ValueError, TypeError)):
            BaggedEnsemble().initialize(config)

    def test_predict_before_fit(self):
        with pytest.raises(ModelNotFittedError):
            BaggedEnsemble().predict(np.ones((1, 4)))

    def test_wrong_feature_count(self, fitted_ensemble):
        with pytest.raises(PredictionError):
            fitted_ensemble.predict(np.ones((1, 2)))


# =============================================================================
# FACTORY TESTS
# =============================================================================

class TestClassifierFactory:
    """Test suite for ClassifierFactory."""

    @pytest.mark.parametrize('name, cls', [
        ('perceptron', Perceptron),
        ('enhanced_perceptron', LinearClassifier),
        ('perceptron_ensemble', BaggedEnsemble),
    ])
    def test_create(self, name, cls):
        clf = ClassifierFactory.create(name)
        assert type(clf) is cls
        assert ClassifierFactory.is_available(name)

    def test_create_is_case_insensitive(self):
        assert isinstance(create_classifier('Perceptron'), Perceptron)

    def test_unknown_name(self):
        with pytest.raises(ComponentNotFoundError):
            ClassifierFactory.create('naive_bayes')

    def test_kwargs_override_defaults(self):
        clf = create_enhanced_perceptron(algorithm='batch', max_iterations=9)
        assert clf.config['algorithm'] == 'batch'
        assert clf.config['max_iterations'] == 9
        assert clf.config['standardize'] is True

    def test_presets(self):
        assert create_perceptron().config['standardize'] is False
        assert create_enhanced_perceptron().config['standardize'] is True

    def test_training_section_applies(self):
        get_config().set('training.max_iterations', 33)
        assert create_perceptron().config['max_iterations'] == 33
        assert create_ensemble().config['member']['max_iterations'] == 33

    def test_ensemble_section_applies(self):
        get_config().set('ensemble.size', 7)
        get_config().set('ensemble.proportion', 0.25)
        ensemble = create_ensemble()
        assert ensemble.size == 7
        assert ensemble.proportion == 0.25

    def test_member_overrides_merge(self):
        ensemble = create_ensemble(member={'algorithm': 'batch'})
        member = ensemble.config['member']
        assert member['algorithm'] == 'batch'
        assert member['standardize'] is True
        assert member['max_iterations'] == 1000

    def test_from_config(self):
        clf = ClassifierFactory.from_config({'name': 'perceptron', 'max_iterations': 200})
        assert isinstance(clf, Perceptron)
        assert clf.config['max_iterations'] == 200

        clf = ClassifierFactory.from_config({'type': 'perceptron_ensemble', 'size': 3})
        assert clf.size == 3

    def test_from_config_requires_name(self):
        with pytest.raises(ValueError):
            ClassifierFactory.from_config({'max_iterations': 5})

    def test_list_and_info(self):
        names = ClassifierFactory.list_classifiers()
        assert {'perceptron', 'enhanced_perceptron', 'perceptron_ensemble'} <= set(names)

        info = ClassifierFactory.get_classifier_info('perceptron_ensemble')
        assert info['class'] == 'BaggedEnsemble'
        assert info['default_config']['size'] == 50

    def test_register(self):
        class BatchOnly(LinearClassifier):
            @property
            def name(self):
                return 'batch_only'

        ClassifierFactory.register('batch_only', BatchOnly, {'algorithm': 'batch'})
        clf = ClassifierFactory.create('batch_only')
        assert isinstance(clf, BatchOnly)
        assert clf.config['algorithm'] == 'batch'

    def test_register_rejects_foreign_class(self):
        with pytest.raises(TypeError):
            ClassifierFactory.register('dummy', dict)
