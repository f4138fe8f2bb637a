'Tests for multiclass LDA inference.'

import numpy as np
import pytest

from mvpa_core.classifier import (
    LdaModel,
    MulticlassLdaClassifier,
    centroid_distances,
    predict,
    predict_across_time,
)
from mvpa_core.config import ClassifierConfig
from mvpa_core.utils import DimensionMismatchError


class TestLdaModel:
    'Tests for LdaModel.'

    def test_shapes(self, three_class_model):
        'Test model dimensions.'
        assert three_class_model.n_features == 2
        assert three_class_model.n_discriminants == 2
        assert three_class_model.nclasses == 3

    def test_centroid_columns_mismatch(self):
        'Test that centroid and W column counts must agree.'
        with pytest.raises(DimensionMismatchError, match='centroid columns'):
            LdaModel(W=np.ones((4, 2)), centroid=np.ones((3, 3)), nclasses=3)

    def test_centroid_rows_mismatch(self):
        'Test that centroid rows must equal nclasses.'
        with pytest.raises(DimensionMismatchError, match='nclasses'):
            LdaModel(W=np.ones((4, 2)), centroid=np.ones((2, 2)), nclasses=3)

    def test_single_discriminant_vector(self):
        'Test that a single discriminant may be given as vectors.'
        model = LdaModel(W=[1.0, -1.0], centroid=[-2.0, 2.0], nclasses=2)

        assert model.W.shape == (2, 1)
        assert model.centroid.shape == (2, 1)

    def test_get_params_from_params(self, three_class_model):
        'Test serialization of model parameters.'
        params = three_class_model.get_params()
        model = LdaModel.from_params(params)

        np.testing.assert_array_equal(model.W, three_class_model.W)
        np.testing.assert_array_equal(model.centroid, three_class_model.centroid)
        assert model.nclasses == three_class_model.nclasses


class TestPredict:
    'Tests for nearest-centroid prediction.'

    def test_known_assignment(self, three_class_model):
        'Test that samples go to the nearest centroid.'
        X = np.array([[0.1, 0.1], [4.9, 0.2], [0.2, 4.8]])

        clabel = predict(three_class_model, X)

        np.testing.assert_array_equal(clabel, [1, 2, 3])

    def test_output_range(self, three_class_model, random_seed):
        'Test output length and label range on random data.'
        rng = np.random.RandomState(random_seed)
        X = rng.randn(50, 2) * 10

        clabel = predict(three_class_model, X)

        assert len(clabel) == 50
        assert clabel.min() >= 1
        assert clabel.max() <= 3

    def test_tie_goes_to_lowest_class(self):
        'Test that duplicated centroids resolve to the lower class.'
        model = LdaModel(
            W=np.eye(2),
            centroid=np.array([[3.0, 3.0], [1.0, 1.0], [1.0, 1.0]]),
            nclasses=3
        )
        X = np.array([[1.0, 1.0], [0.0, 0.0]])

        np.testing.assert_array_equal(predict(model, X), [2, 2])

    def test_equidistant_centroids(self):
        'Test a sample exactly halfway between two centroids.'
        model = LdaModel(
            W=np.eye(2),
            centroid=np.array([[-1.0, 0.0], [1.0, 0.0]]),
            nclasses=2
        )

        np.testing.assert_array_equal(predict(model, [[0.0, 7.0]]), [1])

    def test_projection_applied(self):
        'Test that samples are projected before computing distances.'
        # Only the first feature survives the projection
        model = LdaModel(
            W=np.array([[1.0], [0.0], [0.0]]),
            centroid=np.array([[0.0], [10.0]]),
            nclasses=2
        )
        X = np.array([[9.0, -100.0, 0.0], [1.0, 100.0, 50.0]])

        np.testing.assert_array_equal(predict(model, X), [2, 1])

    def test_feature_mismatch(self, three_class_model):
        'Test that X columns must match W rows.'
        with pytest.raises(DimensionMismatchError, match='X columns'):
            predict(three_class_model, np.ones((4, 3)))

    def test_rank_mismatch(self, three_class_model):
        'Test that predict requires a 2-D matrix.'
        with pytest.raises(DimensionMismatchError):
            predict(three_class_model, np.ones((4, 2, 3)))

    def test_non_finite_rejected(self, three_class_model):
        'Test that NaN samples are rejected when checking is on.'
        X = np.array([[np.nan, 0.0]])
        with pytest.raises(ValueError, match='NaN'):
            predict(three_class_model, X)

    def test_inputs_not_modified(self, three_class_model):
        'Test that predict does not modify its inputs.'
        X = np.array([[0.1, 0.1], [4.9, 0.2]])
        X_copy = X.copy()
        centroid_copy = three_class_model.centroid.copy()

        predict(three_class_model, X)

        np.testing.assert_array_equal(X, X_copy)
        np.testing.assert_array_equal(three_class_model.centroid, centroid_copy)


class TestCentroidDistances:
    'Tests for centroid_distances.'

    def test_squared_euclidean(self, three_class_model):
        'Test distance values.'
        dist = centroid_distances(three_class_model, np.array([[1.0, 2.0]]))

        np.testing.assert_array_almost_equal(dist, [[5.0, 20.0, 10.0]])

    def test_shape(self, three_class_model):
        'Test distance matrix shape.'
        dist = centroid_distances(three_class_model, np.zeros((7, 2)))
        assert dist.shape == (7, 3)


class TestPredictAcrossTime:
    'Tests for predict_across_time.'

    def test_each_time_point(self, three_class_model):
        'Test that every time slice is classified on its own.'
        X = np.zeros((2, 2, 3))
        X[0, :, 1] = [5.0, 0.0]
        X[1, :, 2] = [0.0, 5.0]

        clabel = predict_across_time(three_class_model, X)

        assert clabel.shape == (2, 3)
        np.testing.assert_array_equal(clabel, [[1, 2, 1], [1, 1, 3]])

    def test_matches_predict_per_slice(self, three_class_model, random_seed):
        'Test agreement with predict on each slice.'
        rng = np.random.RandomState(random_seed)
        X = rng.randn(6, 2, 4) * 5

        clabel = predict_across_time(three_class_model, X)

        for t in range(4):
            np.testing.assert_array_equal(
                clabel[:, t], predict(three_class_model, X[:, :, t])
            )

    def test_2d_input(self, three_class_model):
        'Test that a 2-D matrix is treated as a single time point.'
        clabel = predict_across_time(three_class_model, [[4.9, 0.2]])
        assert clabel.shape == (1, 1)
        assert clabel[0, 0] == 2


class TestMulticlassLdaClassifier:
    'Tests for MulticlassLdaClassifier.'

    def test_predict(self, three_class_model):
        'Test prediction through the classifier.'
        clf = MulticlassLdaClassifier(three_class_model)
        X = np.array([[0.1, 0.1], [4.9, 0.2], [0.2, 4.8]])

        np.testing.assert_array_equal(clf.predict(X), [1, 2, 3])
        assert clf.decision_distances(X).shape == (3, 3)

    def test_requires_model(self):
        'Test that predicting without a model raises.'
        clf = MulticlassLdaClassifier()
        with pytest.raises(RuntimeError, match='trained model'):
            clf.predict(np.zeros((1, 2)))

    def test_set_model_from_params(self, three_class_model):
        'Test loading a model from its params dict.'
        clf = MulticlassLdaClassifier()
        clf.set_model(three_class_model.get_params())

        assert clf.is_loaded_
        np.testing.assert_array_equal(clf.predict([[0.2, 4.8]]), [3])

    def test_check_finite_disabled(self, three_class_model):
        'Test that finite checking can be turned off.'
        clf = MulticlassLdaClassifier(
            three_class_model, ClassifierConfig(check_finite=False)
        )
        clabel = clf.predict(np.array([[np.nan, 0.0]]))
        assert len(clabel) == 1

    def test_get_params(self, three_class_model):
        'Test classifier parameters.'
        clf = MulticlassLdaClassifier(three_class_model)
        params = clf.get_params()

        assert params['check_finite'] is True
        assert params['model']['nclasses'] == 3
