'Pytest fixtures for testing.'

import numpy as np
import pytest

from mvpa_core.classifier import LdaModel
from mvpa_core.config import BalancerConfig


@pytest.fixture
def random_seed():
    'Fixed random seed for reproducibility.'
    return 42


@pytest.fixture
def three_class_model():
    'LDA model with identity projection and three well separated centroids.'
    return LdaModel(
        W=np.eye(2),
        centroid=np.array([[0.0, 0.0], [5.0, 0.0], [0.0, 5.0]]),
        nclasses=3
    )


@pytest.fixture
def imbalanced_data(random_seed):
    'Ten samples with three features: six of class 1 and four of class 2.'
    rng = np.random.RandomState(random_seed)
    X = rng.randn(10, 3)
    clabel = np.array([1, 1, 2, 1, 2, 1, 1, 2, 1, 2])
    return X, clabel


@pytest.fixture
def imbalanced_data_3d(random_seed):
    'Samples x features x time data with 12 samples of class 1 and 7 of class 2.'
    rng = np.random.RandomState(random_seed)
    X = rng.randn(19, 4, 5)
    clabel = np.array([1] * 12 + [2] * 7)
    rng.shuffle(clabel)
    return X, clabel


@pytest.fixture
def sample_balancer_config(random_seed):
    'Balancer configuration with a fixed seed.'
    return BalancerConfig(method='undersample', replace=True, random_seed=random_seed)
