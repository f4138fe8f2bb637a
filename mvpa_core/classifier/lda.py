'Nearest-centroid inference for a trained multiclass LDA model.'

from dataclasses import dataclass
from typing import Optional

import numpy as np

from mvpa_core.config import ClassifierConfig
from mvpa_core.utils import DimensionMismatchError, get_logger


@dataclass
class LdaModel:
    '''
    Trained multiclass LDA model, produced by an external training routine.

    W projects features into discriminant space (features x discriminants),
    centroid holds one projected class mean per row (nclasses x discriminants).
    '''

    W: np.ndarray
    centroid: np.ndarray
    nclasses: int

    def __post_init__(self):
        'Convert to arrays and validate model invariants.'
        self.W = np.asarray(self.W, dtype=float)
        self.centroid = np.asarray(self.centroid, dtype=float)
        self.nclasses = int(self.nclasses)

        # A single discriminant may be stored as a vector
        if self.W.ndim == 1:
            self.W = self.W[:, np.newaxis]
        if self.centroid.ndim == 1:
            self.centroid = self.centroid[:, np.newaxis]

        if self.W.ndim != 2:
            raise DimensionMismatchError('W rank', 2, self.W.ndim)
        if self.centroid.ndim != 2:
            raise DimensionMismatchError('centroid rank', 2, self.centroid.ndim)
        if self.centroid.shape[1] != self.W.shape[1]:
            raise DimensionMismatchError(
                'centroid columns vs W columns',
                self.W.shape[1], self.centroid.shape[1]
            )
        if self.centroid.shape[0] != self.nclasses:
            raise DimensionMismatchError(
                'centroid rows vs nclasses', self.nclasses, self.centroid.shape[0]
            )

    @property
    def n_features(self) -> int:
        return self.W.shape[0]

    @property
    def n_discriminants(self) -> int:
        return self.W.shape[1]

    def get_params(self) -> dict:
        'Get model parameters for serialization.'
        return {
            'W': self.W.tolist(),
            'centroid': self.centroid.tolist(),
            'nclasses': self.nclasses
        }

    @classmethod
    def from_params(cls, params: dict) -> 'LdaModel':
        'Create model from serialized parameters.'
        return cls(
            W=params['W'],
            centroid=params['centroid'],
            nclasses=params['nclasses']
        )


def _check_samples(model: LdaModel, X, check_finite: bool = True) -> np.ndarray:
    'Validate a samples x features matrix against the model.'
    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise DimensionMismatchError('X rank', 2, X.ndim)
    if X.shape[1] != model.n_features:
        raise DimensionMismatchError(
            'X columns vs W rows', model.n_features, X.shape[1]
        )
    if check_finite and not np.all(np.isfinite(X)):
        raise ValueError('X contains NaN or infinite values')
    return X


def centroid_distances(
    model: LdaModel, X, check_finite: bool = True
) -> np.ndarray:
    '''
    Squared Euclidean distance of every projected sample to every centroid.

    Returns:
        [samples x nclasses] array
    '''
    X = _check_samples(model, X, check_finite)
    y = X @ model.W
    diff = y[:, np.newaxis, :] - model.centroid[np.newaxis, :, :]
    return np.sum(diff ** 2, axis=2)


def predict(model: LdaModel, X, check_finite: bool = True) -> np.ndarray:
    '''
    Assign each sample to the class of its nearest centroid.

    Class labels are 1..nclasses. On exact distance ties the lowest class
    wins, since argmin returns the first occurrence.
    '''
    dist = centroid_distances(model, X, check_finite)
    return np.argmin(dist, axis=1) + 1


def predict_across_time(
    model: LdaModel, X, check_finite: bool = True
) -> np.ndarray:
    '''
    Predict every time point of a [samples x features x time] array.

    Each time slice is classified independently with the same model.

    Returns:
        [samples x time] array of class labels
    '''
    X = np.asarray(X, dtype=float)
    if X.ndim == 2:
        X = X[:, :, np.newaxis]
    if X.ndim != 3:
        raise DimensionMismatchError('X rank', 3, X.ndim)

    n_samples, _, n_times = X.shape
    clabel = np.zeros((n_samples, n_times), dtype=int)
    for t in range(n_times):
        clabel[:, t] = predict(model, X[:, :, t], check_finite)
    return clabel


class MulticlassLdaClassifier:
    '''
    Apply a trained multiclass LDA model to test data.

    The model comes from an external training step; this class only
    projects samples into discriminant space and picks the nearest centroid.
    '''

    def __init__(
        self,
        model: Optional[LdaModel] = None,
        config: Optional[ClassifierConfig] = None
    ):
        self.config = config or ClassifierConfig()
        self.logger = get_logger('classifier.lda')
        self.model_: Optional[LdaModel] = None
        self.is_loaded_: bool = False
        if model is not None:
            self.set_model(model)

    def set_model(self, model) -> 'MulticlassLdaClassifier':
        'Attach a trained model, given as LdaModel or its params dict.'
        if isinstance(model, dict):
            model = LdaModel.from_params(model)
        self.model_ = model
        self.is_loaded_ = True
        self.logger.info(
            f'Loaded LDA model: {model.nclasses} classes, '
            f'{model.n_features} features, {model.n_discriminants} discriminants'
        )
        return self

    def decision_distances(self, X) -> np.ndarray:
        'Squared distances of each sample to each class centroid.'
        self._check_is_loaded()
        return centroid_distances(self.model_, X, self.config.check_finite)

    def predict(self, X) -> np.ndarray:
        'Predict class labels (1..nclasses) for a samples x features matrix.'
        self._check_is_loaded()
        clabel = predict(self.model_, X, self.config.check_finite)
        self.logger.debug(
            f'Predicted {len(clabel)} samples: '
            f'{np.bincount(clabel, minlength=self.model_.nclasses + 1)[1:].tolist()}'
        )
        return clabel

    def predict_across_time(self, X) -> np.ndarray:
        'Predict class labels for each time point of a 3-D array.'
        self._check_is_loaded()
        return predict_across_time(self.model_, X, self.config.check_finite)

    def get_params(self) -> dict:
        'Get classifier parameters for serialization.'
        return {
            'check_finite': self.config.check_finite,
            'model': self.model_.get_params() if self.model_ is not None else None
        }

    def _check_is_loaded(self) -> None:
        if not self.is_loaded_:
            raise RuntimeError(
                f'{self.__class__.__name__} needs a trained model before predict'
            )
