'Utility functions and error types shared by the classifier and balancer.'

import logging
import random
from typing import Optional, Union

import numpy as np
from sklearn.utils import check_random_state


class MvpaError(Exception):
    'Base class for all errors raised by mvpa_core.'


class DimensionMismatchError(MvpaError, ValueError):
    '''
    Raised when array dimensions disagree.

    Covers feature/projection/centroid mismatches in inference as well as
    label or auxiliary arrays whose length differs from the number of samples.
    '''

    def __init__(self, what: str, expected, actual):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f'{what}: expected {expected}, got {actual}')


class InsufficientSamplesError(MvpaError, ValueError):
    'Raised when drawing without replacement needs more rows than a class has.'

    def __init__(self, class_label, requested: int, available: int):
        self.class_label = class_label
        self.requested = requested
        self.available = available
        super().__init__(
            f'Class {class_label}: cannot draw {requested} samples without '
            f'replacement from {available} available'
        )


class InvalidMethodError(MvpaError, ValueError):
    'Raised when a balancing method is not a known token or a non-negative integer.'

    def __init__(self, method):
        self.method = method
        super().__init__(
            f"Invalid balancing method {method!r}: expected 'oversample', "
            f"'undersample' or a non-negative integer"
        )


class EmptyClassError(MvpaError, ValueError):
    'Raised when samples must be drawn from a class that has no members.'

    def __init__(self, class_label):
        self.class_label = class_label
        super().__init__(f'Class {class_label} has no samples to draw from')


def setup_logging(
    level: int = logging.INFO,
    format_str: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
) -> logging.Logger:
    'Set up logging configuration and return root logger.'
    logging.basicConfig(level=level, format=format_str)
    return logging.getLogger('mvpa')


def get_logger(name: str) -> logging.Logger:
    'Get a logger with the given name.'
    return logging.getLogger(f'mvpa.{name}')


def set_random_seed(seed: int) -> None:
    'Seed the process-wide random generators used when no random_state is passed.'
    random.seed(seed)
    np.random.seed(seed)


def get_random_state(
    random_state: Optional[Union[int, np.random.RandomState]] = None
) -> np.random.RandomState:
    '''
    Resolve a random_state argument to a RandomState.

    None gives the process-wide numpy generator, so results follow
    np.random.seed(). An int creates a fresh seeded generator.
    '''
    return check_random_state(random_state)


def as_label_vector(clabel, n_samples: Optional[int] = None) -> np.ndarray:
    'Convert labels to a 1-D integer array, optionally checking its length.'
    labels = np.asarray(clabel)
    if labels.ndim == 2 and 1 in labels.shape:
        labels = labels.ravel()
    if labels.ndim != 1:
        raise DimensionMismatchError('clabel rank', 1, labels.ndim)
    if n_samples is not None and len(labels) != n_samples:
        raise DimensionMismatchError('clabel length', n_samples, len(labels))
    return labels.astype(int, copy=False)


def ensure_list(value: Optional[object]) -> list:
    'Ensure value is a list.'
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, np.ndarray):
        return value.tolist()
    return [value]
