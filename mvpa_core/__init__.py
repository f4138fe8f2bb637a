'Nearest-centroid LDA inference and class balancing for MVPA cross-validation.'

from mvpa_core.classifier import LdaModel, MulticlassLdaClassifier, predict
from mvpa_core.config import (
    BalancerConfig,
    ClassifierConfig,
    Oversample,
    TargetCount,
    Undersample,
    parse_method,
)
from mvpa_core.data import BalanceResult, ClassBalancer, balance
from mvpa_core.utils import (
    DimensionMismatchError,
    EmptyClassError,
    InsufficientSamplesError,
    InvalidMethodError,
    MvpaError,
)

__all__ = [
    'LdaModel',
    'MulticlassLdaClassifier',
    'predict',
    'BalancerConfig',
    'ClassifierConfig',
    'Oversample',
    'Undersample',
    'TargetCount',
    'parse_method',
    'BalanceResult',
    'ClassBalancer',
    'balance',
    'MvpaError',
    'DimensionMismatchError',
    'InsufficientSamplesError',
    'InvalidMethodError',
    'EmptyClassError'
]
__version__ = '0.1.0'
