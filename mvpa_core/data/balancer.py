'Class balancer: over- and undersampling of labeled samples.'

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from mvpa_core.config import (
    BalanceMethod,
    BalancerConfig,
    Oversample,
    TargetCount,
    Undersample,
    parse_method,
)
from mvpa_core.utils import (
    DimensionMismatchError,
    EmptyClassError,
    InsufficientSamplesError,
    InvalidMethodError,
    as_label_vector,
    get_logger,
    get_random_state,
)

logger = get_logger('data.balancer')


@dataclass
class BalanceResult:
    '''
    Container for balanced data and row provenance.

    Iterating yields (X, clabel, labelidx), so the result unpacks like a tuple.
    '''

    X: np.ndarray
    clabel: np.ndarray
    labelidx: np.ndarray  # 0-based row in the input each output row came from
    synthetic: np.ndarray  # True for rows appended by oversampling
    aux: Optional[np.ndarray] = None

    def __iter__(self):
        return iter((self.X, self.clabel, self.labelidx))

    def __len__(self) -> int:
        return len(self.clabel)

    def __repr__(self) -> str:
        counts = {int(c): int(n) for c, n in class_counts(self.clabel).items()}
        return (
            f'BalanceResult(n={len(self.clabel)}, counts={counts}, '
            f'synthetic={int(self.synthetic.sum())})'
        )


def class_counts(clabel, classes: Optional[Sequence[int]] = None) -> pd.Series:
    'Number of samples per class, indexed by class id in ascending order.'
    labels = as_label_vector(clabel)
    counts = pd.Series(labels).value_counts()
    if classes is None:
        classes = np.unique(labels)
    return counts.reindex(list(classes), fill_value=0).sort_index().astype(int)


def find_minority_majority(counts: pd.Series) -> tuple[int, int]:
    '''
    Return (minority, majority) class ids.

    On equal counts the lowest class id wins for both roles.
    '''
    minority = counts[counts == counts.min()].index.min()
    majority = counts[counts == counts.max()].index.min()
    return int(minority), int(majority)


def _target_counts(method: BalanceMethod, counts: pd.Series) -> dict[int, int]:
    'Number of rows each class should have after balancing.'
    if isinstance(method, Oversample):
        target = int(counts.max())
        return {c: target for c in counts.index}
    if isinstance(method, Undersample):
        target = int(counts.min())
        return {c: target for c in counts.index}
    if isinstance(method, TargetCount):
        return {c: method.n for c in counts.index}
    raise InvalidMethodError(method)


def _check_draws(
    counts: pd.Series, targets: dict[int, int], replace: bool
) -> None:
    'Fail before drawing anything if some class cannot supply its rows.'
    for c, target in targets.items():
        n = int(counts[c])
        if target <= n:
            continue
        if n == 0:
            raise EmptyClassError(c)
        if not replace and target - n > n:
            raise InsufficientSamplesError(c, target - n, n)


def _check_data(X: np.ndarray, n_samples: int, name: str) -> None:
    if X.ndim < 1 or X.shape[0] != n_samples:
        actual = X.shape[0] if X.ndim >= 1 else 0
        raise DimensionMismatchError(f'{name} rows vs clabel length', n_samples, actual)


def balance(
    X,
    clabel,
    method='undersample',
    replace: bool = True,
    aux=None,
    classes: Optional[Sequence[int]] = None,
    random_state=None,
) -> BalanceResult:
    '''
    Balance classes by duplicating or removing samples.

    Args:
        X: [samples x features] or [samples x features x time] data
        clabel: class label per sample
        method: 'oversample' raises every class to the largest class count,
            'undersample' lowers every class to the smallest class count, an
            integer n brings every class to exactly n samples (each class is
            over- or undersampled on its own)
        replace: if True, oversampling draws with replacement (a sample can
            be added several times); if False, each sample is added at most
            once, so a class can at most double in size
        aux: optional array whose leading axis is selected like the rows of X
        classes: class ids to balance; defaults to the ids found in clabel
        random_state: None (process-wide numpy generator), int seed or
            RandomState

    Returns:
        BalanceResult with new X, clabel, labelidx (and aux). Inputs are not
        modified. Kept rows stay in their original order and duplicated rows
        are appended at the end.

    Note:
        Oversampling combined with cross-validation must happen within each
        training fold, otherwise copies of a sample can end up in both the
        training and the test set. Undersampling can be done globally.
    '''
    method = parse_method(method)

    X = np.asarray(X)
    if X.ndim not in (2, 3):
        raise DimensionMismatchError('X rank', '2 or 3', X.ndim)
    n_samples = X.shape[0]
    labels = as_label_vector(clabel, n_samples)

    if aux is not None:
        aux = np.asarray(aux)
        _check_data(aux, n_samples, 'aux')

    if classes is None:
        classes = np.unique(labels)
    counts = class_counts(labels, classes)
    if counts.empty:
        logger.warning('No classes to balance, returning data unchanged')
        rows = np.arange(n_samples)
        return BalanceResult(
            X=X[rows],
            clabel=labels[rows],
            labelidx=rows,
            synthetic=np.zeros(n_samples, dtype=bool),
            aux=aux[rows] if aux is not None else None,
        )
    targets = _target_counts(method, counts)
    _check_draws(counts, targets, replace)

    rng = get_random_state(random_state)
    minority, majority = find_minority_majority(counts)
    logger.info(
        f'Balancing {n_samples} samples ({method.name}, replace={replace}): '
        f'counts={counts.to_dict()}, minority={minority}, majority={majority}'
    )

    rows = np.arange(n_samples)
    synthetic = np.zeros(n_samples, dtype=bool)

    # Classes are edited one after another; positions of each class are
    # looked up in the state left by the previous edits.
    for c in counts.index:
        n = int(counts[c])
        target = targets[c]
        positions = np.flatnonzero(labels[rows] == c)

        if n > target:
            remove = positions[rng.permutation(n)[:n - target]]
            rows = np.delete(rows, remove)
            synthetic = np.delete(synthetic, remove)
            logger.debug(f'Class {c}: removed {n - target} of {n} samples')
        elif n < target:
            n_add = target - n
            if replace:
                pick = rng.randint(0, n, size=n_add)
            else:
                pick = rng.permutation(n)[:n_add]
            rows = np.concatenate([rows, rows[positions[pick]]])
            synthetic = np.concatenate([synthetic, np.ones(n_add, dtype=bool)])
            logger.debug(f'Class {c}: added {n_add} samples to {n}')
        else:
            logger.debug(f'Class {c}: left untouched at {n} samples')

    result = BalanceResult(
        X=X[rows],
        clabel=labels[rows],
        labelidx=rows,
        synthetic=synthetic,
        aux=aux[rows] if aux is not None else None,
    )
    logger.info(
        f'Balanced to {len(result)} samples: '
        f'counts={class_counts(result.clabel, classes).to_dict()}'
    )
    return result


class ClassBalancer:
    '''
    Config-driven class balancer.

    Wraps balance() with a BalancerConfig and keeps class statistics of the
    last call for reporting.
    '''

    def __init__(self, config: Optional[BalancerConfig] = None):
        self.config = config or BalancerConfig()
        self.logger = get_logger('data.balancer')
        self.counts_before_: Optional[pd.Series] = None
        self.counts_after_: Optional[pd.Series] = None

    @property
    def method(self) -> BalanceMethod:
        return self.config.method

    def balance(
        self, X, clabel, aux=None, random_state=None
    ) -> BalanceResult:
        '''
        Balance X and clabel according to the configuration.

        random_state overrides config.random_seed; with neither set the
        process-wide numpy generator is used.
        '''
        if random_state is None:
            random_state = self.config.random_seed

        result = balance(
            X,
            clabel,
            method=self.config.method,
            replace=self.config.replace,
            aux=aux,
            classes=self.config.classes,
            random_state=random_state,
        )

        classes = self.config.classes
        self.counts_before_ = class_counts(clabel, classes)
        self.counts_after_ = class_counts(
            result.clabel, classes or self.counts_before_.index
        )
        return result

    def get_class_stats(self) -> pd.DataFrame:
        'Get per-class counts and frequencies of the last balance call.'
        if self.counts_before_ is None:
            return pd.DataFrame()

        stats = pd.DataFrame({
            'class': self.counts_before_.index,
            'count': self.counts_before_.values,
            'balanced_count': self.counts_after_.reindex(
                self.counts_before_.index, fill_value=0
            ).values,
        })
        stats['frequency'] = stats['count'] / stats['count'].sum()
        stats['balanced_frequency'] = (
            stats['balanced_count'] / max(stats['balanced_count'].sum(), 1)
        )
        return stats.reset_index(drop=True)

    def get_params(self) -> dict:
        'Get balancer parameters for serialization.'
        return {
            'method': self.config.get_method_name(),
            'replace': self.config.replace,
            'random_seed': self.config.random_seed,
            'classes': list(self.config.classes) if self.config.classes else None,
        }
