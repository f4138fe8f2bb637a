'Configuration and balancing-method types using dataclasses.'

import numbers
from dataclasses import dataclass
from typing import Optional, Union

from mvpa_core.utils import InvalidMethodError, ensure_list


@dataclass(frozen=True)
class Oversample:
    'Duplicate rows of every smaller class up to the largest class count.'

    name = 'oversample'


@dataclass(frozen=True)
class Undersample:
    'Remove rows of every larger class down to the smallest class count.'

    name = 'undersample'


@dataclass(frozen=True)
class TargetCount:
    'Over- or undersample each class independently to exactly n rows.'

    n: int

    name = 'target_count'

    def __post_init__(self):
        if isinstance(self.n, bool) or not isinstance(self.n, numbers.Integral):
            raise InvalidMethodError(self.n)
        if self.n < 0:
            raise InvalidMethodError(self.n)
        object.__setattr__(self, 'n', int(self.n))


BalanceMethod = Union[Oversample, Undersample, TargetCount]

METHOD_TOKENS = {
    'oversample': Oversample,
    'undersample': Undersample,
}


def parse_method(method) -> BalanceMethod:
    '''
    Resolve a user-facing method value into a BalanceMethod.

    Accepts 'oversample', 'undersample' (case-insensitive), a non-negative
    integer target count, or an already resolved BalanceMethod.
    '''
    if isinstance(method, (Oversample, Undersample, TargetCount)):
        return method
    if isinstance(method, str):
        token = method.strip().lower()
        if token not in METHOD_TOKENS:
            raise InvalidMethodError(method)
        return METHOD_TOKENS[token]()
    if isinstance(method, numbers.Integral) and not isinstance(method, bool):
        return TargetCount(int(method))
    raise InvalidMethodError(method)


@dataclass
class BalancerConfig:
    'Configuration for the class balancer.'

    # 'oversample', 'undersample' or a target count per class
    method: Union[str, int, BalanceMethod] = 'undersample'

    # Oversampling draws with replacement (bootstrap-like) when True
    replace: bool = True

    # None uses the process-wide numpy generator
    random_seed: Optional[int] = None

    # Class ids to balance; discovered from the labels when None
    classes: Optional[Union[int, list[int], tuple[int, ...]]] = None

    def __post_init__(self):
        'Validate and normalize configuration.'
        self.method = parse_method(self.method)

        if self.classes is not None:
            classes = ensure_list(self.classes)
            if not classes:
                raise ValueError('classes must not be empty')
            self.classes = tuple(sorted(int(c) for c in classes))

        if self.random_seed is not None and self.random_seed < 0:
            raise ValueError('random_seed must be non-negative')

    def get_method_name(self) -> str:
        'Return the method as it would be passed by a caller.'
        if isinstance(self.method, TargetCount):
            return str(self.method.n)
        return self.method.name


@dataclass
class ClassifierConfig:
    'Configuration for multiclass LDA inference.'

    # Reject NaN/inf in test samples before projecting them
    check_finite: bool = True
