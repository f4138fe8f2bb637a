'Class balancing module.'

from mvpa_core.data.balancer import (
    BalanceResult,
    ClassBalancer,
    balance,
    class_counts,
    find_minority_majority,
)

__all__ = [
    'BalanceResult',
    'ClassBalancer',
    'balance',
    'class_counts',
    'find_minority_majority'
]
