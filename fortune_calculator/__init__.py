"""2026 운세 계산 모듈"""
from .calculator import FortuneCalculator, compute_fortune, derive_seed, select, select_indexed
from .models import (
    BodyInput, ErrorCode, FortuneError, FortuneResult, GoalInput, RawInput, Variant
)
from .normalizer import normalize
from .rng import fnv1a32, make_stream
from .session import FortuneAppError, FortuneSession, NoFortuneYet, SessionRegistry

__all__ = [
    'FortuneCalculator', 'compute_fortune', 'derive_seed', 'select', 'select_indexed',
    'BodyInput', 'GoalInput', 'RawInput', 'Variant', 'ErrorCode',
    'FortuneError', 'FortuneResult', 'normalize', 'fnv1a32', 'make_stream',
    'FortuneAppError', 'FortuneSession', 'NoFortuneYet', 'SessionRegistry',
]
