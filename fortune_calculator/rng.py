"""결정론적 난수: FNV-1a 32비트 해시와 Mulberry32 스트림

같은 입력 문자열이면 항상 같은 시드, 같은 시드면 항상 같은 난수열이 나온다.
웹 버전과 비트 단위로 같아야 하므로 모든 연산은 32비트에서 wrap 한다.
"""
from typing import Callable

MASK32 = 0xFFFFFFFF

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193

MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296


def imul(a: int, b: int) -> int:
    """32비트 곱셈 (하위 32비트만 남김)"""
    return (a * b) & MASK32


def fnv1a32(text: str) -> int:
    """FNV-1a 32비트 해시. UTF-16 코드 유닛 단위로 처리한다."""
    h = FNV_OFFSET_BASIS
    data = text.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = imul(h, FNV_PRIME)
    return h


class Mulberry32:
    """Mulberry32 PRNG. 호출할 때마다 [0, 1) 실수 하나를 낸다.

    되감기는 지원하지 않는다. 같은 수열을 다시 보려면 같은 시드로 새 인스턴스를 만든다.
    """

    def __init__(self, seed: int):
        self.seed = seed & MASK32
        self._state = self.seed
        self.draws = 0

    def __call__(self) -> float:
        return self.next_float()

    def next_float(self) -> float:
        self._state = (self._state + MULBERRY_INCREMENT) & MASK32
        a = self._state
        t = imul(a ^ (a >> 15), a | 1)
        t = ((t + imul(t ^ (t >> 7), t | 61)) & MASK32) ^ t
        self.draws += 1
        return ((t ^ (t >> 14)) & MASK32) / TWO_POW_32


def make_stream(seed: int) -> Callable[[], float]:
    """시드로 새 스트림을 만든다"""
    return Mulberry32(seed)
