"""계산 모듈 공용 숫자 헬퍼

반올림은 파이썬의 은행가 반올림이 아니라 웹 버전(Math.round)과 같은 방식을 따른다.
"""
import math


def clamp(value: float, minimum: float, maximum: float) -> float:
    """value를 [minimum, maximum] 범위로 자른다"""
    return max(minimum, min(maximum, value))


def js_round(value: float) -> int:
    """0.5는 올림 (Math.round와 동일)"""
    return int(math.floor(value + 0.5))


def round1(value: float) -> float:
    """소수 첫째 자리 반올림 (0에서 먼 쪽으로)"""
    rounded = math.floor(abs(value) * 10 + 0.5) / 10
    return math.copysign(rounded, value)


def format_number(value: float) -> str:
    """String(Number(x))와 같은 표기: 175.0 -> "175", 68.5 -> "68.5" """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
