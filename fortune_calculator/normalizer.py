"""입력 정규화/검증

예외를 던지지 않고 FortuneError를 돌려준다. 호출하는 쪽(폼, 봇, API)이 메시지를 보여준다.
"""
import math
import re
from typing import Any, Optional, Union

from .models import (
    BodyInput, ErrorCode, FortuneError, GoalInput, RawInput, Variant
)
from .utils import format_number

BIRTH_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

HEIGHT_RANGE = (50.0, 250.0)
WEIGHT_RANGE = (10.0, 250.0)

# Number()가 받아주는 진법 접두사
RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}

MESSAGES = {
    ErrorCode.EMPTY_NAME: "이름을 입력해주세요.",
    ErrorCode.INVALID_DATE: "생년월일을 올바르게 입력해주세요.",
    ErrorCode.EMPTY_GOAL: "목표를 입력해주세요.",
}
HEIGHT_MESSAGE = "키(cm)를 50~250 사이로 입력해주세요."
WEIGHT_MESSAGE = "몸무게(kg)를 10~250 사이로 입력해주세요."


def _error(code: ErrorCode, message: Optional[str] = None) -> FortuneError:
    return FortuneError(code=code, message=message or MESSAGES[code])


def normalize_text(value: Any) -> str:
    """String(v ?? "").trim()과 같은 규칙. 숫자나 불리언이 와도 문자열로 바꾼다."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value).strip()


def to_number(value: Any) -> float:
    """브라우저의 Number() 변환과 같은 규칙. 변환 불가면 NaN."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return 0.0
    # float()는 "1_000"을 받아주지만 Number()는 NaN
    if "_" in text:
        return math.nan
    base = RADIX_PREFIXES.get(text[:2].lower())
    if base is not None:
        digits = text[2:]
        # 부호나 공백이 섞이면 Number()는 NaN
        if not digits.isalnum():
            return math.nan
        try:
            return float(int(digits, base))
        except ValueError:
            return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def _in_range(value: float, bounds) -> bool:
    low, high = bounds
    return math.isfinite(value) and low <= value <= high


def parse_birth(birth: Any):
    """YYYY-MM-DD를 (년, 월, 일)로. 형식이 다르면 None."""
    match = BIRTH_PATTERN.fullmatch(normalize_text(birth))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def normalize(raw: Union[RawInput, dict], variant: Variant = Variant.BODY
              ) -> Union[BodyInput, GoalInput, FortuneError]:
    """원시 입력을 검증된 입력으로 바꾼다. 실패하면 FortuneError."""
    if isinstance(raw, dict):
        raw = RawInput(**raw)

    name = normalize_text(raw.name)
    if not name:
        return _error(ErrorCode.EMPTY_NAME)

    parts = parse_birth(raw.birth)
    if parts is None:
        return _error(ErrorCode.INVALID_DATE)
    year, month, day = parts

    if variant == Variant.GOAL:
        goal = normalize_text(raw.goal)
        if not goal:
            return _error(ErrorCode.EMPTY_GOAL)
        return GoalInput(
            name=name, birth_year=year, birth_month=month, birth_day=day,
            goal=goal,
        )

    height = to_number(raw.height)
    if not _in_range(height, HEIGHT_RANGE):
        return _error(ErrorCode.OUT_OF_RANGE, HEIGHT_MESSAGE)
    weight = to_number(raw.weight)
    if not _in_range(weight, WEIGHT_RANGE):
        return _error(ErrorCode.OUT_OF_RANGE, WEIGHT_MESSAGE)

    return BodyInput(
        name=name, birth_year=year, birth_month=month, birth_day=day,
        height_cm=height, weight_kg=weight,
    )
