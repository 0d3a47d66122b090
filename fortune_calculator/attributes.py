"""생년월일/체형에서 얻는 결정론적 속성과 보정값"""
from typing import Optional, Tuple

from .interpretations import ANIMAL_REFERENCE_YEAR, ANIMALS, ZODIAC_SIGNS
from .models import BiasTerms, BmiBand, DerivedAttributes
from .utils import round1

# (별자리, 시작 월, 시작 일) - 각 별자리는 다음 항목의 시작 전날까지
_ZODIAC_STARTS: Tuple[Tuple[str, int, int], ...] = (
    ("aquarius", 1, 20),
    ("pisces", 2, 19),
    ("aries", 3, 21),
    ("taurus", 4, 20),
    ("gemini", 5, 21),
    ("cancer", 6, 22),
    ("leo", 7, 23),
    ("virgo", 8, 23),
    ("libra", 9, 24),
    ("scorpio", 10, 24),
    ("sagittarius", 11, 23),
    ("capricorn", 12, 22),
)

BMI_BIAS = {
    BmiBand.UNDERWEIGHT: -1,
    BmiBand.NORMAL: 6,
    BmiBand.OVERWEIGHT: -2,
    BmiBand.OBESE: -4,
}


def zodiac_key(month: int, day: int) -> str:
    """월/일로 별자리 키를 구한다. 범위를 벗어난 날짜는 염소자리."""
    for index, (key, start_month, start_day) in enumerate(_ZODIAC_STARTS):
        if month != start_month:
            continue
        if day >= start_day:
            return key
        # 시작일 전이면 앞 별자리 (1월 앞은 염소자리)
        return _ZODIAC_STARTS[index - 1][0]
    return "capricorn"


def zodiac_sign(month: int, day: int) -> str:
    return ZODIAC_SIGNS[zodiac_key(month, day)]


def animal_year(year: int) -> str:
    """띠. 기준 연도 이전도 순환이 맞도록 음수 나머지를 보정한다."""
    idx = ((year - ANIMAL_REFERENCE_YEAR) % 12 + 12) % 12
    return ANIMALS[idx]


def digit_sum(text: str) -> int:
    return sum(int(ch) for ch in text)


def life_path_number(year: int, month: int, day: int) -> int:
    """라이프패스 넘버: YYYYMMDD 자릿수 합을 한 자리로 줄인다 (0은 9)"""
    total = digit_sum(f"{year}{month:02d}{day:02d}")
    while total > 9:
        total = digit_sum(str(total))
    return 9 if total == 0 else total


def bmi(height_cm: float, weight_kg: float) -> float:
    h = height_cm / 100
    return weight_kg / (h * h)


def bmi_band(value: float) -> BmiBand:
    if 18.5 <= value < 25:
        return BmiBand.NORMAL
    if 25 <= value < 30:
        return BmiBand.OVERWEIGHT
    if value < 18.5:
        return BmiBand.UNDERWEIGHT
    return BmiBand.OBESE


def life_path_bias(life_path: int) -> int:
    """-8 ~ +8"""
    return (life_path - 5) * 2


def derive_attributes(year: int, month: int, day: int,
                      height_cm: Optional[float] = None,
                      weight_kg: Optional[float] = None) -> DerivedAttributes:
    """생년월일(과 키/몸무게)로 속성을 계산한다"""
    bmi_value = None
    band = None
    if height_cm is not None and weight_kg is not None:
        bmi_value = bmi(height_cm, weight_kg)
        band = bmi_band(bmi_value)

    return DerivedAttributes(
        zodiac=zodiac_sign(month, day),
        animal=animal_year(year),
        life_path=life_path_number(year, month, day),
        bmi=bmi_value,
        bmi_rounded=round1(bmi_value) if bmi_value is not None else None,
        bmi_band=band,
    )


def derive_bias(attributes: DerivedAttributes) -> BiasTerms:
    """속성을 점수 보정값으로 바꾼다"""
    return BiasTerms(
        life_path_bias=life_path_bias(attributes.life_path),
        bmi_bias=BMI_BIAS[attributes.bmi_band] if attributes.bmi_band else 0,
    )
