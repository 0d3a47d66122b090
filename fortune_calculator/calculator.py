"""운세 계산기

normalize -> seed -> stream -> 속성/보정 -> 점수/문구 순서로 한 번에 계산한다.
스트림에서 값을 꺼내는 순서가 곧 결과이므로 순서를 바꾸면 기존 결과가 모두 달라진다.
"""
import logging
from typing import Callable, Optional, Sequence, Tuple, TypeVar, Union

from .attributes import derive_attributes, derive_bias
from .interpretations import (
    ADVICE_BANK, GOAL_ADVICE_BANK, HEALTH_BANK, HEALTH_SUFFIX, LOVE_BANK,
    MONEY_BANK, MONTH_FOCUS, TONES, WORK_BANK
)
from .models import (
    BodyInput, FortuneError, FortuneResult, FortuneTexts, GoalInput, GoalTier,
    RawInput, Scores, SelectionIndices, Variant
)
from .normalizer import normalize
from .rng import MASK32, fnv1a32, make_stream
from .utils import clamp, format_number, js_round

logger = logging.getLogger(__name__)

T = TypeVar("T")
Stream = Callable[[], float]

DEFAULT_YEAR = 2026

# 점수 기준선
WORK_BASELINE = 55
MONEY_BASELINE = 50
LOVE_BASELINE = 52
HEALTH_BASELINE = {Variant.BODY: 58, Variant.GOAL: 55}

SCORE_SPREAD = 60
LOVE_JITTER = 10
GOAL_BONUS_SPREAD = 20


def pick_index(stream: Stream, length: int) -> int:
    return int(stream() * length)


def select_indexed(stream: Stream, bank: Sequence[T]) -> Tuple[int, T]:
    """뱅크에서 균등하게 하나 고른다. (인덱스, 값)"""
    idx = pick_index(stream, len(bank))
    return idx, bank[idx]


def select(stream: Stream, bank: Sequence[T]) -> T:
    return select_indexed(stream, bank)[1]


def score(baseline: float, draw: float, bias: float = 0) -> int:
    return js_round(clamp(baseline + (draw - 0.5) * SCORE_SPREAD + bias, 0, 100))


def goal_tier(percent: int) -> GoalTier:
    if percent >= 70:
        return GoalTier.HIGH
    if percent >= 45:
        return GoalTier.MEDIUM
    return GoalTier.LOW


def seed_material(data: Union[BodyInput, GoalInput], year: int = DEFAULT_YEAR) -> str:
    """시드 문자열. 필드 순서와 구분자는 고정."""
    if isinstance(data, BodyInput):
        fields = [data.name, data.birth, format_number(data.height_cm),
                  format_number(data.weight_kg)]
    else:
        fields = [data.name, data.birth, data.goal]
    fields.append(str(year))
    return "|".join(fields)


def derive_seed(data: Union[BodyInput, GoalInput], year: int = DEFAULT_YEAR) -> Tuple[str, int]:
    material = seed_material(data, year)
    return material, fnv1a32(material)


def goal_seed(goal: str, seed: int) -> int:
    """목표 보너스용 두 번째 스트림 시드"""
    return (fnv1a32(goal) + seed) & MASK32


class FortuneCalculator:
    """운세 계산기. 상태가 없으므로 여러 번 재사용해도 된다."""

    def __init__(self, year: int = DEFAULT_YEAR):
        self.year = year

    def calculate(self, raw: Union[RawInput, dict], variant: Variant = Variant.BODY
                  ) -> Union[FortuneResult, FortuneError]:
        """원시 입력부터 계산. 검증 실패 시 FortuneError를 돌려준다."""
        normalized = normalize(raw, variant)
        if isinstance(normalized, FortuneError):
            logger.info(f"입력 검증 실패: {normalized.code.value}")
            return normalized
        return self.calculate_fortune(normalized)

    def calculate_fortune(self, data: Union[BodyInput, GoalInput]) -> FortuneResult:
        """검증된 입력으로 운세를 계산한다"""
        variant = Variant(data.variant)
        is_body = variant == Variant.BODY

        attributes = derive_attributes(
            data.birth_year, data.birth_month, data.birth_day,
            data.height_cm if is_body else None,
            data.weight_kg if is_body else None,
        )
        bias = derive_bias(attributes)

        material, seed = derive_seed(data, self.year)
        rng = make_stream(seed)
        lp_bias = bias.life_path_bias

        tone_idx, tone = select_indexed(rng, TONES)
        focus_idx, focus = select_indexed(rng, MONTH_FOCUS)

        work_score = score(WORK_BASELINE, rng(), lp_bias)
        money_score = score(MONEY_BASELINE, rng(), lp_bias / 2)
        love_score = js_round(clamp(
            LOVE_BASELINE + (rng() - 0.5) * SCORE_SPREAD + (rng() - 0.5) * LOVE_JITTER,
            0, 100,
        ))
        health_score = score(HEALTH_BASELINE[variant], rng(), bias.bmi_bias)
        scores = Scores(work=work_score, money=money_score,
                        love=love_score, health=health_score)

        work_idx, work = select_indexed(rng, WORK_BANK)
        money_idx, money = select_indexed(rng, MONEY_BANK)
        love_idx, love = select_indexed(rng, LOVE_BANK)
        health_idx, health = select_indexed(rng, HEALTH_BANK)
        if attributes.bmi_band is not None:
            health += HEALTH_SUFFIX[attributes.bmi_band]
        advice_idx, advice = select_indexed(rng, ADVICE_BANK)

        second_seed = None
        success = None
        tier = None
        goal_idx = None
        goal_advice = None
        if not is_body:
            second_seed = goal_seed(data.goal, seed)
            bonus = (make_stream(second_seed)() - 0.5) * GOAL_BONUS_SPREAD
            success = self.goal_success(scores, bonus, lp_bias)
            tier = goal_tier(success)
            goal_idx, goal_advice = select_indexed(rng, GOAL_ADVICE_BANK[tier])

        summary = (
            f"{data.name}님의 {self.year}년 키워드는 '{tone.key}'입니다. {tone.desc} "
            f"특히 {focus} 구간에서 흐름이 좋아질 가능성이 큽니다."
        )

        logger.debug(f"운세 계산: seed={seed} material={material!r}")

        return FortuneResult(
            variant=variant,
            name=data.name,
            birth=data.birth,
            height_cm=data.height_cm if is_body else None,
            weight_kg=data.weight_kg if is_body else None,
            goal=None if is_body else data.goal,
            year=self.year,
            seed_material=material,
            seed=seed,
            goal_seed=second_seed,
            attributes=attributes,
            bias=bias,
            tone=tone,
            focus=focus,
            scores=scores,
            texts=FortuneTexts(
                work=work, money=money, love=love, health=health,
                advice=advice, summary=summary, goal_advice=goal_advice,
            ),
            indices=SelectionIndices(
                tone=tone_idx, focus=focus_idx, work=work_idx, money=money_idx,
                love=love_idx, health=health_idx, advice=advice_idx,
                goal_advice=goal_idx,
            ),
            goal_success=success,
            goal_tier=tier,
        )

    @staticmethod
    def goal_success(scores: Scores, bonus: float, lp_bias: int) -> int:
        """목표 달성 확률 (15~95)"""
        avg = scores.total() / 4
        return js_round(clamp(avg * 0.7 + 25 + bonus + lp_bias, 15, 95))


def compute_fortune(raw: Union[RawInput, dict], variant: Variant = Variant.BODY,
                    year: Optional[int] = None) -> Union[FortuneResult, FortuneError]:
    """편의 함수"""
    calculator = FortuneCalculator(year or DEFAULT_YEAR)
    return calculator.calculate(raw, variant)
