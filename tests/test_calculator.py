import pytest
from pydantic import ValidationError

from fortune_calculator import FortuneCalculator, compute_fortune
from fortune_calculator.calculator import derive_seed, goal_tier, score, select, select_indexed
from fortune_calculator.interpretations import (
    ADVICE_BANK, GOAL_ADVICE_BANK, HEALTH_BANK, HEALTH_SUFFIX, MONTH_FOCUS, TONES, WORK_BANK
)
from fortune_calculator.models import (
    BmiBand, ErrorCode, FortuneError, FortuneResult, GoalTier, Scores, Variant
)
from fortune_calculator.normalizer import normalize
from fortune_calculator.rng import make_stream


def test_golden_body_fixture() -> None:
    result = compute_fortune({"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5})

    assert isinstance(result, FortuneResult)
    assert result.seed_material == "김준휘|1999-11-02|175|68.5|2026"
    assert result.seed == 1965077839
    assert result.attributes.zodiac == "전갈자리"
    assert result.attributes.animal == "토끼"
    assert result.attributes.life_path == 5
    assert result.attributes.bmi_rounded == 22.4
    assert result.attributes.bmi_band == BmiBand.NORMAL
    assert (result.scores.work, result.scores.money, result.scores.love, result.scores.health) == (61, 30, 61, 65)
    assert result.indices.tone == 4
    assert result.indices.focus == 3
    assert [result.indices.work, result.indices.money, result.indices.love,
            result.indices.health, result.indices.advice] == [1, 0, 3, 0, 1]
    assert result.tone == TONES[4]
    assert result.focus == MONTH_FOCUS[3]
    assert result.texts.work == WORK_BANK[1]
    assert result.texts.health == HEALTH_BANK[0] + HEALTH_SUFFIX[BmiBand.NORMAL]
    assert result.texts.advice == ADVICE_BANK[1]
    assert result.goal_success is None


@pytest.mark.parametrize(
    ("raw", "seed", "scores", "texts"),
    [
        (
            {"name": "홍길동", "birth": "2001-03-14", "height": 172, "weight": 70.2},
            1539558305, (67, 59, 59, 49), [0, 4, 4, 2, 1],
        ),
        (
            {"name": "이서연", "birth": "1998-07-09", "height": 162, "weight": 54.0},
            3841435558, (86, 71, 66, 49), [4, 3, 1, 1, 2],
        ),
    ],
)
def test_golden_sample_fixtures(raw, seed, scores, texts) -> None:
    result = compute_fortune(raw)

    assert result.seed == seed
    assert (result.scores.work, result.scores.money, result.scores.love, result.scores.health) == scores
    assert [result.indices.work, result.indices.money, result.indices.love,
            result.indices.health, result.indices.advice] == texts


def test_integral_weight_renders_without_decimal_point() -> None:
    result = compute_fortune({"name": "이서연", "birth": "1998-07-09", "height": 162, "weight": 54.0})
    assert result.seed_material == "이서연|1998-07-09|162|54|2026"


def test_golden_goal_fixture() -> None:
    result = compute_fortune({"name": "김준휘", "birth": "1999-11-02", "goal": "마라톤 완주"}, Variant.GOAL)

    assert result.variant == Variant.GOAL
    assert result.seed_material == "김준휘|1999-11-02|마라톤 완주|2026"
    assert result.seed == 1265248189
    assert result.goal_seed == 1563978850
    assert (result.scores.work, result.scores.money, result.scores.love, result.scores.health) == (83, 62, 51, 43)
    assert result.indices.tone == 1
    assert result.indices.focus == 5
    assert result.goal_success == 69
    assert result.goal_tier == GoalTier.MEDIUM
    assert result.indices.goal_advice == 0
    assert result.texts.goal_advice == GOAL_ADVICE_BANK[GoalTier.MEDIUM][0]
    # 목표 변형은 BMI 문구를 붙이지 않는다
    assert result.texts.health == HEALTH_BANK[result.indices.health]
    assert result.attributes.bmi is None


def test_goal_fixture_low_tier() -> None:
    result = compute_fortune({"name": "A", "birth": "2000-01-01", "goal": "Learn Python"}, Variant.GOAL)

    assert result.seed == 3206825876
    assert result.goal_seed == 3045639597
    assert (result.scores.work, result.scores.money, result.scores.love, result.scores.health) == (26, 57, 42, 26)
    assert result.goal_success == 42
    assert result.goal_tier == GoalTier.LOW


def test_same_input_gives_identical_result() -> None:
    raw = {"name": "홍길동", "birth": "2001-03-14", "height": "172", "weight": "70.2"}
    first = FortuneCalculator().calculate(raw)
    second = FortuneCalculator().calculate(dict(raw))
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_year_tag_changes_seed() -> None:
    data = normalize({"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5})
    material, seed = derive_seed(data, 2027)
    assert material.endswith("|2027")
    assert seed != 1965077839

    result = FortuneCalculator(year=2027).calculate_fortune(data)
    assert result.year == 2027
    assert "2027년" in result.texts.summary


def test_scores_and_goal_success_stay_in_bounds() -> None:
    calculator = FortuneCalculator()
    for i in range(150):
        body = calculator.calculate(
            {"name": f"사람{i}", "birth": f"{1950 + i % 60}-{1 + i % 12:02d}-{1 + i % 28:02d}",
             "height": 50 + i, "weight": 10 + i * 1.5},
        )
        goal = calculator.calculate(
            {"name": f"사람{i}", "birth": "1990-05-05", "goal": f"목표 {i}"}, Variant.GOAL,
        )
        for result in (body, goal):
            for value in (result.scores.work, result.scores.money, result.scores.love, result.scores.health):
                assert isinstance(value, int)
                assert 0 <= value <= 100
        assert 15 <= goal.goal_success <= 95
        assert goal.goal_tier == goal_tier(goal.goal_success)


def test_validation_errors_are_returned_not_raised() -> None:
    result = FortuneCalculator().calculate({"name": "A", "birth": "bad-date", "height": 175, "weight": 68})
    assert isinstance(result, FortuneError)
    assert result.code == ErrorCode.INVALID_DATE


def test_summary_sentence() -> None:
    result = compute_fortune({"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5})
    assert result.texts.summary == (
        "김준휘님의 2026년 키워드는 '회복'입니다. "
        "올해는 '리셋'과 '회복'이 다음 도약을 준비합니다. "
        "특히 7~8월: 집중/몰입 구간에서 흐름이 좋아질 가능성이 큽니다."
    )


def test_result_is_immutable() -> None:
    result = compute_fortune({"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5})
    with pytest.raises(ValidationError):
        result.seed = 1


def test_select_and_score_helpers() -> None:
    stream = make_stream(0)
    idx, value = select_indexed(stream, ["a", "b", "c", "d"])
    assert idx == 1  # 0.266 * 4
    assert value == "b"
    assert select(stream, ["a", "b", "c", "d"]) == "a"  # 0.00033 * 4

    assert score(55, 0.5) == 55
    assert score(20, 0.0, -8) == 0
    assert score(58, 0.999, 6) == 94
    assert score(90, 0.99, 8) == 100


def test_goal_tier_thresholds() -> None:
    assert goal_tier(70) == GoalTier.HIGH
    assert goal_tier(69) == GoalTier.MEDIUM
    assert goal_tier(45) == GoalTier.MEDIUM
    assert goal_tier(44) == GoalTier.LOW


def test_goal_success_clamps_to_bounds() -> None:
    top = Scores(work=100, money=100, love=100, health=100)
    bottom = Scores(work=0, money=0, love=0, health=0)

    assert FortuneCalculator.goal_success(top, 10.0, 8) == 95
    assert FortuneCalculator.goal_success(bottom, -10.0, -8) == 15
    # 평균 50 -> 35 + 25 = 60
    assert FortuneCalculator.goal_success(Scores(work=50, money=50, love=50, health=50), 0.0, 0) == 60
