import pytest

from fortune_calculator import FortuneCalculator, FortuneSession, NoFortuneYet, SessionRegistry, Variant
from fortune_calculator.models import FortuneError

BODY_SAMPLE = {"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5}


def test_require_last_before_any_result() -> None:
    session = FortuneSession()
    assert session.last_result is None
    with pytest.raises(NoFortuneYet, match="먼저 운세를 생성해주세요."):
        session.require_last()


def test_remember_replaces_previous_result() -> None:
    calculator = FortuneCalculator()
    session = FortuneSession()

    first = session.remember(calculator.calculate(BODY_SAMPLE))
    assert session.require_last() is first

    second = calculator.calculate(
        {"name": "김준휘", "birth": "1999-11-02", "goal": "마라톤 완주"}, Variant.GOAL
    )
    session.remember(second)
    assert session.require_last() is second


def test_failed_calculation_keeps_last_result() -> None:
    calculator = FortuneCalculator()
    session = FortuneSession()
    good = session.remember(calculator.calculate(BODY_SAMPLE))

    bad = calculator.calculate({"name": "", "birth": "1999-11-02", "height": 175, "weight": 68})
    assert isinstance(bad, FortuneError)
    assert session.last_result is good


def test_clear() -> None:
    session = FortuneSession()
    session.remember(FortuneCalculator().calculate(BODY_SAMPLE))
    session.clear()
    assert session.last_result is None


def test_registry_keeps_sessions_apart() -> None:
    registry = SessionRegistry()
    registry.get("a").remember(FortuneCalculator().calculate(BODY_SAMPLE))

    assert "b" not in registry
    with pytest.raises(NoFortuneYet):
        registry.get("b").require_last()
    assert registry.get("a").require_last().seed == 1965077839
    assert len(registry) == 2


def test_registry_drops_least_recently_used() -> None:
    registry = SessionRegistry(max_sessions=2)
    first = registry.get("a")
    registry.get("b")
    assert registry.get("a") is first
    registry.get("c")

    assert "a" in registry
    assert "b" not in registry
    assert len(registry) == 2
