from fortune_calculator import compute_fortune, Variant
from bot.main import format_result_message, main_menu_keyboard, score_bar


def test_score_bar() -> None:
    assert score_bar(0) == "░" * 10
    assert score_bar(100) == "█" * 10
    assert score_bar(61) == "█" * 6 + "░" * 4


def test_result_message_escapes_name() -> None:
    result = compute_fortune({"name": "<b>홍</b>", "birth": "2001-03-14", "height": 172, "weight": 70.2})
    message = format_result_message(result)

    assert "&lt;b&gt;홍&lt;/b&gt;님" in message
    assert "<b>홍</b>" not in message
    assert "<b>일/학업</b>" in message
    assert "목표 달성 가능성" not in message


def test_result_message_goal_line() -> None:
    result = compute_fortune({"name": "김준휘", "birth": "1999-11-02", "goal": "마라톤 완주"}, Variant.GOAL)
    message = format_result_message(result)

    assert "🎯 <b>목표 달성 가능성 69%</b>" in message
    assert result.texts.goal_advice in message


def test_main_menu_has_both_variants() -> None:
    data = [button.callback_data for row in main_menu_keyboard().inline_keyboard for button in row]
    assert "calculate" in data
    assert "calculate_goal" in data
