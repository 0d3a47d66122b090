"""운세 문구 뱅크

문구 데이터만 둔다. 고르는 로직은 calculator.py에 있다.
뱅크의 순서는 재현성에 영향을 주므로 바꾸지 말 것 (추가는 끝에만).
"""
from typing import Dict, List, Tuple

from .models import BmiBand, GoalTier, Tone

# 별자리 (열대 황도대 기준)
ZODIAC_SIGNS: Dict[str, str] = {
    "capricorn": "염소자리",
    "aquarius": "물병자리",
    "pisces": "물고기자리",
    "aries": "양자리",
    "taurus": "황소자리",
    "gemini": "쌍둥이자리",
    "cancer": "게자리",
    "leo": "사자자리",
    "virgo": "처녀자리",
    "libra": "천칭자리",
    "scorpio": "전갈자리",
    "sagittarius": "사수자리",
}

# 2016년(원숭이)부터 시작하는 12지
ANIMALS: Tuple[str, ...] = (
    "원숭이", "닭", "개", "돼지", "쥐", "소",
    "호랑이", "토끼", "용", "뱀", "말", "양",
)
ANIMAL_REFERENCE_YEAR = 2016

TONES: Tuple[Tone, ...] = (
    Tone(key="상승", desc="올해는 '각성'과 '확장'의 기운이 강합니다."),
    Tone(key="안정", desc="올해는 '정리'와 '견고함'이 운을 만듭니다."),
    Tone(key="변화", desc="올해는 '전환'과 '실험'이 핵심입니다."),
    Tone(key="집중", desc="올해는 '선택'과 '몰입'이 성과로 연결됩니다."),
    Tone(key="회복", desc="올해는 '리셋'과 '회복'이 다음 도약을 준비합니다."),
)

MONTH_FOCUS: Tuple[str, ...] = (
    "1~2월: 정리/정돈",
    "3~4월: 시동/실험",
    "5~6월: 확장/협업",
    "7~8월: 집중/몰입",
    "9~10월: 수확/정산",
    "11~12월: 리셋/재설계",
)

WORK_BANK: Tuple[str, ...] = (
    "상반기에는 계획을 '작게 쪼개서' 실행할수록 결과가 빨리 붙습니다. 큰 판보다 작은 승리를 반복해보세요.",
    "올해는 협업 운이 좋습니다. 혼자 끌고 가기보다 역할을 분리하면 속도가 확 올라갑니다.",
    "새 도구/기술을 익히는 흐름이 강합니다. 익숙한 방식 80%, 실험 20%가 안전한 조합이에요.",
    "초반에 방향 재조정 이벤트가 있을 수 있습니다. 바꾸는 걸 실패가 아니라 업데이트로 보세요.",
    "결정해야 할 순간에는 '가장 단순한 다음 행동'이 답일 때가 많습니다. 한 단계만 줄여보세요.",
)

MONEY_BANK: Tuple[str, ...] = (
    "금전운은 '새는 구멍 막기'에서 크게 올라갑니다. 구독/고정비를 한 번만 정리해도 체감이 큽니다.",
    "현금흐름을 안정시키면 운이 좋아집니다. 변동지출 상한선을 정해두면 마음이 편해져요.",
    "기회비용을 계산하는 습관이 돈을 지켜줍니다. '시간 1시간의 값'을 기준으로 결정을 해보세요.",
    "단기 유행보다 누적형 선택이 유리합니다. 작게라도 꾸준히 쌓는 구조가 올해의 키워드예요.",
    "비교 소비를 줄일수록 운이 좋아집니다. '나에게 필요한 기준'을 문장으로 정해두면 흔들림이 줄어요.",
)

LOVE_BANK: Tuple[str, ...] = (
    "관계운은 '말의 온도'가 좌우합니다. 중요한 얘기는 피곤할 때 말고, 컨디션 좋은 시간에 잡아보세요.",
    "올해는 자연스럽게 가까워지는 인연이 있습니다. 억지로 당기기보다 '빈도'를 조금만 늘리면 충분해요.",
    "경계 설정(선 긋기)이 오히려 관계를 편하게 만듭니다. 기대치를 맞추면 갈등이 크게 줄어요.",
    "친한 사이일수록 작은 약속을 지키는 게 운을 올립니다. '사소한 신뢰'가 올해의 큰 복입니다.",
    "내가 원하는 것/싫은 것을 또렷하게 말할수록 좋은 방향으로 흘러갑니다.",
)

HEALTH_BANK: Tuple[str, ...] = (
    "컨디션은 '수면 + 루틴'이 결정합니다. 늦게 자는 날이 있어도 기상 시간을 고정하면 회복이 빨라요.",
    "올해는 과로가 누적되기 쉬우니 '중간 점검'이 필요합니다. 주 1회는 의도적으로 속도를 낮춰보세요.",
    "운동은 강도보다 빈도가 중요합니다. 20분이라도 자주 하는 쪽이 체감이 커요.",
    "카페인 타이밍 조정이 도움이 됩니다. 오후 늦게만 피해도 수면 질이 달라질 수 있어요.",
    "집중력이 떨어질 때는 의지보다 환경 문제일 때가 많습니다. 작업 공간을 단순화해보세요.",
)

ADVICE_BANK: Tuple[str, ...] = (
    "올해의 승부수는 '작게 시작해서 크게 키우기'입니다.",
    "속도가 아니라 '지속가능한 리듬'이 결과를 만듭니다.",
    "선택을 줄이면 에너지가 남고, 에너지가 남으면 운이 좋아집니다.",
    "관계는 자산입니다. 연결을 관리하면 기회가 따라옵니다.",
    "완벽보다 '완료'가 더 강력합니다. 끝낸 것만이 나를 바꿉니다.",
)

# 의학적 조언이 아닌 부드러운 한 줄
HEALTH_SUFFIX: Dict[BmiBand, str] = {
    BmiBand.UNDERWEIGHT: " 너무 빡세게 달리기보다는, 식사/휴식의 리듬부터 잡는 편이 좋습니다.",
    BmiBand.NORMAL: " 지금의 밸런스를 유지하는 게 올해 최고의 전략이에요.",
    BmiBand.OVERWEIGHT: " 루틴을 '가볍게, 꾸준히' 가져가면 체감 성과가 잘 나옵니다.",
    BmiBand.OBESE: " 부담 큰 목표보다, 작게 시작해서 유지하는 쪽이 훨씬 유리합니다.",
}

GOAL_ADVICE_BANK: Dict[GoalTier, Tuple[str, ...]] = {
    GoalTier.HIGH: (
        "흐름이 확실히 당신 편입니다. 목표를 한 단계 더 크게 잡아도 좋아요.",
        "지금의 속도를 유지하면 연내 달성 가능성이 높습니다. 중간 점검만 잊지 마세요.",
        "주변에 목표를 공개하면 응원이 운으로 바뀌는 해입니다.",
        "이미 절반은 이뤘습니다. 마무리 구간에 체력을 남겨두세요.",
    ),
    GoalTier.MEDIUM: (
        "가능성은 충분합니다. 목표를 분기 단위로 쪼개면 확률이 확 올라가요.",
        "속도보다 꾸준함이 관건입니다. 주 단위 체크리스트를 만들어보세요.",
        "하반기에 한 번 더 기회가 옵니다. 상반기엔 기반을 다지는 데 집중하세요.",
        "혼자보다 함께할 때 달성률이 올라갑니다. 같은 목표를 가진 사람을 찾아보세요.",
    ),
    GoalTier.LOW: (
        "올해는 준비의 해입니다. 목표를 작게 줄여 첫 성공 경험부터 만들어보세요.",
        "지금은 방향을 점검할 때입니다. 목표의 '이유'를 다시 적어보세요.",
        "결과보다 과정을 기록하세요. 쌓인 기록이 다음 해의 운이 됩니다.",
        "무리한 일정은 운을 깎습니다. 기한을 넉넉하게 다시 잡아보세요.",
    ),
}

# 랜덤 예시 입력
SAMPLE_INPUTS: List[Dict[str, object]] = [
    {"name": "김준휘", "birth": "1999-11-02", "height": 175, "weight": 68.5},
    {"name": "홍길동", "birth": "2001-03-14", "height": 172, "weight": 70.2},
    {"name": "이서연", "birth": "1998-07-09", "height": 162, "weight": 54.0},
]
