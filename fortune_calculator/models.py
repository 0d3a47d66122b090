"""운세 계산 데이터 모델"""
from enum import Enum
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .utils import js_round


class Variant(str, Enum):
    """입력 형태"""
    BODY = "body"  # 키/몸무게
    GOAL = "goal"  # 올해 목표


class ErrorCode(str, Enum):
    """입력 검증 오류 코드"""
    EMPTY_NAME = "EmptyName"
    EMPTY_GOAL = "EmptyGoal"
    INVALID_DATE = "InvalidDate"
    OUT_OF_RANGE = "OutOfRange"


class BmiBand(str, Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class GoalTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RawInput(BaseModel):
    """폼에서 넘어온 값 그대로 (검증 전). 타입 변환은 normalizer가 한다."""
    name: Any = None
    birth: Any = None
    height: Any = None
    weight: Any = None
    goal: Any = None


class _NormalizedBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    # 달력 검증은 하지 않는다 (13월, 32일도 그대로 통과)
    birth_year: int = Field(ge=0, le=9999)
    birth_month: int = Field(ge=0, le=99)
    birth_day: int = Field(ge=0, le=99)

    @property
    def birth(self) -> str:
        """YYYY-MM-DD"""
        return f"{self.birth_year:04d}-{self.birth_month:02d}-{self.birth_day:02d}"


class BodyInput(_NormalizedBase):
    """이름 + 생년월일 + 키/몸무게"""
    variant: Literal["body"] = "body"
    height_cm: float = Field(ge=50, le=250)
    weight_kg: float = Field(ge=10, le=250)


class GoalInput(_NormalizedBase):
    """이름 + 생년월일 + 목표"""
    variant: Literal["goal"] = "goal"
    goal: str = Field(min_length=1)


class FortuneError(BaseModel):
    """사용자에게 보여줄 검증 오류"""
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str


class Tone(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    desc: str


class DerivedAttributes(BaseModel):
    """생년월일/체형에서 결정론적으로 얻는 값"""
    model_config = ConfigDict(frozen=True)

    zodiac: str
    animal: str
    life_path: int = Field(ge=1, le=9)

    # BODY 변형에서만 채워짐
    bmi: Optional[float] = None
    bmi_rounded: Optional[float] = None
    bmi_band: Optional[BmiBand] = None


class BiasTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    life_path_bias: int  # -8 ~ +8
    bmi_bias: int = 0


class Scores(BaseModel):
    model_config = ConfigDict(frozen=True)

    work: int = Field(ge=0, le=100)
    money: int = Field(ge=0, le=100)
    love: int = Field(ge=0, le=100)
    health: int = Field(ge=0, le=100)

    def total(self) -> int:
        return self.work + self.money + self.love + self.health

    def overall(self) -> int:
        """공유용 종합 점수 (반올림 평균)"""
        return js_round(self.total() / 4)

    def as_labels(self) -> Dict[str, int]:
        return {
            "일/학업": self.work,
            "금전": self.money,
            "연애/관계": self.love,
            "건강/컨디션": self.health,
        }


class FortuneTexts(BaseModel):
    model_config = ConfigDict(frozen=True)

    work: str
    money: str
    love: str
    health: str
    advice: str
    summary: str
    goal_advice: Optional[str] = None


class SelectionIndices(BaseModel):
    """텍스트 뱅크에서 뽑힌 위치 (재현성 검증용)"""
    model_config = ConfigDict(frozen=True)

    tone: int
    focus: int
    work: int
    money: int
    love: int
    health: int
    advice: int
    goal_advice: Optional[int] = None


class FortuneResult(BaseModel):
    """한 번의 계산 결과. 생성 후 변경하지 않는다."""
    model_config = ConfigDict(frozen=True)

    variant: Variant
    name: str
    birth: str
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    goal: Optional[str] = None
    year: int

    # 시드
    seed_material: str
    seed: int = Field(ge=0, le=0xFFFFFFFF)
    goal_seed: Optional[int] = None

    attributes: DerivedAttributes
    bias: BiasTerms
    tone: Tone
    focus: str
    scores: Scores
    texts: FortuneTexts
    indices: SelectionIndices

    # GOAL 변형 전용
    goal_success: Optional[int] = Field(default=None, ge=15, le=95)
    goal_tier: Optional[GoalTier] = None
