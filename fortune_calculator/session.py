"""마지막 계산 결과 보관

전역 변수 대신 화면(API, 봇) 쪽이 이 객체를 소유하고 내보내기 핸들러에 넘겨준다.
"""
import logging
from collections import OrderedDict
from typing import Optional

from .models import FortuneResult

logger = logging.getLogger(__name__)


class FortuneAppError(Exception):
    """내보내기 계층 오류의 기본 클래스"""


class NoFortuneYet(FortuneAppError):
    """아직 계산된 운세가 없음"""

    def __init__(self, message: str = "먼저 운세를 생성해주세요."):
        super().__init__(message)


class FortuneSession:
    """마지막 결과 하나만 들고 있는다. 결과는 통째로 교체되고 수정되지 않는다."""

    def __init__(self):
        self._last: Optional[FortuneResult] = None

    @property
    def last_result(self) -> Optional[FortuneResult]:
        return self._last

    def remember(self, result: FortuneResult) -> FortuneResult:
        self._last = result
        logger.debug(f"마지막 결과 교체: seed={result.seed}")
        return result

    def require_last(self) -> FortuneResult:
        """공유/복사/저장 전에 호출. 결과가 없으면 NoFortuneYet."""
        if self._last is None:
            raise NoFortuneYet()
        return self._last

    def clear(self) -> None:
        self._last = None


class SessionRegistry:
    """클라이언트 키별 FortuneSession. 오래 안 쓴 세션부터 버린다."""

    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, FortuneSession]" = OrderedDict()

    def __contains__(self, key: str) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, key: str) -> FortuneSession:
        """키에 해당하는 세션. 없으면 새로 만든다."""
        session = self._sessions.get(key)
        if session is None:
            session = FortuneSession()
            self._sessions[key] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug(f"세션 정리: {evicted}")
        else:
            self._sessions.move_to_end(key)
        return session
