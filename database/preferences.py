"""라이트/다크 테마 설정 저장소"""
import logging
from enum import Enum
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from config import settings
from .models import Preference

logger = logging.getLogger(__name__)


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


THEME_BADGES = {
    Theme.LIGHT: ("☀️", "라이트"),
    Theme.DARK: ("🌙", "다크"),
}


def theme_badge(theme: Theme) -> Tuple[str, str]:
    """(아이콘, 라벨)"""
    return THEME_BADGES[theme]


class ThemeStore:
    """테마 설정을 고정 키 하나에 저장한다"""

    def __init__(self, db: Session, key: Optional[str] = None):
        self.db = db
        self.key = key or settings.theme_key

    def saved_theme(self) -> Optional[Theme]:
        row = self.db.query(Preference).filter(Preference.key == self.key).first()
        if row is None:
            return None
        try:
            return Theme(row.value)
        except ValueError:
            logger.warning(f"알 수 없는 테마 값 무시: {row.value!r}")
            return None

    def initial_theme(self, prefers_light: bool = False) -> Theme:
        """저장된 값이 없으면 시스템 설정을 따른다"""
        saved = self.saved_theme()
        if saved is not None:
            return saved
        return Theme.LIGHT if prefers_light else Theme.DARK

    def save(self, theme: Theme) -> Theme:
        row = self.db.query(Preference).filter(Preference.key == self.key).first()
        if row is None:
            row = Preference(key=self.key, value=theme.value)
            self.db.add(row)
        else:
            row.value = theme.value
        self.db.commit()
        return theme

    def toggle(self, current: Theme) -> Theme:
        """현재 테마를 뒤집어 저장"""
        new_theme = Theme.DARK if current == Theme.LIGHT else Theme.LIGHT
        return self.save(new_theme)
