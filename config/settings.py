"""애플리케이션 설정"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 / .env 에서 읽는 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        # 모르는 환경 변수는 무시
        extra="ignore",
    )

    # 운세 대상 연도 (시드 문자열 끝에 붙는 값)
    fortune_year: int = 2026

    # Database (테마 설정만 저장)
    database_url: str = "sqlite:///./fortune.db"
    theme_key: str = "fortune_theme"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    share_url: str = "http://localhost:8000/"

    # Telegram
    telegram_bot_token: Optional[str] = None

    # 카카오톡 공유 (JavaScript 키)
    kakao_js_key: Optional[str] = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    @property
    def kakao_enabled(self) -> bool:
        return bool(self.kakao_js_key)


settings = Settings()
