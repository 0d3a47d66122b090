"""FastAPI 애플리케이션"""
import io
import logging
import random
import uuid
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from config import settings
from database import Theme, ThemeStore, get_db, init_db, theme_badge
from fortune_calculator import (
    FortuneCalculator, FortuneError, FortuneSession, NoFortuneYet, RawInput,
    SessionRegistry, Variant
)
from fortune_calculator.interpretations import SAMPLE_INPUTS
from reports import PDFGenerator, ReportGenerator, ShareNotConfigured

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=settings.log_level
)
logger = logging.getLogger(__name__)

calculator = FortuneCalculator(settings.fortune_year)

# 마지막 결과는 이 쿠키로 구분한 클라이언트마다 따로 보관한다
SESSION_COOKIE = "fortune_session"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="2026 운세 API",
    description="이름/생년월일 기반 결정론적 운세 생성",
    version="1.0.0",
    lifespan=lifespan
)
app.state.sessions = SessionRegistry()


# 의존성
def get_session(request: Request, response: Response) -> FortuneSession:
    """클라이언트별 마지막 결과 보관소. 쿠키가 없거나 모르는 값이면 새로 발급한다."""
    registry: SessionRegistry = request.app.state.sessions
    key = request.cookies.get(SESSION_COOKIE)
    if not key or key not in registry:
        key = uuid.uuid4().hex
        response.set_cookie(SESSION_COOKIE, key, httponly=True, samesite="lax")
    return registry.get(key)


def get_report_generator() -> ReportGenerator:
    return ReportGenerator(kakao_js_key=settings.kakao_js_key, page_url=settings.share_url)


# 요청 모델
class FortuneRequest(BaseModel):
    variant: Variant = Variant.BODY
    name: Any = None
    birth: Any = None
    height: Any = None
    weight: Any = None
    goal: Any = None


@app.exception_handler(NoFortuneYet)
async def no_fortune_handler(request: Request, exc: NoFortuneYet):
    return JSONResponse(status_code=409, content={"success": False, "detail": str(exc)})


@app.exception_handler(ShareNotConfigured)
async def share_not_configured_handler(request: Request, exc: ShareNotConfigured):
    return JSONResponse(status_code=503, content={"success": False, "detail": str(exc)})


def _run(raw: RawInput, variant: Variant, session: FortuneSession):
    """계산하고 성공하면 마지막 결과로 기억한다"""
    result = calculator.calculate(raw, variant)
    if isinstance(result, FortuneError):
        raise HTTPException(
            status_code=422,
            detail={"code": result.code.value, "message": result.message}
        )
    session.remember(result)
    logger.info(f"운세 생성: variant={variant.value} seed={result.seed}")
    return {
        "success": True,
        "data": result.model_dump(mode="json")
    }


@app.get("/")
async def root():
    """루트"""
    return {
        "message": "2026 운세 API",
        "version": "1.0.0",
        "docs": "/docs",
        "kakao_share": settings.kakao_enabled
    }


@app.post("/api/fortune")
async def create_fortune(request: FortuneRequest, session: FortuneSession = Depends(get_session)):
    """폼 제출"""
    raw = RawInput(**request.model_dump(exclude={"variant"}))
    return _run(raw, request.variant, session)


@app.post("/api/fortune/random")
async def random_fortune(index: Optional[int] = None,
                         session: FortuneSession = Depends(get_session)):
    """예시 입력으로 계산"""
    if index is None:
        sample = random.choice(SAMPLE_INPUTS)
    elif 0 <= index < len(SAMPLE_INPUTS):
        sample = SAMPLE_INPUTS[index]
    else:
        raise HTTPException(status_code=404, detail="Sample not found")

    response = _run(RawInput(**sample), Variant.BODY, session)
    response["sample"] = sample
    return response


@app.get("/api/fortune/last")
async def last_fortune(session: FortuneSession = Depends(get_session)):
    """마지막 결과"""
    result = session.require_last()
    return {
        "success": True,
        "data": result.model_dump(mode="json")
    }


@app.get("/api/fortune/last/text", response_class=PlainTextResponse)
async def last_fortune_text(session: FortuneSession = Depends(get_session),
                            generator: ReportGenerator = Depends(get_report_generator)):
    """복사용 텍스트"""
    return generator.generate_text_report(session.require_last())


@app.get("/api/fortune/last/share")
async def last_fortune_share(session: FortuneSession = Depends(get_session),
                             generator: ReportGenerator = Depends(get_report_generator)):
    """카카오톡 공유 데이터"""
    payload = generator.generate_share_payload(session.require_last())
    return {
        "success": True,
        "kakao_js_key": generator.kakao_js_key,
        "payload": payload
    }


@app.get("/api/fortune/last/image")
async def last_fortune_image(theme: Theme = Theme.DARK,
                             session: FortuneSession = Depends(get_session),
                             generator: ReportGenerator = Depends(get_report_generator)):
    """결과 카드 이미지 저장"""
    image = generator.generate_visual_card(session.require_last(), theme=theme.value)
    return StreamingResponse(
        io.BytesIO(image),
        media_type="image/png",
        headers={"Content-Disposition": "attachment; filename=fortune.png"}
    )


@app.get("/api/fortune/last/pdf")
async def last_fortune_pdf(session: FortuneSession = Depends(get_session)):
    """결과 카드 PDF"""
    pdf = PDFGenerator().generate_pdf(session.require_last())
    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=fortune.pdf"}
    )


def _theme_response(theme: Theme):
    icon, label = theme_badge(theme)
    return {"theme": theme.value, "icon": icon, "label": label}


@app.get("/api/theme")
async def get_theme(prefers_light: bool = False, db: Session = Depends(get_db)):
    """저장된 테마 (없으면 시스템 설정)"""
    return _theme_response(ThemeStore(db).initial_theme(prefers_light))


@app.post("/api/theme/toggle")
async def toggle_theme(prefers_light: bool = False, db: Session = Depends(get_db)):
    """테마 전환"""
    store = ThemeStore(db)
    current = store.initial_theme(prefers_light)
    return _theme_response(store.toggle(current))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
