"""운세 결과 내보내기: 복사용 텍스트, 카카오톡 공유 데이터, 카드 이미지"""
import io
import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from fortune_calculator.models import FortuneResult, Variant
from fortune_calculator.session import FortuneAppError
from fortune_calculator.utils import format_number

logger = logging.getLogger(__name__)

KAKAO_IMAGE_URL = "https://developers.kakao.com/assets/img/about/logos/kakaolink/kakaolink_btn_medium.png"

# 한글 글리프가 있는 폰트 우선
FONT_PATHS = [
    "/usr/share/fonts/truetype/nanum/NanumGothic.ttf",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    "/System/Library/Fonts/AppleSDGothicNeo.ttc",
    "C:/Windows/Fonts/malgun.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
]

PALETTES = {
    "dark": {
        "background": (17, 20, 34),
        "card": (28, 32, 52),
        "text": (236, 239, 255),
        "muted": (150, 158, 190),
        "accent": (138, 116, 255),
        "bar": (52, 58, 88),
    },
    "light": {
        "background": (244, 245, 251),
        "card": (255, 255, 255),
        "text": (30, 34, 52),
        "muted": (110, 116, 140),
        "accent": (98, 76, 230),
        "bar": (226, 228, 240),
    },
}


class ShareNotConfigured(FortuneAppError):
    """카카오 JavaScript 키가 설정되지 않음"""

    def __init__(self, message: str = "카카오 JavaScript 키를 설정해주세요."):
        super().__init__(message)


def headline(result: FortuneResult) -> str:
    return f"{result.year} 운세 · {result.name}님"


def pills(result: FortuneResult) -> List[str]:
    """카드 상단 태그"""
    attrs = result.attributes
    items = [
        f"별자리: {attrs.zodiac}",
        f"띠: {attrs.animal}",
        f"라이프패스: {attrs.life_path}",
    ]
    if result.variant == Variant.BODY:
        items.append(f"BMI: {format_number(attrs.bmi_rounded)}")
    else:
        items.append(f"목표: {result.goal}")
    return items


def sections(result: FortuneResult) -> List[Tuple[str, str]]:
    """(제목, 본문) 목록"""
    texts = result.texts
    items = [
        ("일/학업", texts.work),
        ("금전", texts.money),
        ("연애/관계", texts.love),
        ("건강/컨디션", texts.health),
        ("올해의 조언", texts.advice),
    ]
    if result.goal_success is not None:
        items.append((f"목표 달성 가능성 {result.goal_success}%", texts.goal_advice or ""))
    return items


def basis_summary(result: FortuneResult) -> str:
    """생성 근거 요약 (같은 입력이면 같은 결과라는 것을 보여준다)"""
    attrs = result.attributes
    facts = f"별자리: {attrs.zodiac} / 띠: {attrs.animal} / 라이프패스: {attrs.life_path}"
    if attrs.bmi_rounded is not None:
        facts += f" / BMI: {format_number(attrs.bmi_rounded)}"
    lines = [
        "[생성 근거 요약]",
        f"- seed: {result.seed} (입력값 기반 결정론)",
        f"- 입력: {result.seed_material}",
        f"- {facts}",
        f"- 올해 키워드: {result.tone.key} / 포커스: {result.focus}",
    ]
    if result.goal_seed is not None:
        lines.append(f"- 목표 seed: {result.goal_seed}")
    return "\n".join(lines)


class ReportGenerator:
    """텍스트/이미지 결과물 생성기"""

    def __init__(self, kakao_js_key: Optional[str] = None, page_url: str = ""):
        self.kakao_js_key = kakao_js_key
        self.page_url = page_url

    def generate_text_report(self, result: FortuneResult) -> str:
        """클립보드 복사용 전체 텍스트"""
        lines = [
            f"🔮 {headline(result)}",
            "",
            result.texts.summary,
            "",
            " | ".join(pills(result)),
            "",
        ]
        for label, value in result.scores.as_labels().items():
            lines.append(f"• {label}: {value} / 100")
        lines.append("")
        for title, body in sections(result):
            lines.append(f"[{title}]")
            lines.append(body)
            lines.append("")
        lines.append(basis_summary(result))
        return "\n".join(lines)

    def generate_share_payload(self, result: FortuneResult) -> Dict[str, object]:
        """카카오톡 피드 공유 데이터 (Kakao.Share.sendDefault 인자)"""
        if not self.kakao_js_key:
            raise ShareNotConfigured()

        link = {"mobileWebUrl": self.page_url, "webUrl": self.page_url}
        return {
            "objectType": "feed",
            "content": {
                "title": f"{result.name}님의 {result.year} 운세",
                "description": (
                    f"올해 키워드: {result.tone.key} | 종합점수: {result.scores.overall()}점\n"
                    f"{result.texts.advice}"
                ),
                "imageUrl": KAKAO_IMAGE_URL,
                "link": link,
            },
            "buttons": [
                {"title": "나도 운세 보기", "link": dict(link)},
            ],
        }

    def _load_font(self, size: int):
        for path in FONT_PATHS:
            if not os.path.exists(path):
                continue
            try:
                return ImageFont.truetype(path, size)
            except OSError as e:
                logger.warning(f"폰트를 불러오지 못함 {path}: {e}")
        return ImageFont.load_default(size=size)

    @staticmethod
    def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
        """글자 단위 줄바꿈 (한글은 띄어쓰기가 적어서 단어 단위로 자르지 않는다)"""
        lines = []
        current = ""
        for ch in text:
            candidate = current + ch
            if current and draw.textlength(candidate, font=font) > max_width:
                lines.append(current.rstrip())
                current = ch.lstrip()
            else:
                current = candidate
        if current:
            lines.append(current)
        return lines

    def generate_visual_card(self, result: FortuneResult, theme: str = "dark") -> bytes:
        """결과 카드를 PNG로 그린다"""
        palette = PALETTES.get(theme, PALETTES["dark"])
        width = 720
        padding = 40
        inner = width - padding * 2

        title_font = self._load_font(32)
        body_font = self._load_font(18)
        small_font = self._load_font(15)

        # 높이를 먼저 계산하기 위한 임시 캔버스
        measure = ImageDraw.Draw(Image.new("RGB", (width, 10)))
        summary_lines = self._wrap(measure, result.texts.summary, body_font, inner)
        section_lines = [
            (title, self._wrap(measure, body, body_font, inner))
            for title, body in sections(result)
        ]

        line_h = 28
        height = padding + 50 + len(summary_lines) * line_h + 20
        height += 40  # 태그
        height += 2 * 70 + 20  # 점수 2x2
        for _, wrapped in section_lines:
            height += 30 + len(wrapped) * line_h + 14
        height += padding

        img = Image.new("RGB", (width, height), color=palette["background"])
        draw = ImageDraw.Draw(img)
        draw.rounded_rectangle(
            [12, 12, width - 12, height - 12], radius=24, fill=palette["card"]
        )

        y = padding
        draw.text((padding, y), headline(result), fill=palette["text"], font=title_font)
        y += 50
        for line in summary_lines:
            draw.text((padding, y), line, fill=palette["muted"], font=body_font)
            y += line_h
        y += 20

        x = padding
        for pill in pills(result):
            w = int(draw.textlength(pill, font=small_font)) + 24
            draw.rounded_rectangle([x, y, x + w, y + 28], radius=14, outline=palette["accent"], width=2)
            draw.text((x + 12, y + 5), pill, fill=palette["text"], font=small_font)
            x += w + 8
        y += 40

        tile_w = (inner - 20) // 2
        for i, (label, value) in enumerate(result.scores.as_labels().items()):
            tx = padding + (i % 2) * (tile_w + 20)
            ty = y + (i // 2) * 70
            draw.text((tx, ty), label, fill=palette["muted"], font=small_font)
            draw.text((tx, ty + 20), f"{value} / 100", fill=palette["text"], font=body_font)
            bar_y = ty + 48
            draw.rounded_rectangle([tx, bar_y, tx + tile_w, bar_y + 8], radius=4, fill=palette["bar"])
            if value > 0:
                draw.rounded_rectangle(
                    [tx, bar_y, tx + max(8, tile_w * value // 100), bar_y + 8],
                    radius=4, fill=palette["accent"],
                )
        y += 2 * 70 + 20

        for title, wrapped in section_lines:
            draw.text((padding, y), title, fill=palette["accent"], font=body_font)
            y += 30
            for line in wrapped:
                draw.text((padding, y), line, fill=palette["text"], font=body_font)
                y += line_h
            y += 14

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
