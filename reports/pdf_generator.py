"""운세 카드 PDF 생성기"""
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from fortune_calculator.models import FortuneResult
from .generator import basis_summary, headline, pills, sections

# reportlab 내장 한글 CID 폰트 (별도 파일 불필요)
KOREAN_FONT = "HYSMyeongJo-Medium"


class PDFGenerator:
    """PDF 생성기"""

    def __init__(self):
        if KOREAN_FONT not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(KOREAN_FONT))
        self.styles = getSampleStyleSheet()
        self._setup_styles()

    def _setup_styles(self):
        """스타일 설정"""
        # 제목
        self.styles.add(ParagraphStyle(
            name='FortuneTitle',
            parent=self.styles['Heading1'],
            fontName=KOREAN_FONT,
            fontSize=22,
            textColor=colors.HexColor('#2C3E50'),
            spaceAfter=12,
            alignment=TA_CENTER
        ))

        # 소제목
        self.styles.add(ParagraphStyle(
            name='FortuneHeading',
            parent=self.styles['Heading2'],
            fontName=KOREAN_FONT,
            fontSize=14,
            textColor=colors.HexColor('#6246EA'),
            spaceAfter=6,
            spaceBefore=10
        ))

        # 본문
        self.styles.add(ParagraphStyle(
            name='FortuneBody',
            parent=self.styles['Normal'],
            fontName=KOREAN_FONT,
            fontSize=11,
            leading=16,
            textColor=colors.HexColor('#2C3E50'),
            alignment=TA_JUSTIFY,
            spaceAfter=4
        ))

        self.styles.add(ParagraphStyle(
            name='FortuneSmall',
            parent=self.styles['FortuneBody'],
            fontSize=8,
            leading=11,
            textColor=colors.HexColor('#7F8C8D')
        ))

    def _paragraph(self, text: str, style: str) -> Paragraph:
        return Paragraph(escape(text).replace("\n", "<br/>"), self.styles[style])

    def generate_pdf(self, result: FortuneResult) -> bytes:
        """PDF 바이트를 돌려준다"""
        buffer = BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4, title=headline(result))
        story = [
            self._paragraph(headline(result), 'FortuneTitle'),
            self._paragraph(result.texts.summary, 'FortuneBody'),
            self._paragraph(" · ".join(pills(result)), 'FortuneSmall'),
            Spacer(1, 6 * mm),
        ]

        # 점수 표
        score_rows = [['항목', '점수']]
        score_rows += [[label, f"{value} / 100"] for label, value in result.scores.as_labels().items()]
        score_table = Table(score_rows, colWidths=[90 * mm, 60 * mm])
        score_table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, -1), KOREAN_FONT),
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#6246EA')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (1, 0), (1, -1), 'CENTER'),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#BDC3C7')),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F4F5FB')])
        ]))
        story.append(score_table)
        story.append(Spacer(1, 6 * mm))

        for title, body in sections(result):
            story.append(self._paragraph(title, 'FortuneHeading'))
            story.append(self._paragraph(body, 'FortuneBody'))

        story.append(Spacer(1, 10 * mm))
        story.append(self._paragraph(basis_summary(result), 'FortuneSmall'))

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()


def generate_pdf_report(result: FortuneResult) -> bytes:
    """편의 함수"""
    generator = PDFGenerator()
    return generator.generate_pdf(result)
