"""운세 텔레그램 봇"""
import html
import logging
import random

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ChatAction, ParseMode
from telegram.ext import (
    Application, CallbackQueryHandler, CommandHandler, ContextTypes,
    ConversationHandler, MessageHandler, filters
)

from config import settings
from fortune_calculator import (
    FortuneCalculator, FortuneError, FortuneResult, FortuneSession, NoFortuneYet,
    RawInput, Variant
)
from fortune_calculator.interpretations import SAMPLE_INPUTS
from fortune_calculator.normalizer import (
    HEIGHT_MESSAGE, HEIGHT_RANGE, MESSAGES, WEIGHT_MESSAGE, WEIGHT_RANGE,
    normalize_text, parse_birth, to_number
)
from fortune_calculator.models import ErrorCode
from reports import PDFGenerator, ReportGenerator
from reports.generator import pills

# 로깅 설정
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=settings.log_level
)
logger = logging.getLogger(__name__)

# 대화 상태
WAITING_NAME, WAITING_BIRTH, WAITING_HEIGHT, WAITING_WEIGHT, WAITING_GOAL = range(5)

calculator = FortuneCalculator(settings.fortune_year)
report_generator = ReportGenerator(kakao_js_key=settings.kakao_js_key, page_url=settings.share_url)

CANCEL_KEYBOARD = InlineKeyboardMarkup([[InlineKeyboardButton("🔙 취소", callback_data="back_to_main")]])


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton("✨ 운세 보기", callback_data="calculate")],
        [InlineKeyboardButton("🎯 목표 운세", callback_data="calculate_goal")],
        [
            InlineKeyboardButton("🎲 랜덤 예시", callback_data="random"),
            InlineKeyboardButton("💬 도움말", callback_data="help")
        ]
    ])


def result_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [
            InlineKeyboardButton("📋 텍스트 복사", callback_data="copy_text"),
            InlineKeyboardButton("📄 PDF 저장", callback_data="save_pdf")
        ],
        [InlineKeyboardButton("🔄 다시 보기", callback_data="calculate")],
        [InlineKeyboardButton("🏠 메인 메뉴", callback_data="back_to_main")]
    ])


def score_bar(value: int, width: int = 10) -> str:
    """점수 막대"""
    filled = round(value / 100 * width)
    return "█" * filled + "░" * (width - filled)


def format_result_message(result: FortuneResult) -> str:
    """결과 카드 HTML 메시지"""
    lines = [
        f"🔮 <b>{result.year} 운세 · {html.escape(result.name)}님</b>",
        "",
        html.escape(result.texts.summary),
        "",
        " · ".join(html.escape(p) for p in pills(result)),
        "",
    ]
    for label, value in result.scores.as_labels().items():
        lines.append(f"<b>{label}</b> <code>{score_bar(value)}</code> {value}")
    lines.append("")
    lines.append(f"💡 {html.escape(result.texts.advice)}")
    if result.goal_success is not None:
        lines.append(f"🎯 <b>목표 달성 가능성 {result.goal_success}%</b>")
        lines.append(html.escape(result.texts.goal_advice or ""))
    return "\n".join(lines)


def get_session(context: ContextTypes.DEFAULT_TYPE) -> FortuneSession:
    """사용자별 마지막 결과 보관소"""
    session = context.user_data.get('session')
    if session is None:
        session = FortuneSession()
        context.user_data['session'] = session
    return session


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """/start"""
    user = update.effective_user
    await update.message.reply_text(
        f"👋 <b>{html.escape(user.first_name or '')}님, 반가워요!</b>\n\n"
        f"이름과 생년월일로 <b>{settings.fortune_year}년 운세</b>를 뽑아드립니다.\n"
        "같은 입력이면 언제나 같은 결과가 나와요.",
        reply_markup=main_menu_keyboard(),
        parse_mode=ParseMode.HTML
    )


async def begin(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """입력 시작 (키/몸무게 또는 목표)"""
    query = update.callback_query
    await query.answer()

    variant = Variant.GOAL if query.data == "calculate_goal" else Variant.BODY
    context.user_data['variant'] = variant
    context.user_data['raw'] = {}

    await query.edit_message_text(
        "👤 <b>이름</b>을 입력해주세요.",
        reply_markup=CANCEL_KEYBOARD,
        parse_mode=ParseMode.HTML
    )
    return WAITING_NAME


async def receive_name(update: Update, context: ContextTypes.DEFAULT_TYPE):
    name = normalize_text(update.message.text)
    if not name:
        await update.message.reply_text(MESSAGES[ErrorCode.EMPTY_NAME], reply_markup=CANCEL_KEYBOARD)
        return WAITING_NAME

    context.user_data['raw']['name'] = name
    await update.message.reply_text(
        "📅 <b>생년월일</b>을 <code>YYYY-MM-DD</code> 형식으로 입력해주세요.\n\n"
        "💡 <i>예: 1999-11-02</i>",
        reply_markup=CANCEL_KEYBOARD,
        parse_mode=ParseMode.HTML
    )
    return WAITING_BIRTH


async def receive_birth(update: Update, context: ContextTypes.DEFAULT_TYPE):
    birth = normalize_text(update.message.text)
    if parse_birth(birth) is None:
        await update.message.reply_text(MESSAGES[ErrorCode.INVALID_DATE], reply_markup=CANCEL_KEYBOARD)
        return WAITING_BIRTH

    context.user_data['raw']['birth'] = birth
    if context.user_data.get('variant') == Variant.GOAL:
        await update.message.reply_text(
            "🎯 올해 이루고 싶은 <b>목표</b>를 입력해주세요.",
            reply_markup=CANCEL_KEYBOARD,
            parse_mode=ParseMode.HTML
        )
        return WAITING_GOAL

    await update.message.reply_text(
        "📏 <b>키(cm)</b>를 입력해주세요.",
        reply_markup=CANCEL_KEYBOARD,
        parse_mode=ParseMode.HTML
    )
    return WAITING_HEIGHT


async def receive_height(update: Update, context: ContextTypes.DEFAULT_TYPE):
    height = to_number(update.message.text)
    low, high = HEIGHT_RANGE
    if not low <= height <= high:
        await update.message.reply_text(HEIGHT_MESSAGE, reply_markup=CANCEL_KEYBOARD)
        return WAITING_HEIGHT

    context.user_data['raw']['height'] = height
    await update.message.reply_text(
        "⚖️ <b>몸무게(kg)</b>를 입력해주세요.",
        reply_markup=CANCEL_KEYBOARD,
        parse_mode=ParseMode.HTML
    )
    return WAITING_WEIGHT


async def receive_weight(update: Update, context: ContextTypes.DEFAULT_TYPE):
    weight = to_number(update.message.text)
    low, high = WEIGHT_RANGE
    if not low <= weight <= high:
        await update.message.reply_text(WEIGHT_MESSAGE, reply_markup=CANCEL_KEYBOARD)
        return WAITING_WEIGHT

    context.user_data['raw']['weight'] = weight
    await send_fortune(update.message, context, RawInput(**context.user_data['raw']), Variant.BODY)
    return ConversationHandler.END


async def receive_goal(update: Update, context: ContextTypes.DEFAULT_TYPE):
    goal = normalize_text(update.message.text)
    if not goal:
        await update.message.reply_text(MESSAGES[ErrorCode.EMPTY_GOAL], reply_markup=CANCEL_KEYBOARD)
        return WAITING_GOAL

    context.user_data['raw']['goal'] = goal
    await send_fortune(update.message, context, RawInput(**context.user_data['raw']), Variant.GOAL)
    return ConversationHandler.END


async def send_fortune(message, context: ContextTypes.DEFAULT_TYPE, raw: RawInput, variant: Variant):
    """계산 후 카드 이미지와 텍스트를 보낸다"""
    await message.chat.send_action(ChatAction.UPLOAD_PHOTO)

    result = calculator.calculate(raw, variant)
    if isinstance(result, FortuneError):
        await message.reply_text(f"⚠️ {result.message}", reply_markup=main_menu_keyboard())
        return

    get_session(context).remember(result)
    logger.info(f"운세 생성: user={message.chat.id} seed={result.seed}")

    await message.reply_photo(photo=report_generator.generate_visual_card(result))
    await message.reply_text(
        format_result_message(result),
        reply_markup=result_keyboard(),
        parse_mode=ParseMode.HTML
    )


async def button_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """대화 밖 버튼"""
    query = update.callback_query
    await query.answer()

    if query.data == "random":
        sample = random.choice(SAMPLE_INPUTS)
        await send_fortune(query.message, context, RawInput(**sample), Variant.BODY)

    elif query.data in ("copy_text", "save_pdf"):
        try:
            result = get_session(context).require_last()
        except NoFortuneYet as e:
            await query.message.reply_text(str(e), reply_markup=main_menu_keyboard())
            return

        if query.data == "copy_text":
            text = report_generator.generate_text_report(result)
            await query.message.reply_text(f"<pre>{html.escape(text)}</pre>", parse_mode=ParseMode.HTML)
        else:
            pdf = PDFGenerator().generate_pdf(result)
            await query.message.reply_document(document=pdf, filename="fortune.pdf")

    elif query.data == "help":
        await query.edit_message_text(
            "💬 <b>도움말</b>\n\n"
            "1️⃣ 이름 → 2️⃣ 생년월일(YYYY-MM-DD) → 3️⃣ 키/몸무게 또는 목표\n\n"
            "<code>/start</code> — 메인 메뉴\n"
            "<code>/cancel</code> — 입력 취소",
            reply_markup=main_menu_keyboard(),
            parse_mode=ParseMode.HTML
        )

    elif query.data == "back_to_main":
        await query.edit_message_text("🏠 메인 메뉴", reply_markup=main_menu_keyboard())


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """입력 취소"""
    context.user_data.pop('raw', None)
    if update.callback_query:
        await update.callback_query.answer()
        await update.callback_query.edit_message_text("🏠 메인 메뉴", reply_markup=main_menu_keyboard())
    else:
        await update.message.reply_text("입력을 취소했습니다.", reply_markup=main_menu_keyboard())
    return ConversationHandler.END


def main():
    """봇 실행"""
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not set")

    application = Application.builder().token(settings.telegram_bot_token).build()

    text_input = filters.TEXT & ~filters.COMMAND
    conv_handler = ConversationHandler(
        entry_points=[CallbackQueryHandler(begin, pattern="^calculate(_goal)?$")],
        states={
            WAITING_NAME: [MessageHandler(text_input, receive_name)],
            WAITING_BIRTH: [MessageHandler(text_input, receive_birth)],
            WAITING_HEIGHT: [MessageHandler(text_input, receive_height)],
            WAITING_WEIGHT: [MessageHandler(text_input, receive_weight)],
            WAITING_GOAL: [MessageHandler(text_input, receive_goal)],
        },
        fallbacks=[
            CommandHandler("cancel", cancel),
            CallbackQueryHandler(cancel, pattern="^back_to_main$"),
        ],
    )

    application.add_handler(CommandHandler("start", start))
    application.add_handler(conv_handler)
    application.add_handler(CallbackQueryHandler(button_handler))

    logger.info("봇 시작...")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == '__main__':
    main()
