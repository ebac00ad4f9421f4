"""REST API routes for content, accounts, progress and reminders."""

from datetime import date, datetime

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Request

from micro_tutor.auth import AuthError, login, signup
from micro_tutor.config import Settings
from micro_tutor.content.resolver import ContentResolver
from micro_tutor.models.account import Account, LoginRequest, ReminderRequest, SignupRequest
from micro_tutor.models.content import (
    ChatRequest,
    ChatResponse,
    LessonRequest,
    LessonResponse,
    ProficiencyLevel,
    QuizRequest,
    QuizResponse,
)
from micro_tutor.models.progress import ActivityRequest
from micro_tutor.progress.limits import LessonAccessDenied, check_lesson_access
from micro_tutor.progress.tracker import apply_activity, level_for_topic
from micro_tutor.reminders import ReminderScheduler, next_fire_time
from micro_tutor.storage.accounts import AccountStore, SessionRegistry
from micro_tutor.storage.progress import ProgressStore

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

DEFAULT_CHAT_TOPIC = "this topic"


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_resolver(request: Request) -> ContentResolver:
    return request.app.state.resolver


def get_accounts(request: Request) -> AccountStore:
    return request.app.state.accounts


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_progress_store(request: Request) -> ProgressStore:
    return request.app.state.progress


def get_scheduler(request: Request) -> ReminderScheduler:
    return request.app.state.reminders


def optional_account(
    x_session_id: str | None = Header(default=None),
    sessions: SessionRegistry = Depends(get_sessions),
    accounts: AccountStore = Depends(get_accounts),
) -> Account | None:
    user_id = sessions.user_for(x_session_id)
    if user_id is None:
        if x_session_id:
            raise HTTPException(status_code=401, detail="Invalid or expired session")
        return None
    account = accounts.get_by_id(user_id)
    if account is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return account


def current_account(account: Account | None = Depends(optional_account)) -> Account:
    if account is None:
        raise HTTPException(status_code=401, detail="Please log in to continue")
    return account


def _require_topic(topic: str | None) -> str:
    if not topic or not topic.strip():
        raise HTTPException(status_code=400, detail="Topic is required")
    return topic.strip()


def _level(user_level: str | None) -> str:
    return user_level or ProficiencyLevel.BEGINNER.value


# ----- Content -----

@router.post("/lesson")
async def get_lesson(
    body: LessonRequest,
    resolver: ContentResolver = Depends(get_resolver),
    account: Account | None = Depends(optional_account),
    store: ProgressStore = Depends(get_progress_store),
    settings: Settings = Depends(get_settings_dep),
) -> LessonResponse:
    """Lesson text for a topic. Plan limits apply when a session is given."""
    topic = _require_topic(body.topic)
    if account is not None:
        try:
            check_lesson_access(
                account.plan,
                topic,
                store.load(account.id),
                date.today(),
                daily_limit=settings.free_daily_lesson_limit,
                premium_topics=settings.premium_topics,
            )
        except LessonAccessDenied as e:
            logger.info("lesson_access_denied", user_id=account.id, reason=e.reason)
            status = 403 if e.reason == "premium_topic" else 429
            raise HTTPException(status_code=status, detail=e.detail)

    lesson = await resolver.lesson(topic, _level(body.user_level))
    return LessonResponse(lesson=lesson)


@router.post("/quiz")
async def get_quiz(
    body: QuizRequest,
    resolver: ContentResolver = Depends(get_resolver),
) -> QuizResponse:
    """Quiz questions for a topic."""
    topic = _require_topic(body.topic)
    questions = await resolver.quiz(topic, _level(body.user_level))
    return QuizResponse(questions=questions)


@router.post("/chat")
async def chat(
    body: ChatRequest,
    resolver: ContentResolver = Depends(get_resolver),
) -> ChatResponse:
    """Tutor reply to a learner message."""
    if not body.message or not body.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    topic = (body.topic or "").strip() or DEFAULT_CHAT_TOPIC
    reply = await resolver.chat(body.message, topic, _level(body.user_level), notes=body.context)
    return ChatResponse(reply=reply)


# ----- Accounts -----

@router.post("/signup")
async def signup_route(
    body: SignupRequest,
    accounts: AccountStore = Depends(get_accounts),
    sessions: SessionRegistry = Depends(get_sessions),
) -> dict:
    try:
        account, session_id = signup(body, accounts, sessions)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    return {
        "success": True,
        "message": "Account created successfully!",
        "user": account.public(),
        "sessionId": session_id,
    }


@router.post("/login")
async def login_route(
    body: LoginRequest,
    accounts: AccountStore = Depends(get_accounts),
    sessions: SessionRegistry = Depends(get_sessions),
) -> dict:
    try:
        account, session_id = login(body, accounts, sessions)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    return {"success": True, "user": account.public(), "sessionId": session_id}


# ----- Progress -----

@router.get("/progress")
async def get_progress(
    account: Account = Depends(current_account),
    store: ProgressStore = Depends(get_progress_store),
) -> dict:
    record = store.load(account.id)
    return {
        "progress": record.to_client(),
        "levels": {
            key: ProficiencyLevel.from_score(score).value
            for key, score in record.topics.items()
        },
    }


@router.get("/progress/level")
async def get_topic_level(
    topic: str,
    account: Account = Depends(current_account),
    store: ProgressStore = Depends(get_progress_store),
) -> dict:
    record = store.load(account.id)
    return {
        "topic": topic,
        "mastery": record.mastery(topic),
        "level": level_for_topic(record, topic).value,
    }


@router.post("/progress/activity")
async def record_activity(
    body: ActivityRequest,
    account: Account = Depends(current_account),
    store: ProgressStore = Depends(get_progress_store),
) -> dict:
    """Apply a completed lesson or quiz to the user's progress."""
    record = apply_activity(store.load(account.id), body.to_activity(), date.today())
    store.save(account.id, record)
    logger.info(
        "activity_recorded",
        user_id=account.id,
        kind=body.kind,
        topic=body.topic,
        streak=record.current_streak,
    )
    return {"progress": record.to_client()}


# ----- Reminders -----

@router.post("/reminders")
async def set_reminder(
    body: ReminderRequest,
    account: Account = Depends(current_account),
    scheduler: ReminderScheduler = Depends(get_scheduler),
) -> dict:
    """Schedule a daily study reminder for the user."""

    async def notify(fire_at: datetime) -> None:
        logger.info("study_reminder", user_id=account.id, at=fire_at.isoformat())

    try:
        scheduler.schedule_daily(account.id, body.time, notify)
        next_at = next_fire_time(body.time, datetime.now())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"time": body.time, "nextReminderAt": next_at.isoformat()}


# ----- Utility -----

@router.get("/health")
async def health_check(
    accounts: AccountStore = Depends(get_accounts),
    sessions: SessionRegistry = Depends(get_sessions),
    resolver: ContentResolver = Depends(get_resolver),
) -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "users": len(accounts),
        "sessions": len(sessions),
        "remoteGeneration": resolver.generator is not None,
    }
