import asyncio
import json
from datetime import datetime, timezone
from typing import Awaitable

from app.features.waitlist.schemas.waitlist import (
    NotificationOutcome,
    PersistenceOutcome,
    SignupRecord,
    SignupSubmission,
    WaitlistResult,
    validate_submission,
)
from app.features.waitlist.utils.emailer import (
    CONFIRMATION_SUBJECT,
    alert_subject,
    render_alert,
    render_confirmation,
)
from app.platform.config import Settings
from app.platform.exceptions import (
    STORE_NOT_CONFIGURED_MESSAGE,
    ServiceNotConfigured,
    StatsUnavailable,
    StoreReadFailed,
    StoreWriteFailed,
)
from app.platform.logger import get_logger
from app.platform.services.email import ResendMailer
from app.platform.services.supabase import SupabaseStore

logger = get_logger("waitlist_service")

JOINED_MESSAGE = "Great news—you're in! Check your inbox in a few minutes for your welcome note."


async def persist_signup(
    settings: Settings, store: SupabaseStore, submission: SignupSubmission, joined_at: datetime
) -> PersistenceOutcome:
    """
    Insert the signup. AlreadyRegistered propagates to the caller; every
    other store failure is recorded as FAILED so notifications still go out.
    """
    if not settings.store_configured:
        return PersistenceOutcome.SKIPPED

    record = SignupRecord.from_submission(submission, joined_at)
    try:
        await store.insert_signup(record.model_dump(mode="json"))
    except StoreWriteFailed as e:
        logger.error(f"Failed to sync waitlist to Supabase: {e}")
        return PersistenceOutcome.FAILED
    return PersistenceOutcome.SYNCED


async def _track(channel: str, send: Awaitable[None]) -> NotificationOutcome:
    try:
        await send
    except Exception as e:
        logger.error(f"Failed to send {channel}: {e}")
        return NotificationOutcome.FAILED
    return NotificationOutcome.SENT


async def _send_confirmation(mailer: ResendMailer, submission: SignupSubmission) -> None:
    await mailer.send(submission.email, CONFIRMATION_SUBJECT, render_confirmation(submission))


async def _send_alert(
    mailer: ResendMailer, to_email: str, submission: SignupSubmission, joined_at: datetime
) -> None:
    await mailer.send(to_email, alert_subject(submission), render_alert(submission, joined_at))


async def dispatch_notifications(
    settings: Settings, mailer: ResendMailer, submission: SignupSubmission, joined_at: datetime
) -> dict[str, NotificationOutcome]:
    """
    Start every applicable send at once and wait for all of them to settle.

    Returns an outcome per channel (email, sms, alert). A failing channel
    never cancels or fails its siblings.
    """
    sends = {}
    if settings.email_configured:
        sends["email"] = _track("waitlist email", _send_confirmation(mailer, submission))
    if settings.alert_configured:
        sends["alert"] = _track(
            "internal waitlist alert",
            _send_alert(mailer, settings.WAITLIST_ALERT_EMAIL, submission, joined_at),
        )
    # SMS has no activation condition since the phone field was dropped from the form

    results = await asyncio.gather(*sends.values())

    outcomes = {
        "email": NotificationOutcome.SKIPPED,
        "sms": NotificationOutcome.SKIPPED,
        "alert": NotificationOutcome.SKIPPED,
    }
    outcomes.update(zip(sends.keys(), results))
    return outcomes


async def join_waitlist(
    body: bytes, settings: Settings, store: SupabaseStore, mailer: ResendMailer
) -> WaitlistResult:
    if not settings.email_configured:
        logger.error("Waitlist submission blocked: RESEND_API_KEY is not configured.")
        raise ServiceNotConfigured()

    submission = validate_submission(json.loads(body) if body else {})
    joined_at = datetime.now(timezone.utc)

    supabase_result = await persist_signup(settings, store, submission, joined_at)
    notifications = await dispatch_notifications(settings, mailer, submission, joined_at)

    result = WaitlistResult(
        message=JOINED_MESSAGE,
        email_result=notifications["email"],
        sms_result=notifications["sms"],
        supabase_result=supabase_result,
        alert_result=notifications["alert"],
    )
    logger.info(
        f"New waitlist signup: {submission.model_dump(by_alias=True)} "
        f"timestamp={joined_at.isoformat()} {result.outcomes()}"
    )
    return result


async def read_stats(settings: Settings, store: SupabaseStore) -> int:
    if not settings.store_configured:
        logger.error("Waitlist stats requested but Supabase environment variables are missing.")
        raise ServiceNotConfigured(STORE_NOT_CONFIGURED_MESSAGE)

    try:
        return await store.count_signups()
    except StoreReadFailed as e:
        logger.error(f"Failed to load waitlist stats: {e}")
        raise StatsUnavailable()
