from fastapi import APIRouter, Depends, Request, status

from app.features.waitlist.dependencies.waitlist import get_mailer, get_supabase_store
from app.features.waitlist.schemas.waitlist import WaitlistStats
from app.features.waitlist.services.waitlist import join_waitlist, read_stats
from app.platform.config import Settings, get_settings
from app.platform.exceptions import (
    STATS_UNAVAILABLE_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    WaitlistError,
)
from app.platform.logger import get_logger
from app.platform.response import message_response
from app.platform.services.email import ResendMailer
from app.platform.services.supabase import SupabaseStore

logger = get_logger("waitlist_routes")

router = APIRouter(prefix="/api/waitlist", tags=["Waitlist"])


@router.post("")
async def join(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SupabaseStore = Depends(get_supabase_store),
    mailer: ResendMailer = Depends(get_mailer),
):
    """
    Waitlist form submission
    - Validates the form fields
    - Writes the signup to Supabase (duplicate emails are rejected by the table)
    - Sends the confirmation email and the internal alert concurrently
    """
    try:
        body = await request.body()
        result = await join_waitlist(body, settings, store, mailer)
    except WaitlistError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected waitlist error: {e}")
        return message_response(
            UNEXPECTED_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return message_response(result.message, **result.outcomes())


@router.get("/stats")
async def stats(
    settings: Settings = Depends(get_settings),
    store: SupabaseStore = Depends(get_supabase_store),
):
    try:
        count = await read_stats(settings, store)
    except WaitlistError:
        raise
    except Exception as e:
        logger.exception(f"Failed to load waitlist stats: {e}")
        return message_response(
            STATS_UNAVAILABLE_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return WaitlistStats(count=count)
