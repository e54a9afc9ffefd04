from fastapi import FastAPI, Request, status

from app.platform.logger import get_logger
from app.platform.response import message_response

logger = get_logger("exceptions")

VALIDATION_FAILED_MESSAGE = "Validation failed. Please review the highlighted fields."
NOT_CONFIGURED_MESSAGE = (
    "Our confirmation email service is not configured. "
    "Please try again soon while we finish setup."
)
ALREADY_REGISTERED_MESSAGE = (
    "Good news—you're already on the waitlist! Check your email for confirmation."
)
UNEXPECTED_ERROR_MESSAGE = (
    "We couldn’t process your request right now. Please try again in a moment."
)
STORE_NOT_CONFIGURED_MESSAGE = (
    "Waitlist storage is not configured. Add Supabase credentials to access stats."
)
STATS_UNAVAILABLE_MESSAGE = "Unable to load waitlist stats right now. Please try again later."


class WaitlistError(Exception):
    """Base error that maps directly onto a client-visible response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = UNEXPECTED_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def body(self) -> dict:
        return {}


class SubmissionInvalid(WaitlistError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = VALIDATION_FAILED_MESSAGE

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__()

    def body(self) -> dict:
        return {"errors": self.errors}


class ServiceNotConfigured(WaitlistError):
    message = NOT_CONFIGURED_MESSAGE


class AlreadyRegistered(WaitlistError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = ALREADY_REGISTERED_MESSAGE


class StatsUnavailable(WaitlistError):
    message = STATS_UNAVAILABLE_MESSAGE


class ChannelFailure(Exception):
    """A single side-effect channel failed; always absorbed into an outcome."""


class StoreWriteFailed(ChannelFailure):
    pass


class StoreReadFailed(ChannelFailure):
    pass


class EmailSendFailed(ChannelFailure):
    pass


def add_exception_handlers(app: FastAPI):
    @app.exception_handler(WaitlistError)
    async def waitlist_exception_handler(request: Request, exc: WaitlistError):
        return message_response(exc.message, status_code=exc.status_code, **exc.body())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return message_response(
            UNEXPECTED_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
