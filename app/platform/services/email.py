import httpx

from app.platform.config import Settings
from app.platform.exceptions import EmailSendFailed
from app.platform.logger import get_logger

logger = get_logger("email_service")


class ResendMailer:
    """Sends plain-text mail through the Resend REST API."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.RESEND_API_KEY
        self.api_url = settings.RESEND_API_URL
        self.from_address = settings.MAIL_FROM
        self.timeout = httpx.Timeout(settings.OUTBOUND_TIMEOUT_SECONDS)
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def send(self, to_email: str, subject: str, body: str) -> None:
        """
        Send one message. Raises EmailSendFailed on any transport error or
        non-2xx response so the caller can record the channel outcome.
        """
        if not self.configured:
            raise EmailSendFailed("Resend API key is not configured")

        payload = {
            "from": self.from_address,
            "to": [to_email],
            "subject": subject,
            "text": body,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Email provider timeout for {to_email}")
            raise EmailSendFailed("Email provider timeout") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Email provider request failed: {str(e)}")
            raise EmailSendFailed(f"Email provider error: {str(e)}") from e

        if response.is_error:
            logger.error(f"Response status: {response.status_code}")
            logger.error(f"Response body: {response.text}")
            raise EmailSendFailed(
                f"Email provider rejected message with status {response.status_code}"
            )

        logger.info(f"Email sent to {to_email}: {subject}")
