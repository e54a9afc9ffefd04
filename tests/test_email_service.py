import json

import httpx
import pytest

from app.platform.exceptions import EmailSendFailed
from app.platform.services.email import ResendMailer
from tests.conftest import make_settings


def make_mailer(handler, **overrides):
    requests = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    mailer = ResendMailer(make_settings(**overrides), transport=httpx.MockTransport(record))
    mailer.requests = requests
    return mailer


@pytest.mark.asyncio
async def test_send_email():
    mailer = make_mailer(lambda request: httpx.Response(200, json={"id": "email_1"}))

    await mailer.send("ada@example.com", "Hello", "Hi Ada,")

    request = mailer.requests[-1]
    assert str(request.url) == "https://api.resend.com/emails"
    assert request.headers["authorization"] == "Bearer re_test_key"
    assert json.loads(request.content) == {
        "from": "TapRight <info@tapright.app>",
        "to": ["ada@example.com"],
        "subject": "Hello",
        "text": "Hi Ada,",
    }


@pytest.mark.asyncio
async def test_send_email_rejected():
    mailer = make_mailer(
        lambda request: httpx.Response(
            422, json={"name": "validation_error", "message": "Invalid `to`"}
        )
    )

    with pytest.raises(EmailSendFailed):
        await mailer.send("ada@example.com", "Hello", "Hi Ada,")


@pytest.mark.asyncio
async def test_send_email_timeout():
    def time_out(request):
        raise httpx.ReadTimeout("timed out", request=request)

    mailer = make_mailer(time_out)

    with pytest.raises(EmailSendFailed):
        await mailer.send("ada@example.com", "Hello", "Hi Ada,")


@pytest.mark.asyncio
async def test_send_email_without_key():
    mailer = make_mailer(lambda request: httpx.Response(200), RESEND_API_KEY=None)

    with pytest.raises(EmailSendFailed):
        await mailer.send("ada@example.com", "Hello", "Hi")

    assert mailer.requests == []
