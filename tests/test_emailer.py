from datetime import datetime, timezone

from app.features.waitlist.schemas.waitlist import validate_submission
from app.features.waitlist.utils.emailer import (
    alert_subject,
    first_name,
    render_alert,
    render_confirmation,
)
from tests.conftest import ADA


def test_first_name():
    assert first_name("Ada Lovelace") == "Ada"
    assert first_name("Grace") == "Grace"
    assert first_name("   ") == "there"


def test_confirmation_body():
    body = render_confirmation(validate_submission(ADA))

    assert body.startswith("Hi Ada,")
    assert "Thanks for joining the TapRight early access list." in body
    assert body.rstrip().endswith("The TapRight Crew")


def test_alert_body_without_notes():
    submission = validate_submission(ADA)
    joined_at = datetime(2025, 1, 1, tzinfo=timezone.utc)

    body = render_alert(submission, joined_at)

    assert alert_subject(submission) == "New waitlist signup — Ada Lovelace"
    assert "Name: Ada Lovelace" in body
    assert "Email: ada@example.com" in body
    assert "Spend focus: travel" in body
    assert "Notes: —" in body
    assert "Opted in: Yes" in body
    assert "Joined at: 2025-01-01T00:00:00+00:00" in body


def test_alert_body_with_notes():
    submission = validate_submission({**ADA, "notes": "Track my lounge passes"})
    body = render_alert(submission, datetime.now(timezone.utc))

    assert "Notes: Track my lounge passes" in body
