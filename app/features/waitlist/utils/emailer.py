from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from app.features.waitlist.schemas.waitlist import SignupSubmission

template_dir = Path(__file__).resolve().parent.parent / "template"
env = Environment(loader=FileSystemLoader(str(template_dir)), keep_trailing_newline=False)

CONFIRMATION_SUBJECT = "You're on the TapRight waitlist ✅"


def first_name(full_name: str) -> str:
    parts = full_name.split()
    return parts[0] if parts else "there"


def alert_subject(submission: SignupSubmission) -> str:
    return f"New waitlist signup — {submission.full_name}"


def render_confirmation(submission: SignupSubmission) -> str:
    template = env.get_template("confirmation.txt")
    return template.render(first_name=first_name(submission.full_name))


def render_alert(submission: SignupSubmission, joined_at: datetime) -> str:
    template = env.get_template("alert.txt")
    return template.render(submission=submission, joined_at=joined_at.isoformat())
