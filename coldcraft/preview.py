"""
Preview Module
Renders a generated email as plain text, a standalone HTML document or a
phone-sized card. Also produces the plain-text export and parses it back.
"""

import html
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from coldcraft.models import GeneratedEmail

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "Subject: "


class PreviewMode(str, Enum):
    PREVIEW = "preview"
    HTML = "html"
    MOBILE = "mobile"


def esc(text: str) -> str:
    """HTML-escape user-supplied text for safe injection into markup."""
    return html.escape(str(text)) if text else ""


def synthesize_address(name: str, company: str) -> str:
    """Illustrative address like jane.doe@acmecorp.com. Not validated."""
    if not name or not company:
        return ""
    local = name.lower().replace(" ", ".")
    domain = company.lower().replace(" ", "")
    return f"{local}@{domain}.com"


def format_participant(name: str, company: str) -> str:
    return f"{name} <{synthesize_address(name, company)}>"


HTML_DOCUMENT = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{subject}</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }}
        .email-header {{ border-bottom: 2px solid #e5e7eb; padding-bottom: 20px; margin-bottom: 20px; }}
        .email-body {{ white-space: pre-line; }}
    </style>
</head>
<body>
    <div class="email-header">
        <h1 style="margin: 0; font-size: 24px; color: #1f2937;">{subject}</h1>
        <p style="margin: 10px 0 0 0; color: #6b7280;">From: {sender}</p>
        <p style="margin: 5px 0 0 0; color: #6b7280;">To: {recipient}</p>
    </div>
    <div class="email-body">{body}</div>
</body>
</html>"""


def render_html(email: GeneratedEmail) -> str:
    """
    Standalone HTML document for the email.

    The body keeps its newlines and relies on white-space: pre-line, so no
    <br> tags are inserted. Every user-supplied value is escaped.
    """
    sender = email.sender_info
    recipient = email.recipient_info
    return HTML_DOCUMENT.format(
        subject=esc(email.subject),
        sender=esc(format_participant(sender.name, sender.company)),
        recipient=esc(format_participant(recipient.name, recipient.company)),
        body=esc(email.body),
    )


def _single_line(text: str) -> str:
    """Escape text and encode its newlines as &#10; so the markup has no line breaks."""
    escaped = esc(text).replace("\r\n", "\n").replace("\r", "\n")
    return escaped.replace("\n", "&#10;")


def render_mobile(email: GeneratedEmail) -> str:
    """
    Phone-sized inbox card: sender initial, sender, subject, body.

    The card is emitted as one line of HTML. A blank line would end the
    HTML block when the card goes through st.markdown, so body newlines
    are encoded as &#10; and shown by white-space: pre-line.
    """
    sender_name = email.sender_info.name
    initial = sender_name[:1].upper()
    return (
        f'<div class="mobile-frame">'
        f'<div class="mobile-screen">'
        f'<div class="mobile-header">'
        f'<div class="mobile-avatar">{_single_line(initial)}</div>'
        f'<div class="mobile-meta">'
        f'<p class="mobile-sender">{_single_line(sender_name)}</p>'
        f'<p class="mobile-subject">{_single_line(email.subject)}</p>'
        f'</div>'
        f'</div>'
        f'<div class="mobile-body" style="white-space: pre-line;">{_single_line(email.body)}</div>'
        f'</div>'
        f'</div>'
    )


def render_preview_text(email: GeneratedEmail) -> str:
    """Reading view: From and To lines above the plain-text export."""
    sender = email.sender_info
    recipient = email.recipient_info
    return (
        f"From: {format_participant(sender.name, sender.company)}\n"
        f"To: {format_participant(recipient.name, recipient.company)}\n"
        f"{render_plain_text(email)}"
    )


def render_plain_text(email: GeneratedEmail) -> str:
    """The text used for both clipboard copy and the .txt download."""
    return f"{SUBJECT_PREFIX}{email.subject}\n\n{email.body}"


def parse_plain_text(text: str) -> tuple[str, str]:
    """
    Split an exported email back into (subject, body) at the first blank line.

    Raises:
        ValueError: If the text does not start with a Subject header.
    """
    if not text.startswith(SUBJECT_PREFIX):
        raise ValueError("Exported email must start with 'Subject: '")
    header, sep, body = text.partition("\n\n")
    if not sep:
        raise ValueError("Exported email is missing the blank line after the subject")
    return header[len(SUBJECT_PREFIX):], body


def export_filename(email: GeneratedEmail) -> str:
    return f"email-{email.id}.txt"


def render(email: GeneratedEmail, mode: PreviewMode = PreviewMode.PREVIEW) -> str:
    """Render the email for one of the three preview modes."""
    mode = PreviewMode(mode)
    if mode is PreviewMode.HTML:
        return render_html(email)
    if mode is PreviewMode.MOBILE:
        return render_mobile(email)
    return render_preview_text(email)


def save_text_export(email: GeneratedEmail, directory: Path) -> Optional[Path]:
    """
    Write the plain-text export to directory/email-<id>.txt.

    Failures are logged and None is returned instead of raising.
    """
    path = Path(directory) / export_filename(email)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_plain_text(email), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not export email {email.id} to {path}: {e}")
        return None

    logger.info(f"Exported email {email.id} -> {path}")
    return path
