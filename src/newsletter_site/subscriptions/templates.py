"""
Fixed email content sent on every successful signup.
"""

from __future__ import annotations

import html

from newsletter_site.email.interface import EmailMessage

WELCOME_SUBJECT = "Welcome to the a68 newsletter"
OWNER_NOTICE_SUBJECT = "New newsletter signup"

WELCOME_TEXT = "\n".join(
    [
        "Hi there,",
        "",
        "The newsletter signup was successful.",
        "",
        "From now on, updates from a68 will arrive in this inbox, including how the latest AI "
        "research is being brought into insurance to help revolutionize fraud detection.",
        "",
        "Preferences can be managed anytime-",
        "",
        "Best,",
        "Julian from a68",
    ]
)

WELCOME_HTML = "".join(
    [
        "<p>Hi there,</p>",
        "<p>The newsletter signup was successful.</p>",
        "<p>From now on, updates from a68 will arrive in this inbox, including how the latest AI "
        "research is being brought into insurance to help revolutionize fraud detection.</p>",
        "<p>Preferences can be managed anytime-</p>",
        "<p>Best,<br>Julian from a68</p>",
    ]
)


def build_welcome_email(from_email: str, subscriber: str) -> EmailMessage:
    return EmailMessage(
        from_email=from_email,
        to=(subscriber,),
        subject=WELCOME_SUBJECT,
        text=WELCOME_TEXT,
        html=WELCOME_HTML,
    )


def build_owner_notice(from_email: str, owner_email: str, subscriber: str) -> EmailMessage:
    # The address is user input; escape it before it lands in markup.
    return EmailMessage(
        from_email=from_email,
        to=(owner_email,),
        subject=OWNER_NOTICE_SUBJECT,
        text=f"New signup: {subscriber}",
        html=f"<p>New signup: <strong>{html.escape(subscriber)}</strong></p>",
    )
