"""Tests for transactional email rendering."""

from xeoos.services.email_templates import (
    ActionButton,
    EmailTemplate,
    notification_email,
    password_reset_email,
    render,
    verification_email,
)


def test_verification_email_is_localized():
    message = verification_email("alice@example.com", "123456", "de-DE")

    assert message.to == "alice@example.com"
    assert message.subject == "XEO OS Bestätigungscode"
    assert "123456" in message.html
    assert "123456" in message.text
    assert "Willkommen bei XEO OS" in message.text
    assert "E-Mail-Einstellungen" in message.html


def test_unknown_locale_renders_english():
    message = verification_email("alice@example.com", "654321", "xx-YY")

    assert message.subject == "XEO OS Verification Code"
    assert "Email Settings" in message.text


def test_reset_email_mentions_expiry():
    message = password_reset_email("bob@example.com", "111222", "en-US")

    assert "111222" in message.html
    assert "15 minutes" in message.text


def test_text_body_layout():
    _, text = render(EmailTemplate(title="T", heading="Heading", content="Body"), "en-US")

    lines = text.splitlines()
    assert lines[0] == "XEO OS - Xchange Everyone's Option"
    assert lines[2] == "Heading"
    assert lines[3] == "=" * len("Heading")
    assert "Body" in lines
    assert lines[-1] == "Email Settings: https://xeoos.net/setting"


def test_html_escapes_user_content():
    html, _ = render(
        EmailTemplate(
            title="T",
            heading="<b>Hi</b>",
            content="<script>alert(1)</script>",
            action=ActionButton(text="Open", url="https://xeoos.net/en-US/post/1"),
        ),
        "en-US",
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert 'href="https://xeoos.net/en-US/post/1"' in html


def test_notification_email_has_action_link():
    message = notification_email(
        "carol@example.com",
        title="New reply",
        content="Nice post!",
        link="https://xeoos.net/en-US/post/9",
        button_text="View message",
        locale="en-US",
    )

    assert message.subject == "New reply"
    assert "View message: https://xeoos.net/en-US/post/9" in message.text
    assert "Nice post!" in message.html
