"""Mail and chat deep links."""
import pytest

from outreach.core.models import Customer, GeneratedMessage
from outreach.processing.links import (
    build_chat_link,
    build_mailto,
    chat_text,
    clipboard_text,
    contact_links,
    website_url,
)

MESSAGE = GeneratedMessage(
    subject="MDF kit prices - Canton Fair",
    body="Hello Mehmet,\n\nThanks for visiting us & our stand!",
    chat_body="Hello Mehmet\nHow is everything going?",
)


def test_web_link_uses_universal_endpoint():
    link = build_chat_link("+90 532 111 2233", "Hi there & welcome", "web")

    assert link == "https://wa.me/905321112233?text=Hi%20there%20%26%20welcome"


def test_app_link_uses_app_scheme():
    link = build_chat_link("0044 7700 900123", "Line one\nLine two", "app")

    assert link == "whatsapp://send?phone=447700900123&text=Line%20one%0ALine%20two"


def test_business_link_targets_business_package():
    link = build_chat_link("905321112233", "Hi", "business")

    assert link == (
        "intent://send?phone=905321112233&text=Hi"
        "#Intent;package=com.whatsapp.w4b;scheme=whatsapp;end"
    )


def test_encoding_matches_uri_component_rules():
    link = build_chat_link("1", "it's (fine)! ~ok* سلام", "web")

    assert link.startswith("https://wa.me/1?text=it's%20(fine)!%20~ok*%20")
    assert "%D8%B3" in link


def test_empty_phone_still_builds_link():
    assert build_chat_link("", "Hi", "web") == "https://wa.me/?text=Hi"


def test_unknown_variant_is_rejected():
    with pytest.raises(ValueError):
        build_chat_link("123", "Hi", "telegram")


@pytest.mark.parametrize("variant", ["web", "app", "business"])
def test_links_are_idempotent(variant):
    assert build_chat_link("+1 202 555 0100", MESSAGE.body, variant) == build_chat_link(
        "+1 202 555 0100", MESSAGE.body, variant
    )


def test_mailto_percent_encodes_subject_and_body():
    link = build_mailto("mehmet@alpha.com.tr", MESSAGE)

    assert link == (
        "mailto:mehmet@alpha.com.tr?subject=MDF%20kit%20prices%20-%20Canton%20Fair"
        "&body=Hello%20Mehmet%2C%0A%0AThanks%20for%20visiting%20us%20%26%20our%20stand!"
    )


def test_chat_text_falls_back_to_body():
    assert chat_text(MESSAGE) == MESSAGE.chat_body
    assert chat_text(GeneratedMessage(subject="s", body="plain")) == "plain"


def test_clipboard_text_per_channel():
    assert clipboard_text(MESSAGE, "email") == f"Subject: {MESSAGE.subject}\n\n{MESSAGE.body}"
    assert clipboard_text(MESSAGE, "whatsapp") == MESSAGE.chat_body


def test_clipboard_text_defaults_to_draft_channel():
    chat_draft = GeneratedMessage(subject="s", body="b", channel="whatsapp", chat_body="c")

    assert clipboard_text(chat_draft) == "c"
    assert clipboard_text(MESSAGE) == f"Subject: {MESSAGE.subject}\n\n{MESSAGE.body}"


def test_clipboard_text_rejects_unknown_channel():
    with pytest.raises(ValueError):
        clipboard_text(MESSAGE, "sms")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("www.alpha.com.tr", "https://www.alpha.com.tr"),
        ("http://alpha.com", "https://alpha.com"),
        ("https://alpha.com/tr", "https://alpha.com/tr"),
        ("", ""),
    ],
)
def test_website_url(raw, expected):
    assert website_url(raw) == expected


def test_contact_links_cover_every_number():
    customer = Customer(id="c1", phone="+90 532 111 2233 / 0212 444 5566", email="a@b.com", website="b.com")

    links = contact_links(customer, MESSAGE)

    assert [chat["number"] for chat in links["chats"]] == ["+90 532 111 2233", "0212 444 5566"]
    assert links["chats"][1]["web"].startswith("https://wa.me/02124445566?text=")
    assert links["mailto"].startswith("mailto:a@b.com?")
    assert links["website"] == "https://b.com"


def test_contact_links_without_email_or_phone():
    links = contact_links(Customer(id="c2", company="Quiet Co"), MESSAGE)

    assert links["mailto"] == ""
    assert links["chats"] == []
