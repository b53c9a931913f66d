"""Unit tests for contact input sanitization."""

import pytest

from cvdeck.contact.sanitize import (
    placeholder_email,
    sanitize_email,
    sanitize_html,
    sanitize_string,
)


class TestSanitizeString:
    def test_trims_and_escapes(self) -> None:
        assert sanitize_string('  <script>alert("x")</script>  ') == (
            "&lt;script&gt;alert(&quot;x&quot;)&lt;&#x2F;script&gt;"
        )

    def test_escapes_every_special_character(self) -> None:
        assert sanitize_string("&'\\`") == "&amp;&#x27;&#x5C;&#96;"

    def test_empty_values(self) -> None:
        assert sanitize_string(None) == ""
        assert sanitize_string("") == ""


class TestSanitizeEmail:
    def test_trims_and_lowercases(self) -> None:
        assert sanitize_email("  TEST@EXAMPLE.COM  ") == "test@example.com"

    def test_invalid_returns_empty(self) -> None:
        assert sanitize_email("not@an@email.com") == ""
        assert sanitize_email("plainaddress") == ""
        assert sanitize_email(None) == ""

    def test_plus_addressing_is_valid(self) -> None:
        assert sanitize_email("user+tag@example.com") == "user+tag@example.com"

    def test_accepts_phone_placeholder(self) -> None:
        address = placeholder_email("+1 (555) 123-4567")
        assert sanitize_email(address) == address


class TestPlaceholderEmail:
    def test_keeps_digits_only(self) -> None:
        assert placeholder_email("+1 (555) 123-4567") == "phone-15551234567@chat-contact.local"


class TestSanitizeHtml:
    def test_escapes_markup_without_trimming(self) -> None:
        assert sanitize_html(" <b>hi</b> ") == " &lt;b&gt;hi&lt;&#x2F;b&gt; "

    @pytest.mark.parametrize("markup", ["<p>x</p>", "<a href='#'>x</a>", "<em>x</em>", "<br>"])
    def test_no_tag_is_allowed_through(self, markup: str) -> None:
        assert "<" not in sanitize_html(markup)
