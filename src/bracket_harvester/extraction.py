"""Pure extraction and fingerprinting utilities."""

from __future__ import annotations

import hashlib
import hmac
import re

from bs4 import BeautifulSoup

EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}", re.IGNORECASE)


def extract_title(html: str) -> str | None:
    """Return the stripped text of the first <title> tag, or None when empty."""
    soup = BeautifulSoup(html or "", "html.parser")
    tag = soup.find("title")
    if tag is None:
        return None
    title = tag.get_text(strip=True)
    return title or None


def extract_first_email(text: str) -> str | None:
    """Return the first email-looking string in text, case preserved."""
    match = EMAIL_REGEX.search(text or "")
    return match.group(0) if match else None


def fingerprint_email(email: str, secret: str) -> str:
    """HMAC-SHA256 hex digest of an email keyed by secret."""
    return hmac.new(secret.encode("utf-8"), email.encode("utf-8"), hashlib.sha256).hexdigest()
