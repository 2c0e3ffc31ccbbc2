import re
from typing import Optional

from packages.tiv_core.dto import ProfileGuessDTO

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_WHITESPACE_RE = re.compile(r"\s")
_PHONE_PATTERNS = (
    re.compile(r"(\+91)?[6-9]\d{9}"),  # Indian mobile
    re.compile(r"\d{10}"),
    re.compile(r"\d{3}[-.]?\d{3}[-.]?\d{4}"),
)
_NON_DIGIT_RE = re.compile(r"\D")
_NAME_SPECIAL_RE = re.compile(r"[@#$%^&*()_+=\[\]{}|\\:;\"'<>,.?/\d]")
_MONTH_RE = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\b", re.IGNORECASE)

# Common resume headers that are never a name
_SKIP_WORDS = (
    "resume", "cv", "curriculum", "vitae", "profile", "contact", "email",
    "phone", "address", "objective", "education", "experience", "skills", "projects",
)


def extract_email(text: str) -> Optional[str]:
    match = _EMAIL_RE.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> Optional[str]:
    """
    First 10-digit phone number, with a leading 91 country code removed.
    """
    compact = _WHITESPACE_RE.sub("", text)
    for pattern in _PHONE_PATTERNS:
        match = pattern.search(compact)
        if not match:
            continue
        phone = _NON_DIGIT_RE.sub("", match.group(0))
        if phone.startswith("91") and len(phone) == 12:
            phone = phone[2:]
        if len(phone) == 10:
            return phone
    return None


def extract_name(text: str) -> Optional[str]:
    """
    First line that looks like a 2-4 word name; falls back to the first line.
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    for line in lines:
        if len(line) < 3 or len(line) > 50:
            continue
        if _NAME_SPECIAL_RE.search(line):
            continue
        lower = line.lower()
        if any(word in lower for word in _SKIP_WORDS):
            continue
        if _MONTH_RE.search(line):
            continue
        if 2 <= len(line.split()) <= 4:
            return line

    return lines[0] if lines else None


def guess_profile(text: str) -> ProfileGuessDTO:
    """Best-effort field guess. Missing fields come back as empty strings."""
    return ProfileGuessDTO(
        name=extract_name(text) or "",
        email=extract_email(text) or "",
        phone=extract_phone(text) or "",
    )
