import re
from datetime import datetime
from urllib.parse import urlparse

from sift.constants import FILENAME_MAX_LENGTH

_UNSAFE_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def extract_domain(url: str) -> str:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return "unknown"
    if not hostname:
        return "unknown"
    return hostname.removeprefix("www.")


def sanitize_for_filename(text: str) -> str:
    """Kebab-case slug: lowercase, alphanumerics and hyphens only, max 50 chars."""
    slug = _UNSAFE_CHARS.sub("", text.lower()).strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug[:FILENAME_MAX_LENGTH].strip("-")


def generate_timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d%H%M%S")
