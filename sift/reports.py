from datetime import datetime
from pathlib import Path

from sift.logging import get_logger
from sift.utils import generate_timestamp, sanitize_for_filename

_logger = get_logger(__name__)


def report_filename(topic: str, now: datetime | None = None) -> str:
    return f"{generate_timestamp(now)}-{sanitize_for_filename(topic)}.md"


def save_report(content: str, directory: Path, topic: str, now: datetime | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / report_filename(topic, now)
    path.write_text(content, encoding="utf-8")
    _logger.info("saved report", path=str(path))
    return path.resolve()
