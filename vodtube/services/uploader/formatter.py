"""Title, description and chapter formatting for YouTube uploads.

Templates use literal placeholder tokens that are replaced verbatim:

- title: {title}, {channel}, {date} (YYYY-MM-DD)
- description: {title}, {channel}, {date} (e.g. "March 5, 2024"), {duration}

Unknown placeholders are left untouched.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vodtube.models.vod import Chapter, Vod

CHAPTER_HEADER = "Chapters:\n"


@dataclass(frozen=True)
class TemplateFields:
    """Values available to title and description templates.

    Attributes:
        title: Raw stream title
        channel: Channel display name
        streamed_at: When the stream took place
        duration: Stream length in seconds
    """

    title: str
    channel: str
    streamed_at: datetime
    duration: int = 0

    @classmethod
    def from_vod(cls, vod: "Vod") -> "TemplateFields":
        """Collect template fields from a Vod with its channel loaded."""
        return cls(
            title=vod.title,
            channel=vod.channel.display_name,
            streamed_at=vod.streamed_at,
            duration=vod.duration,
        )


def format_short_date(value: datetime) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def format_long_date(value: datetime) -> str:
    """Format a date as "Month D, YYYY" without zero padding."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_duration(seconds: int) -> str:
    """Format a duration as a human string.

    Example:
        >>> format_duration(3661)
        '1h 1m 1s'
        >>> format_duration(125)
        '2m 5s'
    """
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"


def format_timestamp(seconds: int) -> str:
    """Format a chapter offset as H:MM:SS or M:SS.

    Example:
        >>> format_timestamp(3725)
        '1:02:05'
        >>> format_timestamp(65)
        '1:05'
    """
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _substitute(template: str, values: dict[str, str]) -> str:
    result = template
    for key, value in values.items():
        result = result.replace("{" + key + "}", value)
    return result


def render_title(template: str | None, fields: TemplateFields) -> str:
    """Render the video title.

    Args:
        template: Title template, empty or None to use the raw title
        fields: Template values

    Returns:
        Rendered title
    """
    if not template:
        return fields.title

    return _substitute(
        template,
        {
            "title": fields.title,
            "channel": fields.channel,
            "date": format_short_date(fields.streamed_at),
        },
    )


def render_description(template: str | None, fields: TemplateFields) -> str:
    """Render the video description.

    Args:
        template: Description template, empty or None for the default text
        fields: Template values

    Returns:
        Rendered description
    """
    long_date = format_long_date(fields.streamed_at)
    if not template:
        return f"Streamed by {fields.channel} on {long_date}"

    return _substitute(
        template,
        {
            "title": fields.title,
            "channel": fields.channel,
            "date": long_date,
            "duration": format_duration(fields.duration),
        },
    )


def build_chapter_block(chapters: Sequence["Chapter"]) -> str:
    """Build the chapter marker block appended to the description.

    Each line is "<timestamp> - <label>", where the label is the chapter
    title if set, else its type. Every line, including the last, ends with a
    newline.

    Args:
        chapters: Chapters in display order

    Returns:
        Chapter block, or an empty string if there are no chapters
    """
    if not chapters:
        return ""

    lines = [CHAPTER_HEADER]
    for chapter in chapters:
        label = chapter.title or chapter.type
        lines.append(f"{format_timestamp(chapter.start)} - {label}\n")
    return "".join(lines)


__all__ = [
    "TemplateFields",
    "build_chapter_block",
    "format_duration",
    "format_long_date",
    "format_short_date",
    "format_timestamp",
    "render_description",
    "render_title",
]
