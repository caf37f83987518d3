"""Custom Jinja2 filters for page templates."""

from datetime import date

from markdown_it import MarkdownIt
from markupsafe import Markup

_md = MarkdownIt("commonmark", {"html": False, "linkify": False}).enable("table")


def format_date(value: str | None, format_str: str = "%b %d, %Y") -> str:
    """Format an ISO ``YYYY-MM-DD`` string.

    Args:
        value: Date string from the seed document
        format_str: strftime format string

    Returns:
        Formatted date, or the input unchanged when it is not an ISO date

    """
    if not value:
        return ""
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return value
    return parsed.strftime(format_str)


def markdown(value: str | None) -> Markup:
    """Render markdown to HTML. Raw HTML in the source is escaped."""
    if not value:
        return Markup("")
    return Markup(_md.render(value).strip())
