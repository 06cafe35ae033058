import re
from collections.abc import Iterable
from dataclasses import dataclass, field

PAGE_KEYWORD = "עמוד"
ARTICLES_KEYWORD = "כתבות"
RESERVED_KEYWORDS = (PAGE_KEYWORD, ARTICLES_KEYWORD)

_PAGE_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass
class SplitPath:
    """A segment list with its pagination marker removed."""

    base: list[str]
    page: int = 1
    trailing: list[str] = field(default_factory=list)


def clean_segments(raw: Iterable[str] | None) -> list[str]:
    """Drop empty segments. A missing input is the root path."""
    return [segment for segment in raw or [] if segment]


def parse_page_number(value: str | None) -> int:
    """Parse a page token, falling back to 1 for anything not a positive integer."""
    # Plain ASCII digits only: "4abc", "2.5" and "-2" all mean page 1.
    if not value or not _PAGE_NUMBER_RE.fullmatch(value):
        return 1
    page = int(value)
    return page if page > 0 else 1


def extract_pagination(segments: list[str]) -> SplitPath:
    """Split off the first pagination marker and the page token after it.

    Segments following the page token are returned in `trailing` so the
    caller can reject them.
    """
    try:
        index = segments.index(PAGE_KEYWORD)
    except ValueError:
        return SplitPath(base=list(segments))

    page_token = segments[index + 1] if index + 1 < len(segments) else None
    return SplitPath(
        base=list(segments[:index]),
        page=parse_page_number(page_token),
        trailing=list(segments[index + 2:]),
    )


def segments_to_path(segments: Iterable[str]) -> str:
    return "/" + "/".join(segments)


def path_to_segments(path: str) -> list[str]:
    return clean_segments(path.split("/"))


def append_page_to_segments(segments: list[str], page: int) -> list[str]:
    if page <= 1:
        return list(segments)
    return [*segments, PAGE_KEYWORD, str(page)]
