"""Cleanup and paragraph splitting for scraped etymology fragments."""

from __future__ import annotations

import re

TURKISH_MONTHS = (
    "Ocak",
    "Şubat",
    "Mart",
    "Nisan",
    "Mayıs",
    "Haziran",
    "Temmuz",
    "Ağustos",
    "Eylül",
    "Ekim",
    "Kasım",
    "Aralık",
)

_DATESTAMP_RE = re.compile(
    r"^((?:\s|&nbsp;|<[^>]+>)*)\d{1,2}\s+(?:" + "|".join(TURKISH_MONTHS) + r")\s+\d{4}\s*",
    re.IGNORECASE,
)
_ANCHOR_RE = re.compile(r"<a\b[^>]*>(.*?)</a\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_ATTR_RE = re.compile(r"""\s*style\s*=\s*(?:"[^"]*"|'[^']*')""", re.IGNORECASE)
_BLANK_SPAN_RE = re.compile(r"<span\b[^>]*>(?:\s|&nbsp;)*</span\s*>", re.IGNORECASE)
_SPAN_INNER_LEAD_RE = re.compile(r"(<span\b[^>]*>)(?:\s|&nbsp;)+", re.IGNORECASE)
_INLINE_TAGS = "span|em|strong|b|i|u|font|small"
_LEADING_NOISE_RE = re.compile(
    r"^(?:\s|&nbsp;|<br\s*/?>|<(" + _INLINE_TAGS + r")\b[^>]*>(?:\s|&nbsp;)*</\1\s*>)+",
    re.IGNORECASE,
)
# An empty inline element directly inside a chain of leading opening tags
_NESTED_EMPTY_RE = re.compile(
    r"^((?:(?:\s|&nbsp;)*<(?:" + _INLINE_TAGS + r")\b[^>]*>)+)"
    r"(?:\s|&nbsp;)*<(" + _INLINE_TAGS + r")\b[^>]*>(?:\s|&nbsp;)*</\2\s*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<[^>]+>")

SENTENCE_END = ". "


def strip_navigation_markup(html: str | None) -> str:
    """Drop anchors (keeping their text) and inline style attributes."""
    if not html:
        return ""
    html = _ANCHOR_RE.sub(r"\1", html)
    return _STYLE_ATTR_RE.sub("", html)


def strip_leading_noise(html: str | None) -> str:
    """
    Remove leading whitespace, &nbsp; and visually empty inline tags until stable.

    Empty tags nested inside leading wrappers (``<span><em> </em></span>``)
    are peeled from the inside out.
    """
    if not html:
        return ""
    previous = None
    while previous != html:
        previous = html
        html = _LEADING_NOISE_RE.sub("", html)
        html = _NESTED_EMPTY_RE.sub(r"\1", html, count=1)
    return html


def strip_leading_datestamp(text: str | None) -> str:
    """Remove a leading ``10 Mayıs 2020`` style date, keeping any markup before it."""
    if not text:
        return ""
    return _DATESTAMP_RE.sub(r"\1", text, count=1)


def collapse_blank_spans(html: str | None) -> str:
    if not html:
        return ""
    html = _BLANK_SPAN_RE.sub("", html)
    return _SPAN_INNER_LEAD_RE.sub(r"\1", html)


def normalize_fragment(html: str | None) -> str:
    """
    Full cleanup pipeline applied to every scraped fragment.

    Removing blanks can expose another leading date, so the date, blank-span
    and leading-noise passes repeat until the fragment stops changing.
    """
    html = strip_navigation_markup(html)
    previous = None
    while previous != html:
        previous = html
        html = strip_leading_datestamp(html)
        html = collapse_blank_spans(html)
        html = strip_leading_noise(html)
    return html.strip()


def html_to_text(html: str | None) -> str:
    if not html:
        return ""
    return _TAG_RE.sub("", html)


def split_into_paragraphs(
    text: str | None,
    max_splits: int = 2,
    target_len: int = 200,
    search_window: tuple[int, int] = (150, 350),
) -> list[str]:
    """
    Break a long plain-text passage at sentence ends.

    Scans for ". " from ``search_window[0]`` up to ``search_window[1]``, cuts
    after the period and repeats at most ``max_splits`` times. Whatever is
    left becomes the last paragraph, however long it is.
    """
    if not text:
        return []
    text = text.strip()
    if len(text) <= target_len:
        return [text] if text else []

    window_start, window_end = search_window
    paragraphs: list[str] = []
    remaining = text
    splits = 0

    while remaining and splits < max_splits:
        if len(remaining) <= target_len:
            break
        period_index = remaining.find(SENTENCE_END, window_start)
        if period_index == -1 or period_index > window_end:
            break
        paragraphs.append(remaining[: period_index + 1].strip())
        remaining = remaining[period_index + 2 :].strip()
        splits += 1

    if remaining:
        paragraphs.append(remaining)

    return [p for p in paragraphs if p]


def _find_html_split(html: str, window_start: int, window_end: int) -> int:
    """
    Return the index just past the period of the first ". " found between the
    window offsets, counting rendered text only. -1 when there is none.
    """
    text_pos = 0
    i = 0
    length = len(html)
    while i < length:
        if html[i] == "<":
            tag_end = html.find(">", i)
            if tag_end != -1:
                i = tag_end + 1
                continue
        text_pos += 1
        if text_pos > window_end:
            return -1
        if text_pos >= window_start and html.startswith(SENTENCE_END, i):
            return i + 1
        i += 1
    return -1


def split_html_into_paragraphs(
    html: str | None,
    max_splits: int = 2,
    target_len: int = 200,
    search_window: tuple[int, int] = (150, 350),
) -> list[str]:
    """Same as split_into_paragraphs, but tags do not count towards the offsets."""
    html = strip_leading_noise(html).strip()
    if not html:
        return []
    if len(html_to_text(html)) <= target_len:
        return [html]

    window_start, window_end = search_window
    paragraphs: list[str] = []
    remaining = html
    splits = 0

    while remaining and splits < max_splits:
        if len(html_to_text(remaining)) <= target_len:
            break
        split_index = _find_html_split(remaining, window_start, window_end)
        if split_index == -1:
            break
        paragraphs.append(remaining[:split_index].strip())
        remaining = remaining[split_index + 1 :].strip()
        splits += 1

    if remaining:
        paragraphs.append(remaining)

    return [p for p in paragraphs if p]
