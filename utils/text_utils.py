"""
Text utilities for page HTML.

Handles HTML cleanup and plain-text extraction for prompts.
"""
import html
import re

_COMMENT_PATTERN = re.compile(r'<!--.*?-->', re.DOTALL)
_INVISIBLE_PATTERN = re.compile(
    r'<(script|style|noscript|template|svg)\b[^>]*>.*?</\1\s*>',
    re.DOTALL | re.IGNORECASE
)
_BLOCK_TAG_PATTERN = re.compile(
    r'</?(p|div|br|li|tr|h[1-6]|section|article|header|footer|ul|ol|table)\b[^>]*>',
    re.IGNORECASE
)
_TAG_PATTERN = re.compile(r'<[^>]+>')


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return re.sub(r'\s+', ' ', text).strip()


def strip_html(outer_html: str) -> str:
    """
    Clean an element's outer HTML for use in a prompt.

    Comments and invisible content are removed and whitespace collapsed;
    the remaining markup is kept since tags and attributes describe the element.
    """
    if not outer_html:
        return ""

    text = _COMMENT_PATTERN.sub('', outer_html)
    text = _INVISIBLE_PATTERN.sub('', text)
    return collapse_whitespace(text)


def extract_text_from_html(page_source: str) -> str:
    """
    Extract readable text from a full page.

    Args:
        page_source: Page HTML

    Returns:
        Visible text with entities unescaped and one line per block element
    """
    if not page_source:
        return ""

    text = _COMMENT_PATTERN.sub('', page_source)
    text = _INVISIBLE_PATTERN.sub('', text)
    text = re.sub(r'<head\b[^>]*>.*?</head\s*>', '', text, flags=re.DOTALL | re.IGNORECASE)
    text = _BLOCK_TAG_PATTERN.sub('\n', text)
    text = _TAG_PATTERN.sub(' ', text)
    text = html.unescape(text)

    lines = (collapse_whitespace(line) for line in text.split('\n'))
    return '\n'.join(line for line in lines if line)
