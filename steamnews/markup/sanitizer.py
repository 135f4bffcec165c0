"""
Steam News Tide - HTML 清洗

Allow-list sanitizer for news content that is rendered as-is by the client.

- script/style/iframe/... are removed together with everything inside them.
- Tags outside ALLOWED_TAGS are unwrapped: the tag goes, its children stay
  and are sanitized in turn.
- Allowed tags lose every attribute; a few are put back per tag
  (`href` on links, `src` on media, forced `target`/`rel`/`loading`/...).

Running `sanitize` on its own output returns the same string.
"""
import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)
from bs4.formatter import HTMLFormatter

from .errors import check_input_size
from .urls import is_safe_absolute_url, normalize_url

logger = logging.getLogger(__name__)

BLOCKED_TAGS = frozenset({
    "script", "style", "iframe", "object", "embed", "link", "meta",
})

ALLOWED_TAGS = frozenset({
    "a", "b", "strong", "i", "em", "u", "s",
    "p", "div", "span", "br", "hr",
    "ul", "ol", "li",
    "img", "video", "source",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "code", "pre",
    "table", "thead", "tbody", "tr", "td", "th",
    "figure", "figcaption",
    "small", "sup", "sub",
})

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"

_DROPPED_NODES = (Comment, CData, Declaration, Doctype, ProcessingInstruction)

# html.parser 只认识 CDATA 等少数 marked section，其余 <![ 按文本处理
_MARKED_SECTION_RE = re.compile(r"<!\[(?!CDATA\[)", re.IGNORECASE)

# 与 bs4 tree builder 相同的空白折叠规则
_ASCII_SPACES = "\x20\x0a\x09\x0c\x0d"
_PRESERVE_WHITESPACE_TAGS = frozenset({"pre"})


class _SourceOrderFormatter(HTMLFormatter):
    """Serializes attributes in the order they were set instead of sorted."""

    def attributes(self, tag):
        return list(tag.attrs.items()) if tag.attrs else []


# 最小转义（& < > 及属性引号），空元素不输出结尾斜杠
_FORMATTER = _SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def _safe_url(tag: Tag, attr: str) -> Optional[str]:
    value = tag.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    if not is_safe_absolute_url(value):
        return None
    return normalize_url(value)


def _rewrite_attributes(tag: Tag, name: str) -> bool:
    """Replace the tag's attributes with the reinstated safe subset.

    Returns False when the tag itself had to be removed.
    """
    href = _safe_url(tag, "href") if name == "a" else None
    src = _safe_url(tag, "src") if name in ("img", "video", "source") else None

    tag.attrs = {}

    if name == "a":
        if href:
            tag["href"] = href
            tag["target"] = LINK_TARGET
            tag["rel"] = LINK_REL
    elif name in ("img", "source"):
        if not src:
            tag.decompose()
            return False
        tag["src"] = src
        if name == "img":
            tag["loading"] = "lazy"
    elif name == "video":
        if src:
            tag["src"] = src
        tag["controls"] = "true"
    elif name == "table":
        tag["border"] = "0"
    return True


def _clean_tree(soup: BeautifulSoup) -> None:
    # 先序遍历，用显式栈避免深层嵌套触发递归上限
    stack = list(reversed(soup.contents))
    while stack:
        node = stack.pop()
        if isinstance(node, _DROPPED_NODES):
            node.extract()
            continue
        if isinstance(node, NavigableString) or not isinstance(node, Tag):
            continue

        name = (node.name or "").lower()
        if name in BLOCKED_TAGS:
            node.decompose()
            continue

        children = list(node.contents)
        if name not in ALLOWED_TAGS:
            node.unwrap()
        elif not _rewrite_attributes(node, name):
            continue
        stack.extend(reversed(children))


def _collapse_whitespace(text: str) -> str:
    if not text or text.strip(_ASCII_SPACES):
        return text
    return "\n" if "\n" in text else " "


def _normalize_text(soup: BeautifulSoup) -> None:
    """Merge adjacent strings and collapse whitespace-only runs.

    Removing comments and unwrapping tags can leave strings side by side that
    the parser would have read as a single string, so the result is brought
    back to the shape a fresh parse of the output has.
    """
    stack = [(soup, False)]
    while stack:
        container, preserve = stack.pop()
        preserve = preserve or container.name in _PRESERVE_WHITESPACE_TAGS

        runs, run = [], []
        for child in container.contents:
            if isinstance(child, NavigableString):
                run.append(child)
                continue
            if run:
                runs.append(run)
                run = []
            stack.append((child, preserve))
        if run:
            runs.append(run)

        for run in runs:
            text = "".join(run)
            if not preserve:
                text = _collapse_whitespace(text)
            if len(run) == 1 and text == run[0]:
                continue
            run[0].replace_with(NavigableString(text))
            for extra in run[1:]:
                extra.extract()


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse with html.parser; markup the parser rejects is re-read as text."""
    try:
        return BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.debug("[Sanitizer] marked section 按文本处理: %s", exc)
    try:
        return BeautifulSoup(_MARKED_SECTION_RE.sub("&lt;![", markup), "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("[Sanitizer] 无法解析，整体按文本处理: %s", exc)
    soup = BeautifulSoup("", "html.parser")
    soup.append(NavigableString(markup))
    return soup


def sanitize(markup, *, max_chars: Optional[int] = None) -> str:
    """Return an allow-listed, attribute-scrubbed copy of `markup`.

    Raises InputTooLargeError when `markup` is longer than `max_chars`
    (defaults to `config.max_input_chars`). Any other input, including
    malformed markup and non-strings, produces a string.
    """
    if not isinstance(markup, str) or not markup:
        return ""
    check_input_size(markup, max_chars)

    soup = parse_markup(markup)
    _clean_tree(soup)
    _normalize_text(soup)
    return soup.decode(formatter=_FORMATTER)
