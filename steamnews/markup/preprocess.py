"""
Steam News Tide - 内容预处理

Expands Steam's image macros and its BBCode dialect into plain HTML. Nothing
here validates URLs or removes content; the output still has to go through
`sanitize` before it is rendered.
"""
import re
from typing import Callable, List, Tuple

CLAN_IMAGE_MACRO = "{STEAM_CLAN_IMAGE}"
APP_IMAGE_MACRO = "{STEAM_APP_IMAGE}"
CLAN_IMAGE_BASE_URL = "https://clan.cloudflare.steamstatic.com/images"
APP_IMAGE_BASE_URL = "https://cdn.cloudflare.steamstatic.com/steam/apps"

_MACROS = (
    (CLAN_IMAGE_MACRO, CLAN_IMAGE_BASE_URL),
    (APP_IMAGE_MACRO, APP_IMAGE_BASE_URL),
)

# 仅改写 src / href 属性中的协议相对地址，正文里的 // 保持不变
_PROTOCOL_RELATIVE_RE = re.compile(r"""(\b(?:src|href)\s*=\s*["']?)//""", re.IGNORECASE)

_BLOCK_TAG_RE = re.compile(
    r"<(?:p|br|div|img|ul|ol|h[1-6]|blockquote|table|figure)\b",
    re.IGNORECASE,
)
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

# 同名标签嵌套时由内向外展开，每轮展开最内层一对
_MAX_NESTING = 16
_FLAGS = re.IGNORECASE | re.DOTALL


def _pair_re(name: str, arg: str = "") -> "re.Pattern[str]":
    body = rf"(?:(?!\[/?{name}(?:=[^\[\]]*)?\]).)*?"
    return re.compile(rf"\[{name}{arg}\](?P<body>{body})\[/{name}\]", _FLAGS)


def _attr(value: str) -> str:
    return value.strip().replace('"', "&quot;")


def _wrap(tag: str) -> Callable[["re.Match[str]"], str]:
    return lambda m: f"<{tag}>{m.group('body')}</{tag}>"


_SIMPLE_TAGS = {
    "b": "strong",
    "i": "em",
    "u": "u",
    "s": "s",
    "strike": "s",
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
    "p": "p",
    "code": "code",
    "list": "ul",
    "olist": "ol",
}

_BBCODE_RULES: List[Tuple["re.Pattern[str]", Callable[["re.Match[str]"], str]]] = [
    (_pair_re("img"), lambda m: f'<img src="{_attr(m.group("body"))}" />'),
    (
        _pair_re("url", r"""=(?P<q>["']?)(?P<arg>[^\[\]]*?)(?P=q)"""),
        lambda m: f'<a href="{_attr(m.group("arg"))}">{m.group("body")}</a>',
    ),
    (
        _pair_re("url"),
        lambda m: f'<a href="{_attr(m.group("body"))}">{m.group("body")}</a>',
    ),
    (_pair_re("quote", r"(?:=[^\[\]]*)?"), _wrap("blockquote")),
] + [(_pair_re(name), _wrap(tag)) for name, tag in _SIMPLE_TAGS.items()]

_HR_RE = re.compile(r"\[hr\]\s*\[/hr\]", re.IGNORECASE)
_LIST_ITEM_RE = re.compile(
    r"\[\*\](.*?)(?=\[\*\]|</?ul>|</?ol>|\[/?o?list\]|\Z)",
    _FLAGS,
)


def expand_macros(text: str) -> str:
    for token, base_url in _MACROS:
        text = text.replace(token, base_url)
    return _PROTOCOL_RELATIVE_RE.sub(r"\1https://", text)


def expand_bbcode(text: str) -> str:
    """[b]x[/b] -> <strong>x</strong> 等；未闭合的标签原样保留。"""
    for _ in range(_MAX_NESTING):
        changed = False
        for pattern, render in _BBCODE_RULES:
            text, count = pattern.subn(render, text)
            changed = changed or count > 0
        if not changed:
            break
    text = _HR_RE.sub("<hr />", text)
    return _LIST_ITEM_RE.sub(lambda m: f"<li>{m.group(1).strip()}</li>", text)


def has_block_markup(text: str) -> bool:
    return bool(_BLOCK_TAG_RE.search(text))


def preprocess(raw) -> str:
    if not isinstance(raw, str) or not raw:
        return ""
    text = expand_bbcode(expand_macros(raw))
    if not has_block_markup(text):
        # 纯文本内容：保留段落结构
        text = _NEWLINE_RE.sub("<br />", text)
    return text
