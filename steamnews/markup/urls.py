"""
Steam News Tide - URL 规范化与校验

`is_safe_absolute_url` is the only gate for `href` / `src` values. It checks
the scheme, not the host: any https host is accepted.
"""
from urllib.parse import urlsplit

SAFE_SCHEMES = frozenset({"http", "https"})


def normalize_url(raw) -> str:
    """Trim whitespace and turn a protocol-relative `//host/...` into https."""
    if not isinstance(raw, str):
        return ""
    value = raw.strip()
    if value.startswith("//"):
        value = "https:" + value
    return value


def is_safe_absolute_url(value) -> bool:
    url = normalize_url(value)
    if not url:
        return False
    try:
        parsed = urlsplit(url)
        # 访问 port 会校验端口格式
        parsed.port
    except ValueError:
        return False
    if parsed.scheme.lower() not in SAFE_SCHEMES:
        return False
    if not parsed.hostname:
        return False
    if any(ch.isspace() for ch in parsed.netloc):
        return False
    return True
