"""
Steam News Tide Ingestion Module - 数据摄取模块
"""
from .steam import fetch_steam_news, strip_html_tags, truncate_text

__all__ = [
    "fetch_steam_news",
    "strip_html_tags",
    "truncate_text",
]
