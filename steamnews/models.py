"""
Steam News Tide Data Models - 数据模型定义
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class LibraryGame(BaseModel):
    """游戏库中的一条记录（来自本地库快照）"""
    object_id: str = ""
    title: str = ""
    shop: str = "steam"
    favorite: bool = False
    executable_path: Optional[str] = None
    last_time_played: Optional[datetime] = None
    is_deleted: bool = False

    # 游戏素材，用作新闻封面的兜底图
    cover_image_url: Optional[str] = None
    library_image_url: Optional[str] = None


class RawFeedItem(BaseModel):
    """上游新闻条目（不可信内容）"""
    id: str
    title: str = ""
    url: str = ""
    raw_content: str = ""       # 原始 HTML / BBCode / 宏占位符混合
    excerpt: str = ""           # 纯文本摘要
    published_at: int = 0       # epoch seconds
    author: Optional[str] = None

    # Steam 附带的来源信息
    feed_label: str = ""
    feed_name: str = ""
    app_id: str = ""


class NewsItem(BaseModel):
    """可直接渲染的新闻条目"""
    id: str
    title: str
    url: str
    excerpt: str = ""
    published_at: int = 0
    author: Optional[str] = None
    feed_label: str = ""
    feed_name: str = ""
    app_id: str = ""

    content_html: str = ""                   # 已清洗
    preview_image_url: Optional[str] = None  # 绝对 http(s) 地址
    content_too_large: bool = False


class FeedEntry(BaseModel):
    """单个游戏的新闻分组"""
    app_id: str
    game_title: str
    news_items: List[NewsItem] = Field(default_factory=list)
    cover_image_url: Optional[str] = None
    library_image_url: Optional[str] = None
    is_favorite: bool = False
    is_installed: bool = False
    last_played: Optional[datetime] = None
