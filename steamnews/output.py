"""
Steam News Tide - 输出生成模块
生成 JSON 数据和 HTML 预览页

技术路线: Jinja2 渲染 HTML（autoescape 开启，仅已清洗的正文标记为 safe）
"""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .config import config
from .markup import is_safe_absolute_url
from .models import FeedEntry

logger = logging.getLogger(__name__)

# ── 模板目录 ──────────────────────────────────────────────────────
TEMPLATE_DIR = Path(__file__).parent / "templates"


def _format_published(epoch_seconds: int) -> str:
    if not epoch_seconds:
        return ""
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M UTC")


class OutputGenerator:
    """输出生成器"""

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = output_dir or config.output_dir
        os.makedirs(self.output_dir, exist_ok=True)
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
        )

    def generate_json(self, entries: List[FeedEntry]) -> dict:
        return {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "entries": [entry.model_dump(mode="json") for entry in entries],
        }

    def render_html(self, entries: List[FeedEntry], language: str) -> str:
        template = self.env.get_template("news.html")
        games = []
        for entry in entries:
            items = []
            for item in entry.news_items:
                items.append({
                    "title": item.title,
                    "url": item.url if is_safe_absolute_url(item.url) else "",
                    "excerpt": item.excerpt,
                    "image": item.preview_image_url,
                    "published": _format_published(item.published_at),
                    "author": item.author or "",
                    # 正文已通过 sanitize，其他字段一律转义
                    "content": Markup(item.content_html),
                })
            games.append({"title": entry.game_title, "app_id": entry.app_id, "items": items})
        return template.render(language=language, games=games)

    def save(self, entries: List[FeedEntry], language: str) -> Dict[str, str]:
        json_path = os.path.join(self.output_dir, "steam-news.json")
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(self.generate_json(entries), f, ensure_ascii=False, indent=2)
        logger.info(f"[Output] JSON 已保存: {json_path}")

        html_path = os.path.join(self.output_dir, "steam-news.html")
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(self.render_html(entries, language))
        logger.info(f"[Output] HTML 预览已保存: {html_path}")

        return {"json_path": json_path, "html_path": html_path}
