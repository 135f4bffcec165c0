"""
Steam News Tide - 内容处理异常
"""
from typing import Optional

from ..config import config


class InputTooLargeError(ValueError):
    """Markup exceeds the configured parse budget and was not processed."""

    def __init__(self, length: int, limit: int):
        super().__init__(f"input of {length} chars exceeds limit of {limit}")
        self.length = length
        self.limit = limit


def check_input_size(markup: str, max_chars: Optional[int] = None) -> None:
    limit = config.max_input_chars if max_chars is None else max_chars
    if limit > 0 and len(markup) > limit:
        raise InputTooLargeError(len(markup), limit)
