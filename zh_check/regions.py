"""
从整份文档里切出需要扫描的区域：template、<script> 到 export default 之间、
以及 `props: { ... }` 这类具名块。

缺少标记或花括号不配对时视为区域不存在（返回 None），不会抛错；
只有调用方传错下标才会抛 ValueError。
"""

from __future__ import annotations

import functools
import re

from .models import Region, RegionKind

NOT_FOUND = -1


@functools.lru_cache(maxsize=32)
def _between_re(open_pattern: str, close_pattern: str) -> re.Pattern[str]:
    return re.compile(open_pattern + r"([\s\S]+)" + close_pattern, re.IGNORECASE)


def extract_between(
    text: str,
    open_pattern: str,
    close_pattern: str,
    kind: RegionKind,
    start: int = 0,
    end: int | None = None,
) -> Region | None:
    """
    取 open 与 close 之间的内容（贪婪匹配，到最后一个 close 为止）。

    只在 text[start:end] 内查找，返回的 Region.start 仍是相对整个 text 的偏移。
    """
    if end is None:
        end = len(text)
    match = _between_re(open_pattern, close_pattern).search(text, start, end)
    if match is None:
        return None
    return Region(kind=kind, text=match.group(1), start=match.start(1))


def find_matching_brace(text: str, pos: int) -> int:
    """返回与 text[pos] 处 "{" 配对的 "}" 下标，不配对时返回 NOT_FOUND。"""
    if not 0 <= pos < len(text) or text[pos] != "{":
        raise ValueError(f"No '{{' at index {pos}")
    depth = 1
    for i in range(pos + 1, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return NOT_FOUND


def find_named_block(
    text: str, block_open_pattern: str | re.Pattern[str], pos: int = 0
) -> Region | None:
    """
    查找 `key: {` 开头的块，返回两个花括号之间（不含花括号）的内容。

    pos 之前的文本不参与查找，用来保证与前面已切出的区域不重叠。
    """
    if isinstance(block_open_pattern, str):
        block_open_pattern = re.compile(block_open_pattern, re.IGNORECASE)
    match = block_open_pattern.search(text, pos)
    if match is None:
        return None
    open_index = match.end() - 1
    close_index = find_matching_brace(text, open_index)
    if close_index == NOT_FOUND:
        return None
    return Region(
        kind=RegionKind.NAMED_BLOCK,
        text=text[open_index + 1 : close_index],
        start=open_index + 1,
    )
