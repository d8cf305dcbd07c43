"""
上下文判定：只看命中位置附近的原始字符，判断是否处于注释中、是否已被 t()
包裹、是否是两个标签之间的纯文本。

都是纯函数，index 必须落在 [0, len(text)) 内，由调用方保证。
"//" 的判定只看当前行前缀里是否出现 "//"，不区分它是否位于另一个字符串
里（例如 URL），这是已知的不精确之处。
"""

from __future__ import annotations

import logging
import re

from .models import (
    DEFAULT_I18N_CALL_PREFIX,
    RawMatch,
    ScanOptions,
    SuppressionReason,
    SuppressionVerdict,
)

logger = logging.getLogger(__name__)

DEFAULT_LINE_WINDOW = 300
DEFAULT_COMMENT_WINDOW = 500
DEFAULT_TAG_WINDOW = 50

SCRIPT_COMMENT_TOKENS = ("/*", "*/")
MARKUP_COMMENT_TOKENS = ("<!--", "-->")


def preceding_line(text: str, index: int, window: int = DEFAULT_LINE_WINDOW) -> str:
    """返回 index 之前、当前行内的文本（最多回看 window 个字符，包含换行符本身）。"""
    start = max(index - 1 - window, 0)
    newline = text.rfind("\n", start, index)
    if newline != -1:
        start = newline
    return text[start:index]


def is_line_commented(text: str, index: int, window: int = DEFAULT_COMMENT_WINDOW) -> bool:
    return "//" in preceding_line(text, index, window)


def is_call_wrapped(
    text: str,
    index: int,
    pattern: str | re.Pattern[str] = DEFAULT_I18N_CALL_PREFIX,
    window: int = DEFAULT_LINE_WINDOW,
) -> bool:
    """$t("你好") 这种已被国际化方法包裹的文本。"""
    return re.search(pattern, preceding_line(text, index, window).strip()) is not None


def is_block_commented(
    text: str,
    index: int,
    window: int = DEFAULT_COMMENT_WINDOW,
    tokens: tuple[str, str] = SCRIPT_COMMENT_TOKENS,
) -> bool:
    """
    从 index 往回逐字符查找，先遇到注释结束符说明不在注释里，先遇到注释开始符
    说明在注释里。块注释可以跨行，所以不能只看当前行。
    """
    open_token, close_token = tokens
    lowest = max(index - 1 - window, 0)
    for end in range(index, lowest, -1):
        if text.endswith(close_token, 0, end):
            return False
        if text.endswith(open_token, 0, end):
            return True
    return False


def _reaches(text: str, start: int, step: int, boundary: str, window: int) -> bool:
    # 跳过空白，第一个非空白字符必须是 boundary
    for i in range(start, start + step * (window + 1), step):
        if i < 0 or i >= len(text):
            return False
        ch = text[i]
        if ch == boundary:
            return True
        if ch.strip():
            return False
    return False


def is_between_tag_boundary(
    text: str, index: int, length: int, window: int = DEFAULT_TAG_WINDOW
) -> bool:
    """命中左侧（忽略空白）紧挨 >，右侧（忽略空白）紧挨 <。"""
    return _reaches(text, index - 1, -1, ">", window) and _reaches(
        text, index + length, 1, "<", window
    )


def matches_prefix_pattern(
    pattern: str | re.Pattern[str],
    text: str,
    index: int,
    window: int = DEFAULT_LINE_WINDOW,
) -> bool:
    return re.search(pattern, preceding_line(text, index, window).strip()) is not None


def _prefix_verdict(text: str, raw: RawMatch, options: ScanOptions) -> SuppressionVerdict:
    if is_call_wrapped(text, raw.index, options.i18n_call_prefix_pattern, options.line_window):
        return SuppressionVerdict(SuppressionReason.I18N_WRAPPED)
    for pattern in options.ignore_prefix_patterns:
        if matches_prefix_pattern(pattern, text, raw.index, options.line_window):
            return SuppressionVerdict(SuppressionReason.IGNORED_PREFIX)
    return SuppressionVerdict()


def script_verdict(text: str, raw: RawMatch, options: ScanOptions) -> SuppressionVerdict:
    """脚本里的命中：/* */ 注释、// 注释、t() 包裹、自定义前缀。"""
    if is_block_commented(text, raw.index, options.comment_window):
        verdict = SuppressionVerdict(SuppressionReason.BLOCK_COMMENT)
    elif is_line_commented(text, raw.index, options.comment_window):
        verdict = SuppressionVerdict(SuppressionReason.LINE_COMMENT)
    else:
        verdict = _prefix_verdict(text, raw, options)
    if verdict.suppressed:
        logger.debug("忽略 %r（%s）", raw.payload, verdict.reason)
    return verdict


def markup_verdict(text: str, raw: RawMatch, options: ScanOptions) -> SuppressionVerdict:
    """模板里的命中：<!-- --> 注释、t() 包裹、自定义前缀；// 在模板里不是注释。"""
    if is_block_commented(text, raw.index, options.comment_window, MARKUP_COMMENT_TOKENS):
        verdict = SuppressionVerdict(SuppressionReason.BLOCK_COMMENT)
    else:
        verdict = _prefix_verdict(text, raw, options)
    if verdict.suppressed:
        logger.debug("忽略 %r（%s）", raw.payload, verdict.reason)
    return verdict


def text_node_verdict(text: str, raw: RawMatch, options: ScanOptions) -> SuppressionVerdict:
    """JSX 文本节点：/* */ 注释、t() 包裹、自定义前缀；同一行里的 URL 不算 // 注释。"""
    if is_block_commented(text, raw.index, options.comment_window):
        verdict = SuppressionVerdict(SuppressionReason.BLOCK_COMMENT)
    else:
        verdict = _prefix_verdict(text, raw, options)
    if verdict.suppressed:
        logger.debug("忽略 %r（%s）", raw.payload, verdict.reason)
    return verdict
