"""
扫描过程中使用的数据结构。

Document  —— 一个源文件的完整文本及其类型
Region    —— Document 中的一段连续子串（template / script 前置段 / props 块）
RawMatch  —— 某条正则在某段文本上的一次命中
Finding   —— 通过所有过滤后需要上报的中文文本
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DocumentKind(StrEnum):
    HYBRID_COMPONENT = "hybrid-component"
    PLAIN_SCRIPT = "plain-script"
    UNRECOGNIZED = "unrecognized"


class RegionKind(StrEnum):
    TEMPLATE = "template"
    SCRIPT_PREAMBLE = "script-preamble"
    NAMED_BLOCK = "named-options-block"


class FindingRegion(StrEnum):
    SCRIPT_PRE = "script-pre"
    PROPS = "props"
    TEMPLATE = "template"
    PLAIN = "plain"


class SuppressionReason(StrEnum):
    NONE = "none"
    LINE_COMMENT = "line-comment"
    BLOCK_COMMENT = "block-comment"
    I18N_WRAPPED = "i18n-wrapped"
    IGNORED_PREFIX = "ignored-prefix"


@dataclass(frozen=True, slots=True)
class Document:
    text: str
    kind: DocumentKind


@dataclass(frozen=True, slots=True)
class Region:
    """start 为 text 在父文档中的起始偏移，用于把局部下标换算回绝对位置。"""

    kind: RegionKind
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True, slots=True)
class RawMatch:
    """
    一次正则命中。

    - text:    整个命中的子串（带引号）
    - index:   命中在被搜索字符串中的起始下标
    - payload: 真正的中文文本（去掉引号后的捕获组）
    """

    text: str
    index: int
    payload: str


@dataclass(frozen=True, slots=True)
class SuppressionVerdict:
    reason: SuppressionReason = SuppressionReason.NONE

    @property
    def suppressed(self) -> bool:
        return self.reason is not SuppressionReason.NONE


@dataclass(frozen=True, slots=True)
class Finding:
    """
    offset 为命中在整份文档中的起始偏移：
    引号字符串与静态属性值指向开引号，文本节点指向第一个字符。
    """

    region: FindingRegion
    text: str
    offset: int


# 匹配字母、数字之外允许出现在国际化文本里的标点
DEFAULT_LITERAL_WHITELIST = ".©×-_!, "
# 当前行前缀以 t( 结尾即认为已被国际化方法包裹
DEFAULT_I18N_CALL_PREFIX = r"t\s*\(\s*$"


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """
    扫描选项，由外部（CLI / 配置文件）解析完成后传入，核心不读取任何环境状态。

    窗口大小是精度与速度的折中，可按需调大。
    """

    ignore_prefix_patterns: tuple[str, ...] = ()
    literal_whitelist: str = DEFAULT_LITERAL_WHITELIST
    i18n_call_prefix_pattern: str = DEFAULT_I18N_CALL_PREFIX
    line_window: int = 300
    comment_window: int = 500
    tag_window: int = 50
