"""
正则目录：识别中文文本、引号字符串、标签内容、开始标签、属性与 t() 调用。

中文判定规则：以 \\x00-\\xff 之外的字符开头，由非单字节字符和白名单字符
（字母、数字与少量标点）组成；纯白名单字符串永远不会命中。

所有 Pattern 都是编译后的只读对象，finditer/search 每次调用都从头开始，
不存在跨字符串残留的匹配位置。
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from .models import DEFAULT_LITERAL_WHITELIST

NON_LATIN1 = r"[^\x00-\xff]"

# 区域边界（片段，由 regions.extract_between 拼接）
TEMPLATE_OPEN = r"<template>"
TEMPLATE_CLOSE = r"</template>"
SCRIPT_PRE_OPEN = r"script>"
SCRIPT_PRE_CLOSE = r"(?:export\s*default)"

# $t('xxx') / this.$t("xxx") / i18n.t('xxx')，第一个捕获组为已国际化的文本
I18N_CALL_SITE_RE = re.compile(r"""[$.]?\bt\(['"](.+?)['"]""")

START_TAG_RE = re.compile(
    r"<(?:[-A-Za-z0-9_]+)"
    r"((?:\s+[a-zA-Z_:@][-a-zA-Z0-9_:.]*"
    r"""(?:\s*=\s*(?:(?:"[^"]*")|(?:'[^']*')|[^>\s]+))?)*)"""
    r"\s*(?:/?)>"
)

ATTR_RE = re.compile(
    r"([@:a-zA-Z_][-a-zA-Z0-9_.]*)"
    r"""(?:\s*=\s*(?:(?:"((?:\\.|[^"'])*)")|(?:'((?:\\.|[^'"])*)')))"""
)


def whitelist_class(whitelist: str = DEFAULT_LITERAL_WHITELIST) -> str:
    """白名单字符类的内容部分（不含方括号），字母数字固定在内。"""
    return "A-Za-z0-9" + "".join(re.escape(ch) for ch in whitelist)


def literal_text_pattern(whitelist: str = DEFAULT_LITERAL_WHITELIST) -> str:
    wl = whitelist_class(whitelist)
    return rf"(?![{{}}{wl}]+)(?:{NON_LATIN1}|[{wl}])+"


def literal_test_pattern(whitelist: str = DEFAULT_LITERAL_WHITELIST) -> str:
    wl = whitelist_class(whitelist)
    return rf"(?![{wl}]+\Z)(?:{NON_LATIN1}|[{wl}])+"


def quoted_literal_pattern(whitelist: str = DEFAULT_LITERAL_WHITELIST) -> str:
    # 双引号内容在第 1 组，单引号内容在第 2 组
    body = literal_text_pattern(whitelist)
    return rf'"({body})"|' + rf"'({body})'"


def tag_content_pattern(whitelist: str = DEFAULT_LITERAL_WHITELIST) -> str:
    wl = whitelist_class(whitelist)
    return rf">((?:{NON_LATIN1}|[{{}}{wl}\s])+)<"


def named_block_pattern(key: str) -> re.Pattern[str]:
    """`key: {` 形式的块开头，例如 props: {"""
    return re.compile(re.escape(key) + r"\s*:\s*\{", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class PatternCatalog:
    literal_text: re.Pattern[str]
    literal_test: re.Pattern[str]
    quoted_literal: re.Pattern[str]
    tag_content: re.Pattern[str]

    def is_literal(self, text: str) -> bool:
        """整段文本是否为需要国际化的中文文本。"""
        return self.literal_test.fullmatch(text) is not None


@functools.lru_cache(maxsize=16)
def build_catalog(whitelist: str = DEFAULT_LITERAL_WHITELIST) -> PatternCatalog:
    return PatternCatalog(
        literal_text=re.compile(literal_text_pattern(whitelist)),
        literal_test=re.compile(literal_test_pattern(whitelist)),
        quoted_literal=re.compile(quoted_literal_pattern(whitelist)),
        tag_content=re.compile(tag_content_pattern(whitelist)),
    )


PROPS_BLOCK_RE = named_block_pattern("props")
