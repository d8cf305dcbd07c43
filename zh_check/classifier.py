"""
按文件类型扫描未国际化的中文。

.vue 文件依次扫描 template、<script> 到 export default 之间的内容、props 块；
.js/.ts 等脚本文件整体扫描引号字符串以及标签之间的纯文本（JSX）。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from . import patterns
from .context import (
    is_between_tag_boundary,
    markup_verdict,
    script_verdict,
    text_node_verdict,
)
from .models import (
    Document,
    DocumentKind,
    Finding,
    FindingRegion,
    RawMatch,
    Region,
    RegionKind,
    ScanOptions,
)
from .regions import extract_between, find_named_block

logger = logging.getLogger(__name__)

HYBRID_COMPONENT_SUFFIXES = frozenset({".vue"})
PLAIN_SCRIPT_SUFFIXES = frozenset({".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"})

DEFAULT_OPTIONS = ScanOptions()


def detect_kind(path: str | Path) -> DocumentKind:
    suffix = Path(path).suffix.lower()
    if suffix in HYBRID_COMPONENT_SUFFIXES:
        return DocumentKind.HYBRID_COMPONENT
    if suffix in PLAIN_SCRIPT_SUFFIXES:
        return DocumentKind.PLAIN_SCRIPT
    return DocumentKind.UNRECOGNIZED


def _quoted_matches(text: str, catalog: patterns.PatternCatalog) -> Iterable[RawMatch]:
    for m in catalog.quoted_literal.finditer(text):
        payload = m.group(1) if m.group(1) is not None else m.group(2)
        yield RawMatch(text=m.group(0), index=m.start(), payload=payload)


def _scan_script_text(
    text: str, base: int, region: FindingRegion, options: ScanOptions
) -> list[Finding]:
    catalog = patterns.build_catalog(options.literal_whitelist)
    findings: list[Finding] = []
    for raw in _quoted_matches(text, catalog):
        if script_verdict(text, raw, options).suppressed:
            continue
        findings.append(Finding(region, raw.payload, base + raw.index))
    return findings


def _scan_text_nodes(
    text: str, base: int, region: FindingRegion, options: ScanOptions
) -> list[Finding]:
    """标签之间的纯文本，例如 <div>你好</div>。"""
    catalog = patterns.build_catalog(options.literal_whitelist)
    findings: list[Finding] = []
    for node in catalog.tag_content.finditer(text):
        content, content_start = node.group(1), node.start(1)
        for m in catalog.literal_text.finditer(content):
            literal = m.group(0).rstrip()
            raw = RawMatch(text=m.group(0), index=content_start + m.start(), payload=literal)
            if markup_verdict(text, raw, options).suppressed:
                continue
            findings.append(Finding(region, literal, base + raw.index))
    return findings


def _is_static_attr(name: str) -> bool:
    return not name.startswith((":", "@", "v-"))


def _scan_template(template: Region, options: ScanOptions) -> list[Finding]:
    text, base = template.text, template.start
    catalog = patterns.build_catalog(options.literal_whitelist)
    findings = _scan_text_nodes(text, base, FindingRegion.TEMPLATE, options)

    # 静态属性，例如 placeholder="请输入"；记录引号位置，避免下面再报一次
    attr_quotes: set[int] = set()
    for tag in patterns.START_TAG_RE.finditer(text):
        attrs_start = tag.start(1)
        for attr in patterns.ATTR_RE.finditer(tag.group(1)):
            group = 2 if attr.group(2) is not None else 3
            value = attr.group(group)
            value_index = attrs_start + attr.start(group)
            if not _is_static_attr(attr.group(1)) or not catalog.is_literal(value):
                continue
            attr_quotes.add(value_index - 1)
            raw = RawMatch(text=value, index=value_index, payload=value)
            if markup_verdict(text, raw, options).suppressed:
                continue
            findings.append(Finding(FindingRegion.TEMPLATE, value, base + value_index - 1))

    # 表达式里的字符串，例如 {{ '你好' }}、:title="'你好'"
    for raw in _quoted_matches(text, catalog):
        if raw.index in attr_quotes:
            continue
        if markup_verdict(text, raw, options).suppressed:
            continue
        findings.append(Finding(FindingRegion.TEMPLATE, raw.payload, base + raw.index))

    findings.sort(key=lambda f: f.offset)
    return findings


def _overlaps(a: Region, b: Region) -> bool:
    return a.start < b.end and b.start < a.end


def _find_preamble(text: str, template: Region | None) -> Region | None:
    """<script> 到 export default 之间的内容，不跨进 template 区域。"""
    if template is None:
        return extract_between(
            text, patterns.SCRIPT_PRE_OPEN, patterns.SCRIPT_PRE_CLOSE, RegionKind.SCRIPT_PREAMBLE
        )
    # script 在 template 之前时只看 template 之前的部分，否则只看之后的部分
    before = extract_between(
        text,
        patterns.SCRIPT_PRE_OPEN,
        patterns.SCRIPT_PRE_CLOSE,
        RegionKind.SCRIPT_PREAMBLE,
        end=template.start,
    )
    if before is not None:
        return before
    return extract_between(
        text,
        patterns.SCRIPT_PRE_OPEN,
        patterns.SCRIPT_PRE_CLOSE,
        RegionKind.SCRIPT_PREAMBLE,
        start=template.end,
    )


def scan_hybrid_component(text: str, options: ScanOptions = DEFAULT_OPTIONS) -> list[Finding]:
    findings: list[Finding] = []

    template = extract_between(
        text, patterns.TEMPLATE_OPEN, patterns.TEMPLATE_CLOSE, RegionKind.TEMPLATE
    )
    if template is not None:
        findings.extend(_scan_template(template, options))

    preamble = _find_preamble(text, template)
    if preamble is not None:
        findings.extend(
            _scan_script_text(preamble.text, preamble.start, FindingRegion.SCRIPT_PRE, options)
        )
    else:
        logger.debug("未找到 <script> 到 export default 之间的内容")

    pos = preamble.end if preamble is not None else 0
    props = find_named_block(text, patterns.PROPS_BLOCK_RE, pos)
    if props is not None and template is not None and _overlaps(props, template):
        # 模板里的 props: { ... }（例如绑定的对象字面量）不算组件的 props
        props = find_named_block(text, patterns.PROPS_BLOCK_RE, max(pos, template.end))
    if props is not None:
        findings.extend(_scan_script_text(props.text, props.start, FindingRegion.PROPS, options))

    return findings


def scan_plain_script(text: str, options: ScanOptions = DEFAULT_OPTIONS) -> list[Finding]:
    catalog = patterns.build_catalog(options.literal_whitelist)
    findings = _scan_script_text(text, 0, FindingRegion.PLAIN, options)

    # JSX 文本节点：<p>你好</p>
    for m in catalog.literal_text.finditer(text):
        if not is_between_tag_boundary(text, m.start(), len(m.group(0)), options.tag_window):
            continue
        literal = m.group(0).rstrip()
        raw = RawMatch(text=m.group(0), index=m.start(), payload=literal)
        if text_node_verdict(text, raw, options).suppressed:
            continue
        findings.append(Finding(FindingRegion.PLAIN, literal, raw.index))

    findings.sort(key=lambda f: f.offset)
    return findings


def scan(
    text: str, kind: DocumentKind, options: ScanOptions = DEFAULT_OPTIONS
) -> list[Finding]:
    if kind is DocumentKind.HYBRID_COMPONENT:
        return scan_hybrid_component(text, options)
    if kind is DocumentKind.PLAIN_SCRIPT:
        return scan_plain_script(text, options)
    return []


def scan_document(document: Document, options: ScanOptions = DEFAULT_OPTIONS) -> list[Finding]:
    return scan(document.text, document.kind, options)


def find_translated_texts(
    text: str, rules: Iterable[str | re.Pattern[str]] = (patterns.I18N_CALL_SITE_RE,)
) -> list[str]:
    """已经通过 t() 国际化的文本（每条规则的第一个捕获组）。"""
    found: list[str] = []
    for rule in rules:
        found.extend(m.group(1) for m in re.finditer(rule, text))
    return found


def line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1
