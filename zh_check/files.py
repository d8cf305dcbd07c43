"""按 glob 规则收集需要扫描的文件。"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def _is_ignored(rel: str, ignore_rules: Iterable[str]) -> bool:
    for rule in ignore_rules:
        if fnmatch.fnmatch(rel, rule):
            return True
        # "**/x" 同时匹配根目录下的 x
        if rule.startswith("**/") and fnmatch.fnmatch(rel, rule[3:]):
            return True
    return False


def iter_source_files(
    root: Path, rules: Iterable[str], ignore_rules: Iterable[str] = ()
) -> list[Path]:
    """返回 root 下匹配 rules 且不匹配 ignore_rules 的文件，按路径排序。"""
    ignore_rules = list(ignore_rules)
    if not root.is_dir():
        logger.warning("根目录不存在：%s", root)
        return []

    found: set[Path] = set()
    for rule in rules:
        for path in root.glob(rule):
            if not path.is_file():
                continue
            rel_parts = path.relative_to(root).parts
            # 与 glob 的 dot: false 一致，跳过隐藏目录和隐藏文件
            if any(part.startswith(".") for part in rel_parts):
                continue
            if _is_ignored("/".join(rel_parts), ignore_rules):
                logger.debug("忽略 %s", path)
                continue
            found.add(path)
    return sorted(found)
