#!/usr/bin/env python3
"""
中文检查脚本

用途：
1) 扫描 .vue 文件 template、<script> 到 export default 之间以及 props 中的中文
2) 扫描 .js/.ts 等脚本文件中的中文字符串
3) 忽略被注释、已被 t() 包裹或满足自定义前缀的中文
4) 有未国际化的中文时以非 0 状态码退出，方便接入 CI
"""

from __future__ import annotations

import argparse
import concurrent.futures as cf
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .classifier import detect_kind, find_translated_texts, scan_document
from .config import OUTPUT_FORMATS, CheckConfig, ConfigError, resolve_config
from .files import iter_source_files
from .models import Document, DocumentKind, ScanOptions
from .report import RENDERERS, FileReport

logger = logging.getLogger(__name__)


def comma_separated_list(value: str) -> list[str]:
    return [item for item in value.split(",") if item]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zh-check",
        description="检查源码中未国际化的中文。",
    )
    parser.add_argument("--version", action="version", version=f"zh-check {__version__}")
    parser.add_argument("--cwd", metavar="PATH", help="工作目录")
    parser.add_argument("--root-dir", metavar="PATH", help="国际文本所在的根目录")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="配置文件的路径，没有配置，默认路径是在${cwd}/zh-check.config.yml",
    )
    parser.add_argument("--no-config", action="store_true", help="不读取配置文件")
    parser.add_argument(
        "--i18n-file-rules",
        metavar="ITEMS",
        type=comma_separated_list,
        help="匹配含有国际化文本的文件规则，逗号分隔",
    )
    parser.add_argument(
        "--ignore-i18n-file-rules",
        metavar="ITEMS",
        type=comma_separated_list,
        help="不匹配含有国际化文本的文件规则，逗号分隔",
    )
    parser.add_argument(
        "--ignore-pre-reg",
        metavar="ITEMS",
        type=comma_separated_list,
        help="被忽略的前缀（正则），逗号分隔",
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="输出格式（默认 text）")
    parser.add_argument("-j", "--jobs", type=int, metavar="N", help="并发扫描的文件数")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="输出更多日志，可重复"
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def scan_file(path: Path, options: ScanOptions, i18n_text_rules: Sequence[str]) -> FileReport:
    logger.info("开始解析 %s", path)
    text = path.read_text(encoding="utf-8")
    kind = detect_kind(path)
    if kind is DocumentKind.UNRECOGNIZED:
        logger.debug("跳过无法识别的文件 %s", path)
    return FileReport(
        path=path,
        text=text,
        findings=scan_document(Document(text, kind), options),
        translated=find_translated_texts(text, i18n_text_rules),
    )


def _scan_one(
    path: Path, options: ScanOptions, rules: Sequence[str]
) -> FileReport | Exception:
    # 单个文件失败不影响其它文件
    try:
        return scan_file(path, options, rules)
    except Exception as e:
        logger.error("解析失败 %s: %s", path, e)
        return e


def run(config: CheckConfig) -> int:
    root = config.root
    paths = iter_source_files(root, config.i18n_file_rules, config.ignore_i18n_file_rules)
    options = config.scan_options()

    with cf.ThreadPoolExecutor(max_workers=config.jobs) as pool:
        results = list(
            pool.map(lambda p: _scan_one(p, options, config.i18n_text_rules), paths)
        )
    logger.info("全部处理完成，共 %d 个文件", len(paths))

    reports = [r for r in results if isinstance(r, FileReport)]
    failures = len(results) - len(reports)

    print(RENDERERS[config.format](reports, root))

    if failures:
        print(f"❌ {failures} 个文件解析失败", file=sys.stderr)
        return 2
    if any(r.findings for r in reports):
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    overrides = {
        "cwd": args.cwd,
        "root_dir": args.root_dir,
        "i18n_file_rules": args.i18n_file_rules,
        "ignore_i18n_file_rules": args.ignore_i18n_file_rules,
        "ignore_pre_reg": args.ignore_pre_reg,
        "format": args.format,
        "jobs": args.jobs,
    }
    try:
        config = resolve_config(overrides, config_path=args.config, no_config=args.no_config)
    except ConfigError as e:
        print(f"❌ 配置错误：{e}", file=sys.stderr)
        return 2

    return run(config)


if __name__ == "__main__":
    sys.exit(main())
