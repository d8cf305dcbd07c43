"""
配置解析：默认值 < 配置文件 < 命令行参数。

配置文件默认是 ${cwd}/zh-check.config.yml，内容形如：

    options:
      zh_check:
        root_dir: src
        i18n_file_rules:
          - "**/*.vue"
        ignore_pre_reg:
          - "i18n-ignore"
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import DEFAULT_I18N_CALL_PREFIX, DEFAULT_LITERAL_WHITELIST, ScanOptions
from .patterns import I18N_CALL_SITE_RE

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "zh-check.config.yml"
OUTPUT_FORMATS = ("text", "json", "csv")


class ConfigError(Exception):
    """配置文件或命令行参数不合法。"""


@dataclass
class CheckConfig:
    # 工作目录
    cwd: str = "."
    # 国际化文本所在的根目录，相对 cwd
    root_dir: str = "src"
    # 需要扫描的文件规则（glob，相对 root_dir）
    i18n_file_rules: list[str] = field(default_factory=lambda: ["**/*.vue", "**/*.js"])
    # 不扫描的文件规则
    ignore_i18n_file_rules: list[str] = field(default_factory=list)
    # 被忽略的前缀（正则），命中位置所在行的前缀满足任一条即忽略
    ignore_pre_reg: list[str] = field(default_factory=list)
    # 已国际化文本的正则，第一个捕获组为文本
    i18n_text_rules: list[str] = field(default_factory=lambda: [I18N_CALL_SITE_RE.pattern])
    literal_whitelist: str = DEFAULT_LITERAL_WHITELIST
    i18n_call_prefix: str = DEFAULT_I18N_CALL_PREFIX
    format: str = "text"
    jobs: int = 4

    @property
    def root(self) -> Path:
        return (Path(self.cwd).resolve() / self.root_dir).resolve()

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            ignore_prefix_patterns=tuple(self.ignore_pre_reg),
            literal_whitelist=self.literal_whitelist,
            i18n_call_prefix_pattern=self.i18n_call_prefix,
        )


_FIELDS = {f.name: f for f in dataclasses.fields(CheckConfig)}
_LIST_FIELDS = {"i18n_file_rules", "ignore_i18n_file_rules", "ignore_pre_reg", "i18n_text_rules"}
_REGEX_FIELDS = {"ignore_pre_reg", "i18n_text_rules"}


def load_yaml(path: Path) -> object:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """读取配置文件中 options.zh_check 部分，没有该部分时返回空字典。"""
    try:
        data = load_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"无法读取配置文件 {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"配置文件 {path} 顶层必须是映射")
    options = data.get("options") or {}
    section = options.get("zh_check") if isinstance(options, dict) else None
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"配置文件 {path} 中 options.zh_check 必须是映射")
    return dict(section)


def _validate(values: Mapping[str, Any], source: str) -> None:
    unknown = sorted(set(values) - set(_FIELDS))
    if unknown:
        raise ConfigError(f"{source} 中存在未知配置项：{', '.join(unknown)}")
    for key, value in values.items():
        if key in _LIST_FIELDS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{source} 中 {key} 必须是字符串列表")
        elif key == "jobs":
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{source} 中 jobs 必须是正整数")
        elif not isinstance(value, str):
            raise ConfigError(f"{source} 中 {key} 必须是字符串")


def _check_regexes(config: CheckConfig) -> None:
    patterns = [config.i18n_call_prefix]
    for key in _REGEX_FIELDS:
        patterns.extend(getattr(config, key))
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"无效的正则表达式 {pattern!r}: {e}") from e
    if config.format not in OUTPUT_FORMATS:
        raise ConfigError(f"不支持的输出格式：{config.format}")


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    config_path: str | None = None,
    no_config: bool = False,
) -> CheckConfig:
    """
    合并默认值、配置文件与命令行参数。

    overrides 中值为 None 的项视为未指定。配置文件里的 cwd 只在命令行没有
    指定 --cwd 时生效。
    """
    cli = {k: v for k, v in (overrides or {}).items() if v is not None}
    _validate(cli, "命令行参数")

    values: dict[str, Any] = {}
    if not no_config:
        base = Path(cli.get("cwd", CheckConfig.cwd)).resolve()
        if config_path:
            path = Path(config_path).resolve()
            if not path.is_file():
                raise ConfigError(f"配置文件不存在：{path}")
        else:
            path = base / CONFIG_FILENAME
        if path.is_file():
            logger.info("读取配置文件 %s", path)
            file_values = load_config_file(path)
            _validate(file_values, str(path))
            values.update(file_values)

    values.update(cli)
    config = CheckConfig(**values)
    _check_regexes(config)
    return config
