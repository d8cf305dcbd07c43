"""把每个文件的扫描结果渲染成文本 / JSON / CSV。"""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import line_of
from .models import Finding


@dataclass
class FileReport:
    path: Path
    text: str
    findings: list[Finding] = field(default_factory=list)
    # 已经用 t() 国际化的文本
    translated: list[str] = field(default_factory=list)

    def rows(self) -> list[tuple[int, Finding]]:
        return [(line_of(self.text, f.offset), f) for f in self.findings]


def _display_path(path: Path, base: Path | None) -> str:
    if base is not None:
        try:
            return path.relative_to(base).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def render_text(reports: list[FileReport], base: Path | None = None) -> str:
    total = sum(len(r.findings) for r in reports)
    if not total:
        return "✅ 未发现未国际化的中文"
    lines = [f"❌ 发现 {total} 处未国际化的中文："]
    for report in reports:
        rel = _display_path(report.path, base)
        for line_no, finding in report.rows():
            lines.append(f"  - [{rel}:{line_no}] {finding.region}：\"{finding.text}\"")
    return "\n".join(lines)


def render_json(reports: list[FileReport], base: Path | None = None) -> str:
    data = [
        {
            "path": _display_path(report.path, base),
            "findings": [
                {
                    "region": str(finding.region),
                    "text": finding.text,
                    "offset": finding.offset,
                    "line": line_no,
                }
                for line_no, finding in report.rows()
            ],
            "translated": len(report.translated),
        }
        for report in reports
    ]
    return json.dumps(data, ensure_ascii=False, indent=2)


def render_csv(reports: list[FileReport], base: Path | None = None) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["path", "line", "offset", "region", "text"])
    for report in reports:
        rel = _display_path(report.path, base)
        for line_no, finding in report.rows():
            writer.writerow([rel, line_no, finding.offset, str(finding.region), finding.text])
    return buf.getvalue().rstrip("\n")


RENDERERS = {
    "text": render_text,
    "json": render_json,
    "csv": render_csv,
}
