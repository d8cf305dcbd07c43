"""zh-check：检查源码中未国际化的中文。"""

from __future__ import annotations

from .classifier import (
    detect_kind,
    find_translated_texts,
    scan,
    scan_document,
    scan_hybrid_component,
    scan_plain_script,
)
from .models import (
    Document,
    DocumentKind,
    Finding,
    FindingRegion,
    Region,
    RegionKind,
    ScanOptions,
    SuppressionReason,
)

__version__ = "0.1.0"

__all__ = [
    "Document",
    "DocumentKind",
    "Finding",
    "FindingRegion",
    "Region",
    "RegionKind",
    "ScanOptions",
    "SuppressionReason",
    "detect_kind",
    "find_translated_texts",
    "scan",
    "scan_document",
    "scan_hybrid_component",
    "scan_plain_script",
    "__version__",
]
