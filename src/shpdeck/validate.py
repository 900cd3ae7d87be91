"""Validation layer for config and input files."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from .config import AppConfig
from .style import SHAPE_KEYWORDS, is_known_shape


@dataclass(slots=True)
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_info(self, msg: str) -> None:
        self.infos.append(msg)


class Validator:
    """Checks a config before any markup is written."""

    def __init__(self, cfg: AppConfig) -> None:
        self.cfg = cfg

    def run(self) -> ValidationReport:
        report = ValidationReport()
        self._validate_input(report)
        self._validate_extents(report)
        self._validate_style(report)
        return report

    def _validate_input(self, report: ValidationReport) -> None:
        path = self.cfg.input.shapefile
        if not path.exists():
            report.add_error(f"Missing shapefile: {path}")
            return
        report.add_info(f"Found shapefile: {path}")
        for suffix in (".shx", ".dbf"):
            sidecar = path.with_suffix(suffix)
            if not sidecar.exists():
                report.add_warning(f"Shapefile companion file not found: {sidecar}")

    def _validate_extents(self, report: ValidationReport) -> None:
        screen = self.cfg.extent.screen
        if not all(math.isfinite(v) for v in screen.to_dict().values()):
            report.add_error(f"Screen extent must be finite: {screen}")
        elif screen.degenerate:
            report.add_error(f"Screen extent has zero width or height: {screen}")

        geo = self.cfg.extent.geo
        if geo is None:
            report.add_info("Geographic extent will be taken from shapefile bounds.")
            return
        if not all(math.isfinite(v) for v in geo.to_dict().values()):
            report.add_error(f"Geographic extent must be finite: {geo}")
        elif geo.degenerate:
            report.add_error(f"Geographic extent has zero width or height: {geo}")

    def _validate_style(self, report: ValidationReport) -> None:
        style = self.cfg.style
        if not is_known_shape(style.shape):
            report.add_warning(
                f"Unknown shape keyword '{style.shape}' (expected one of: "
                + ", ".join(sorted(SHAPE_KEYWORDS))
                + "); only points and multipoints will be drawn."
            )
        if style.size < 0:
            report.add_error(f"Size must be >= 0, got {style.size}")


def format_report_lines(report: ValidationReport) -> Sequence[str]:
    lines: list[str] = []
    lines.extend(f"[INFO] {msg}" for msg in report.infos)
    lines.extend(f"[WARN] {msg}" for msg in report.warnings)
    lines.extend(f"[ERROR] {msg}" for msg in report.errors)
    if report.ok:
        lines.append("[OK] Validation passed.")
    return lines
