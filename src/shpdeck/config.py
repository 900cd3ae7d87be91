"""Typed configuration loader for `shpdeck.yaml`."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, cast

import yaml

from .models import GeoExtent, ScreenExtent, StyleConfig


def _mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected mapping for '{field_name}'")
    return cast(Mapping[str, Any], value)


def _str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _float(value: Any, field_name: str) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise ValueError(f"Expected float for '{field_name}'")


def _bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected bool for '{field_name}'")
    return value


def _path_from_cfg(value: Any, field_name: str, root_dir: Path) -> Path:
    raw = _str(value, field_name)
    p = Path(raw)
    return p if p.is_absolute() else root_dir / p


@dataclass(frozen=True, slots=True)
class InputConfig:
    shapefile: Path

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> InputConfig:
        return cls(shapefile=_path_from_cfg(raw.get("shapefile"), "input.shapefile", root_dir))


@dataclass(frozen=True, slots=True)
class OutputConfig:
    markup: Path | None
    deck: bool
    slide_bg: str | None
    logs_dir: Path | None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> OutputConfig:
        markup_raw = raw.get("markup")
        slide_bg_raw = raw.get("slide_bg")
        logs_raw = raw.get("logs_dir")
        return cls(
            markup=(
                None
                if markup_raw is None or markup_raw == "-"
                else _path_from_cfg(markup_raw, "output.markup", root_dir)
            ),
            deck=_bool(raw.get("deck", True), "output.deck"),
            slide_bg=None if slide_bg_raw is None else _str(slide_bg_raw, "output.slide_bg"),
            logs_dir=None if logs_raw is None else _path_from_cfg(logs_raw, "output.logs_dir", root_dir),
        )

    @classmethod
    def default(cls) -> OutputConfig:
        return cls(markup=None, deck=True, slide_bg=None, logs_dir=None)


@dataclass(frozen=True, slots=True)
class ExtentConfig:
    geo: GeoExtent | None
    screen: ScreenExtent

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> ExtentConfig:
        geo_raw = raw.get("geo")
        screen_raw = raw.get("screen")
        return cls(
            geo=None if geo_raw is None else GeoExtent.from_mapping(_mapping(geo_raw, "extent.geo")),
            screen=(
                ScreenExtent.default()
                if screen_raw is None
                else ScreenExtent.from_mapping(_mapping(screen_raw, "extent.screen"))
            ),
        )

    @classmethod
    def default(cls) -> ExtentConfig:
        return cls(geo=None, screen=ScreenExtent.default())


def style_from_mapping(raw: Mapping[str, Any]) -> StyleConfig:
    size = _float(raw.get("size", 0.1), "style.size")
    if size < 0:
        raise ValueError("style.size must be >= 0")
    return StyleConfig(
        shape=_str(raw.get("shape", "polygon"), "style.shape"),
        color=_str(raw.get("color", "black"), "style.color"),
        size=size,
        close_loop=_bool(raw.get("close_loop", True), "style.close_loop"),
    )


DEFAULT_STYLE = StyleConfig(shape="polygon", color="black", size=0.1, close_loop=True)


@dataclass(frozen=True, slots=True)
class AppConfig:
    source_path: Path | None
    input: InputConfig
    output: OutputConfig
    extent: ExtentConfig
    style: StyleConfig

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], source_path: Path) -> AppConfig:
        root_dir = source_path.parent.resolve()
        output_raw = raw.get("output")
        extent_raw = raw.get("extent")
        style_raw = raw.get("style")
        return cls(
            source_path=source_path.resolve(),
            input=InputConfig.from_mapping(_mapping(raw.get("input"), "input"), root_dir),
            output=(
                OutputConfig.default()
                if output_raw is None
                else OutputConfig.from_mapping(_mapping(output_raw, "output"), root_dir)
            ),
            extent=(
                ExtentConfig.default()
                if extent_raw is None
                else ExtentConfig.from_mapping(_mapping(extent_raw, "extent"))
            ),
            style=DEFAULT_STYLE if style_raw is None else style_from_mapping(_mapping(style_raw, "style")),
        )

    @classmethod
    def default(cls, shapefile: Path) -> AppConfig:
        """Config for command-line use without a YAML file."""
        return cls(
            source_path=None,
            input=InputConfig(shapefile=shapefile),
            output=OutputConfig.default(),
            extent=ExtentConfig.default(),
            style=DEFAULT_STYLE,
        )

    def with_overrides(
        self,
        *,
        shapefile: Path | None = None,
        markup: Path | None = None,
        to_stdout: bool = False,
        deck: bool | None = None,
        geo: GeoExtent | None = None,
        screen: ScreenExtent | None = None,
        shape: str | None = None,
        color: str | None = None,
        size: float | None = None,
        close_loop: bool | None = None,
    ) -> AppConfig:
        """Return a copy with command-line overrides applied."""
        style = self.style
        if shape is not None:
            style = replace(style, shape=shape)
        if color is not None:
            style = replace(style, color=color)
        if size is not None:
            if size < 0:
                raise ValueError("size must be >= 0")
            style = replace(style, size=size)
        if close_loop is not None:
            style = replace(style, close_loop=close_loop)

        output = self.output
        if to_stdout:
            output = replace(output, markup=None)
        elif markup is not None:
            output = replace(output, markup=markup)
        if deck is not None:
            output = replace(output, deck=deck)

        extent = self.extent
        if geo is not None:
            extent = replace(extent, geo=geo)
        if screen is not None:
            extent = replace(extent, screen=screen)

        return replace(
            self,
            input=self.input if shapefile is None else InputConfig(shapefile=shapefile),
            output=output,
            extent=extent,
            style=style,
        )


def load_config(path: str | Path) -> AppConfig:
    """Load and validate the YAML config file into typed settings."""
    cfg_path = Path(path).resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level config must be a YAML mapping")
    return AppConfig.from_mapping(cast(Mapping[str, Any], raw), cfg_path)
