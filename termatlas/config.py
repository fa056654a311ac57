"""Configuration loading utilities for the world map renderer."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import json

from .canvas import MAX_SHADES
from .palette import COLOR_MODES
from .projection import Projection
from .quantizer import CHARSETS
from .terminator import DUSK_DEGREES, SUN_BORDER_METHODS

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


def parse_dusk(value: Union[str, float, int]) -> float:
    """Twilight width in degrees from a preset name (or prefix) or a number."""

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        degrees = float(value)
    else:
        key = str(value).strip().lower()
        matches = [name for name in DUSK_DEGREES if len(key) >= 3 and name.startswith(key[:3])]
        if matches:
            degrees = DUSK_DEGREES[matches[0]]
        else:
            try:
                degrees = float(key)
            except ValueError as exc:
                raise ValueError(
                    f"Unknown dusk setting {value!r}; expected a number or one of: {', '.join(DUSK_DEGREES)}"
                ) from exc
    if degrees <= 0:
        raise ValueError("Dusk width must be positive.")
    return degrees


def _optional_path(value: Any) -> Optional[Path]:
    return Path(value) if value else None


def parse_when(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"Invalid time {value!r}; expected ISO 8601, e.g. 2024-06-21T12:00") from exc


@dataclass
class RenderConfig:
    """Everything that shapes one rendering of the map."""

    columns: Optional[int] = None
    rows: Optional[int] = None
    projection: Projection = Projection.EQUIRECTANGULAR
    map_path: Optional[Path] = None
    locations_path: Optional[Path] = None
    solid_land: bool = True
    world_border: bool = False
    sun: bool = False
    sun_markers: bool = True
    sun_border_method: str = "curve"
    dusk_degrees: float = DUSK_DEGREES["civil"]
    shade_step_degrees: float = 1.0
    shade_bands: int = MAX_SHADES
    colors: int = 256
    charset: str = "ascii"
    title: Optional[str] = None
    trailing_newline: bool = True
    output_image: Optional[Path] = None
    when: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.projection = Projection.from_name(self.projection)
        for name in ("columns", "rows"):
            value = getattr(self, name)
            if value is not None and int(value) <= 0:
                raise ValueError(f"{name} must be a positive integer.")
        if not 2 <= self.shade_bands <= MAX_SHADES:
            raise ValueError(f"shade_bands must be between 2 and {MAX_SHADES}.")
        if self.shade_step_degrees <= 0:
            raise ValueError("shade_step_degrees must be positive.")
        if self.dusk_degrees <= 0:
            raise ValueError("dusk_degrees must be positive.")
        if self.colors not in COLOR_MODES:
            raise ValueError(f"colors must be one of {COLOR_MODES}.")
        if self.charset not in CHARSETS:
            raise ValueError(f"charset must be one of: {', '.join(CHARSETS)}.")
        if self.sun_border_method not in SUN_BORDER_METHODS:
            raise ValueError(f"sun_border_method must be one of: {', '.join(SUN_BORDER_METHODS)}.")

    @property
    def size(self) -> Tuple[int, int]:
        """Terminal size in characters, falling back to 80x24."""

        return (self.columns or DEFAULT_COLUMNS, self.rows or DEFAULT_ROWS)

    def with_overrides(self, **overrides: Any) -> "RenderConfig":
        """Copy with every override that is not ``None`` applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @staticmethod
    def from_mapping(data: Dict[str, Any]) -> "RenderConfig":
        columns = data.get("columns", data.get("width"))
        rows = data.get("rows", data.get("height"))
        return RenderConfig(
            columns=int(columns) if columns is not None else None,
            rows=int(rows) if rows is not None else None,
            projection=Projection.from_name(data.get("projection", "equirectangular")),
            map_path=_optional_path(data.get("map") or data.get("map_path")),
            locations_path=_optional_path(data.get("locations") or data.get("locations_path")),
            solid_land=bool(data.get("solid_land", True)),
            world_border=bool(data.get("world_border", False)),
            sun=bool(data.get("sun", False)),
            sun_markers=bool(data.get("sun_markers", True)),
            sun_border_method=str(data.get("sun_border_method", data.get("sun_border", "curve"))),
            dusk_degrees=parse_dusk(data.get("dusk", data.get("dusk_degrees", "civil"))),
            shade_step_degrees=float(data.get("shade_step_degrees", data.get("shade_step", 1.0))),
            shade_bands=int(data.get("shade_bands", MAX_SHADES)),
            colors=int(data.get("colors", 256)),
            charset=str(data.get("charset", "ascii")),
            title=data.get("title"),
            trailing_newline=bool(data.get("trailing_newline", True)),
            output_image=_optional_path(data.get("output_image") or data.get("output")),
            when=parse_when(data.get("when")),
        )


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:  # pragma: no cover - optional dependency
        import yaml  # type: ignore
    except Exception as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "YAML configuration requested but PyYAML is not available. Install with 'pip install pyyaml'."
        ) from exc
    with path.open("r", encoding="utf8") as handle:
        return yaml.safe_load(handle)  # type: ignore[no-any-return]


def load_config(path: Path) -> RenderConfig:
    """Load a :class:`RenderConfig` from a JSON or YAML file."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix.lower() in {".yaml", ".yml"}:
        raw = _load_yaml(path)
    else:
        with path.open("r", encoding="utf8") as handle:
            raw = json.load(handle)

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level.")

    return RenderConfig.from_mapping(raw)
