# theme_result.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

DEFAULT_THEME = 'default'
LEVELS = 5  # intensity levels 0..4 per display mode


class DetectionMethod(str, Enum):
    css_variable = 'css-variable'
    date = 'date'
    date_fallback = 'date-fallback'
    none = 'none'
    error = 'error'


@dataclass(frozen=True)
class ColorSample:
    level: int
    variable: str
    color: Optional[str]


@dataclass(frozen=True)
class ThemeSignal:
    theme_name: Optional[str]
    light_samples: Tuple[ColorSample, ...]
    dark_samples: Tuple[ColorSample, ...]


@dataclass(frozen=True)
class GridColor:
    level: int
    color: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {'level': self.level, 'color': self.color}


@dataclass(frozen=True)
class DetectionResult:
    holiday_detected: bool
    theme_name: str
    detection_method: DetectionMethod
    light_grid_colors: Optional[Tuple[GridColor, ...]] = None
    dark_grid_colors: Optional[Tuple[GridColor, ...]] = None
    light_color_palette: Optional[str] = None
    dark_color_palette: Optional[str] = None

    @property
    def has_grid(self) -> bool:
        return self.light_grid_colors is not None and self.dark_grid_colors is not None

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialized form. Optional fields are left out entirely when absent.
        """
        out: Dict[str, Any] = {
            'holiday_detected': self.holiday_detected,
            'theme_name': self.theme_name,
            'detection_method': self.detection_method.value,
        }
        if self.light_grid_colors is not None:
            out['light_grid_colors'] = [g.to_dict() for g in self.light_grid_colors]
        if self.dark_grid_colors is not None:
            out['dark_grid_colors'] = [g.to_dict() for g in self.dark_grid_colors]
        if self.light_color_palette is not None:
            out['light_color_palette'] = self.light_color_palette
        if self.dark_color_palette is not None:
            out['dark_color_palette'] = self.dark_color_palette
        return out


def to_grid(samples: Sequence[ColorSample]) -> Tuple[GridColor, ...]:
    return tuple(GridColor(level=s.level, color=s.color) for s in samples)


def to_palette(samples: Sequence[ColorSample]) -> str:
    return ', '.join(s.color for s in samples if s.color)


def build_result(
    theme: str,
    method: DetectionMethod,
    light_samples: Optional[Sequence[ColorSample]] = None,
    dark_samples: Optional[Sequence[ColorSample]] = None,
) -> DetectionResult:
    if light_samples is None or dark_samples is None:
        return DetectionResult(
            holiday_detected=theme != DEFAULT_THEME,
            theme_name=theme,
            detection_method=DetectionMethod(method),
        )
    return DetectionResult(
        holiday_detected=theme != DEFAULT_THEME,
        theme_name=theme,
        detection_method=DetectionMethod(method),
        light_grid_colors=to_grid(light_samples),
        dark_grid_colors=to_grid(dark_samples),
        light_color_palette=to_palette(light_samples),
        dark_color_palette=to_palette(dark_samples),
    )
