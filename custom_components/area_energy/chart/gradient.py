"""Lazily evaluated gradient colors and their per-kind cache."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol

from ..const import KIND_ENERGY, KIND_POWER, LINE_TYPE_GRADIENT_NO_FILL

_LOGGER = logging.getLogger(__name__)

ColorStop = tuple[float, str]

# Cool colors at the bottom, warm at the top.
HEAT_RAMPS: Mapping[str, tuple[ColorStop, ...]] = {
    KIND_POWER: (
        (0.0, "rgba(59, 130, 246, 0.8)"),
        (0.3, "rgba(34, 197, 94, 0.8)"),
        (0.6, "rgba(251, 191, 36, 0.8)"),
        (1.0, "rgba(239, 68, 68, 0.8)"),
    ),
    KIND_ENERGY: (
        (0.0, "rgba(6, 182, 212, 0.8)"),
        (0.3, "rgba(34, 197, 94, 0.8)"),
        (0.6, "rgba(251, 191, 36, 0.8)"),
        (1.0, "rgba(239, 68, 68, 0.8)"),
    ),
}

MONOCHROME_RAMPS: Mapping[str, tuple[ColorStop, ...]] = {
    KIND_POWER: (
        (0.0, "rgba(59, 130, 246, 0.1)"),
        (0.5, "rgba(59, 130, 246, 0.6)"),
        (1.0, "rgba(59, 130, 246, 1)"),
    ),
    KIND_ENERGY: (
        (0.0, "rgba(16, 185, 129, 0.1)"),
        (0.5, "rgba(16, 185, 129, 0.6)"),
        (1.0, "rgba(16, 185, 129, 1)"),
    ),
}


def gradient_stops(kind: str, line_type: str) -> tuple[ColorStop, ...]:
    """Return the color stops used for ``kind`` under ``line_type``."""

    ramps = HEAT_RAMPS if line_type == LINE_TYPE_GRADIENT_NO_FILL else MONOCHROME_RAMPS
    return ramps[kind]


@dataclass(frozen=True, slots=True)
class ChartArea:
    """Plot area of a rendered chart in canvas pixels."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @classmethod
    def coerce(cls, value: Any) -> ChartArea | None:
        """Return ``value`` as a :class:`ChartArea` when it carries the edges."""

        if value is None or isinstance(value, ChartArea):
            return value
        try:
            if isinstance(value, Mapping):
                return cls(
                    float(value["left"]),
                    float(value["top"]),
                    float(value["right"]),
                    float(value["bottom"]),
                )
            return cls(
                float(value.left),
                float(value.top),
                float(value.right),
                float(value.bottom),
            )
        except (AttributeError, KeyError, TypeError, ValueError):
            return None


class GradientLike(Protocol):
    """Gradient object produced by a drawing surface."""

    def add_color_stop(self, offset: float, color: str) -> None:
        """Add a color stop at ``offset`` in ``[0, 1]``."""


class GradientCanvas(Protocol):
    """Drawing surface able to create linear gradients."""

    def create_linear_gradient(
        self, x0: float, y0: float, x1: float, y1: float
    ) -> GradientLike:
        """Return a new linear gradient between two points."""


@dataclass(slots=True)
class LinearGradient:
    """Declarative linear gradient used when no drawing surface is supplied."""

    x0: float
    y0: float
    x1: float
    y1: float
    stops: list[ColorStop] = field(default_factory=list)

    def add_color_stop(self, offset: float, color: str) -> None:
        self.stops.append((offset, color))

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-safe representation."""

        return {
            "type": "linear-gradient",
            "x0": self.x0,
            "y0": self.y0,
            "x1": self.x1,
            "y1": self.y1,
            "stops": [[offset, color] for offset, color in self.stops],
        }


class DeclarativeCanvas:
    """Canvas stand-in that produces :class:`LinearGradient` values."""

    def create_linear_gradient(
        self, x0: float, y0: float, x1: float, y1: float
    ) -> LinearGradient:
        return LinearGradient(x0, y0, x1, y1)


@dataclass(slots=True)
class _CacheEntry:
    width: float
    height: float
    line_type: str
    gradient: Any


@dataclass(slots=True)
class GradientCache:
    """Memoised gradients, one per series kind.

    An entry is reused only while the plot width, plot height and line type
    it was built for are unchanged.
    """

    entries: dict[str, _CacheEntry] = field(default_factory=dict)
    created: int = 0

    def is_valid(self, kind: str, width: float, height: float, line_type: str) -> bool:
        """Return ``True`` when the cached gradient for ``kind`` matches the key."""

        entry = self.entries.get(kind)
        return (
            entry is not None
            and entry.width == width
            and entry.height == height
            and entry.line_type == line_type
        )

    def get(
        self,
        kind: str,
        chart_area: ChartArea,
        line_type: str,
        canvas: GradientCanvas | None = None,
    ) -> Any:
        """Return the gradient for ``kind``, creating it on a key change."""

        width = chart_area.width
        height = chart_area.height
        if self.is_valid(kind, width, height, line_type):
            return self.entries[kind].gradient

        surface = canvas if canvas is not None else DeclarativeCanvas()
        gradient = surface.create_linear_gradient(0, chart_area.bottom, 0, chart_area.top)
        for offset, color in gradient_stops(kind, line_type):
            gradient.add_color_stop(offset, color)

        self.entries[kind] = _CacheEntry(width, height, line_type, gradient)
        self.created += 1
        _LOGGER.debug(
            "Created %s %s gradient for %sx%s plot area", kind, line_type, width, height
        )
        return gradient


@dataclass(frozen=True, slots=True)
class GradientColor:
    """Color resolved by the renderer once the plot area is known.

    Called with the plot area (and optionally the canvas that should create
    the gradient); before the first layout it yields ``fallback``.
    """

    cache: GradientCache = field(compare=False, repr=False)
    kind: str
    line_type: str
    fallback: str

    def __call__(
        self, chart_area: Any = None, canvas: GradientCanvas | None = None
    ) -> Any:
        area = ChartArea.coerce(chart_area)
        if area is None:
            return self.fallback
        return self.cache.get(self.kind, area, self.line_type, canvas)

    def describe(self) -> dict[str, Any]:
        """Return a JSON-safe description for renderers in another process."""

        return {
            "type": "gradient",
            "kind": self.kind,
            "line_type": self.line_type,
            "direction": "bottom-to-top",
            "stops": [[offset, color] for offset, color in gradient_stops(self.kind, self.line_type)],
            "fallback": self.fallback,
        }
