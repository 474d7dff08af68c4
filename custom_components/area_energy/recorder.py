"""Statistics source backed by the Home Assistant recorder."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError

from .statistics import validate_period

_LOGGER = logging.getLogger(__name__)

STATISTIC_TYPES = frozenset({"mean", "state", "sum"})


class RecorderUnavailableError(HomeAssistantError):
    """Raised when the recorder statistics API cannot be used."""


@dataclass(slots=True)
class _RecorderModuleImports:
    """Container for recorder module helper imports."""

    get_instance: Callable[[HomeAssistant], Any] | None
    statistics: Any | None


_RECORDER_IMPORTS: _RecorderModuleImports | None = None


def _resolve_recorder_imports() -> _RecorderModuleImports:
    """Return cached recorder helper imports."""

    global _RECORDER_IMPORTS
    if _RECORDER_IMPORTS is not None:
        return _RECORDER_IMPORTS

    get_instance: Callable[[HomeAssistant], Any] | None = None
    statistics_mod: Any | None = None

    try:
        from homeassistant.components.recorder import (
            get_instance as _get_instance,
            statistics as _statistics_module,
        )
    except (ImportError, AttributeError):  # pragma: no cover - recorder missing
        _LOGGER.debug("Recorder statistics helpers are not importable")
    else:
        get_instance = _get_instance
        statistics_mod = _statistics_module

    _RECORDER_IMPORTS = _RecorderModuleImports(
        get_instance=get_instance,
        statistics=statistics_mod,
    )
    return _RECORDER_IMPORTS


class RecorderStatisticsQuery:
    """Query long-term statistics through the recorder executor."""

    def __init__(
        self,
        hass: HomeAssistant,
        *,
        imports: Callable[[], _RecorderModuleImports] = _resolve_recorder_imports,
    ) -> None:
        self._hass = hass
        self._imports = imports

    def _helper(self) -> tuple[Callable[..., Awaitable[Any]], Callable[..., Any]]:
        imports = self._imports()
        during_period = (
            getattr(imports.statistics, "statistics_during_period", None)
            if imports.statistics is not None
            else None
        )
        if imports.get_instance is None or not callable(during_period):
            raise RecorderUnavailableError("Recorder statistics are unavailable")
        instance = imports.get_instance(self._hass)
        return instance.async_add_executor_job, during_period

    async def __call__(
        self,
        entity_ids: Sequence[str],
        start_time: datetime,
        end_time: datetime,
        period: str,
    ) -> Mapping[str, Sequence[Any]]:
        """Return statistics rows keyed by statistic id."""

        validate_period(period)
        executor, during_period = self._helper()
        result = await executor(
            during_period,
            self._hass,
            start_time,
            end_time,
            set(entity_ids),
            period,
            None,
            set(STATISTIC_TYPES),
        )
        return result or {}
