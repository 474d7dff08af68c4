"""Human readable power and energy values."""

from __future__ import annotations

from collections.abc import Mapping

from .domain.models import EntityState
from .util import float_or_none


def format_number(value: float) -> str:
    """Format ``value`` with thousands grouping and at most two decimals."""

    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_power(watts: float) -> str:
    """Return ``watts`` in W, or in kW from 1000 W upwards."""

    if watts >= 1000:
        return f"{format_number(watts / 1000)} kW"
    return f"{format_number(watts)} W"


def format_energy(kwh: float) -> str:
    """Return ``kwh`` in kWh, or in MWh from 1000 kWh upwards."""

    if kwh >= 1000:
        return f"{format_number(kwh / 1000)} MWh"
    return f"{format_number(kwh)} kWh"


def entity_state_value(
    states: Mapping[str, EntityState], entity_id: str
) -> float | None:
    """Return the numeric live state of ``entity_id`` if it has one."""

    state = states.get(entity_id)
    if state is None:
        return None
    return float_or_none(state.state)
