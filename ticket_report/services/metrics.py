"""Derived values shown in the report.

Pure functions over raw ticket fields. None of them raise on missing or
inconsistent data: they degrade to ``None`` (or a placeholder string) and
the composer turns that into "-".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from ticket_report.services.report_input import Agent, ReportInput

Number = Union[int, float, Decimal]

PLACEHOLDER = "-"


def _dec(value: Optional[Number]) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def elapsed_minutes(start: Optional[datetime], end: Optional[datetime]) -> Optional[int]:
    """Whole minutes from *start* to *end*, truncated toward zero.

    Returns ``None`` if either bound is missing. A negative result is
    returned as-is; rendering code decides how to show it.
    """
    if start is None or end is None:
        return None
    try:
        return int((end - start).total_seconds() / 60)
    except TypeError:
        # naive vs aware datetimes
        return None


def distance_km(start: Optional[Number], end: Optional[Number]) -> Optional[Decimal]:
    """``end - start`` when both are present and ``end >= start``, else None."""
    s, e = _dec(start), _dec(end)
    if s is None or e is None or e < s:
        return None
    return e - s


def total_cost(
    toll: Optional[Number], food: Optional[Number], other: Optional[Number]
) -> Decimal:
    """Sum of cost components; missing components count as zero."""
    return sum((_dec(v) or Decimal(0) for v in (toll, food, other)), Decimal(0))


def _agents_phrase(count: int, adjective: str) -> str:
    plural = "s" if count > 1 else ""
    return f"{count:02d} agente{plural} {adjective}{plural}"


def mobilized_summary(
    primary: Optional[Agent],
    support1: Optional[Agent] = None,
    support2: Optional[Agent] = None,
) -> str:
    """
    Count armed vs unarmed agents, e.g. ``"01 agente armado + 02 agentes desarmados"``.

    Agents with ``is_armed=None`` count as unarmed. Returns "-" when no
    agent is present at all.
    """
    armed = unarmed = 0
    for agent in (primary, support1, support2):
        if agent is None:
            continue
        if agent.is_armed:
            armed += 1
        else:
            unarmed += 1

    parts = []
    if armed:
        parts.append(_agents_phrase(armed, "armado"))
    if unarmed:
        parts.append(_agents_phrase(unarmed, "desarmado"))
    return " + ".join(parts) if parts else PLACEHOLDER


@dataclass(frozen=True)
class ParticipantCosts:
    """One row of the mobilized team table."""

    label: str
    name: str
    arrival: Optional[datetime]
    departure: Optional[datetime]
    minutes: Optional[int]
    distance: Optional[Decimal]
    cost: Decimal


@dataclass(frozen=True)
class TeamTotals:
    distance: Decimal
    cost: Decimal


def participant_costs(data: ReportInput) -> list[ParticipantCosts]:
    """Primary agent (ticket-level fields) followed by each active support slot."""
    rows = [
        ParticipantCosts(
            label="Principal",
            name=data.primary_agent.name,
            arrival=data.start_datetime,
            departure=data.end_datetime,
            minutes=elapsed_minutes(data.start_datetime, data.end_datetime),
            distance=distance_km(data.km_start, data.km_end),
            cost=total_cost(data.toll_cost, data.food_cost, data.other_costs),
        )
    ]
    for number, slot in data.support_slots():
        rows.append(
            ParticipantCosts(
                label=f"Apoio {number}",
                name=slot.agent.name if slot.agent else "",
                arrival=slot.arrival,
                departure=slot.departure,
                minutes=elapsed_minutes(slot.arrival, slot.departure),
                distance=distance_km(slot.km_start, slot.km_end),
                cost=total_cost(slot.toll_cost, slot.food_cost, slot.other_costs),
            )
        )
    return rows


def team_totals(rows: list[ParticipantCosts]) -> TeamTotals:
    """Sum distances (skipping unrenderable ones) and costs across the team."""
    distance = sum((r.distance for r in rows if r.distance is not None), Decimal(0))
    cost = sum((r.cost for r in rows), Decimal(0))
    return TeamTotals(distance=distance, cost=cost)


def _present(agent: Optional[Agent]) -> Optional[Agent]:
    # An empty Agent() is the "nobody assigned" default
    if agent is None or (not agent.name.strip() and agent.is_armed is None):
        return None
    return agent


def mobilized_agents(data: ReportInput) -> tuple[Optional[Agent], Optional[Agent], Optional[Agent]]:
    """Agents counted in the "Efetivo" line: primary plus assigned support agents."""
    support = {number: slot.agent for number, slot in data.support_slots()}
    return _present(data.primary_agent), _present(support.get(1)), _present(support.get(2))
