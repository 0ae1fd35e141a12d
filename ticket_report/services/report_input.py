"""Immutable ticket snapshot consumed by the PDF report generator.

The snapshot is fully resolved upstream (see ``ticket_report.storage``):
the generator never queries the data store while rendering.
"""

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceType(str, enum.Enum):
    ALARM = "alarme"
    INVESTIGATION = "averiguacao"
    PRESERVATION = "preservacao"
    LOGISTICS_ESCORT = "acompanhamento_logistico"


class TicketStatus(str, enum.Enum):
    OPEN = "aberto"
    IN_PROGRESS = "em_andamento"
    FINISHED = "finalizado"
    CANCELLED = "cancelado"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


def _zero_if_missing(value: object) -> object:
    return Decimal(0) if value is None else value


class Client(_Frozen):
    name: str = ""
    contact_phone: Optional[str] = None


class Agent(_Frozen):
    name: str = ""
    is_armed: Optional[bool] = None


class Plan(_Frozen):
    name: str = ""


class Trailer(_Frozen):
    plate: str
    body_type: Optional[str] = None


class Vehicle(_Frozen):
    description: str = ""
    tractor_plate: Optional[str] = None
    tractor_brand: Optional[str] = None
    tractor_model: Optional[str] = None
    trailers: tuple[Trailer, ...] = Field(default=(), max_length=3)


class Photo(_Frozen):
    url: str
    caption: Optional[str] = None


class SupportAssignment(_Frozen):
    """A support agent slot with its own arrival/departure/km/cost record."""

    agent: Optional[Agent] = None
    arrival: Optional[datetime] = None
    departure: Optional[datetime] = None
    km_start: Optional[Decimal] = Field(default=None, ge=0)
    km_end: Optional[Decimal] = Field(default=None, ge=0)
    toll_cost: Decimal = Field(default=Decimal(0), ge=0)
    food_cost: Decimal = Field(default=Decimal(0), ge=0)
    other_costs: Decimal = Field(default=Decimal(0), ge=0)

    @field_validator("toll_cost", "food_cost", "other_costs", mode="before")
    @classmethod
    def costs_default_to_zero(cls, value: object) -> object:
        return _zero_if_missing(value)

    @property
    def is_active(self) -> bool:
        """True when the slot has an agent or any recorded activity."""
        if self.agent is not None and self.agent.name.strip():
            return True
        if self.km_start or self.km_end:
            return True
        if self.arrival is not None or self.departure is not None:
            return True
        return any((self.toll_cost, self.food_cost, self.other_costs))


class ReportInput(_Frozen):
    # identity
    code: Optional[str] = None
    service_type: ServiceType
    status: TicketStatus = TicketStatus.OPEN

    # location
    city: str = ""
    state: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # timing
    start_datetime: datetime
    end_datetime: Optional[datetime] = None

    # distance / cost (primary agent, ticket level)
    km_start: Optional[Decimal] = Field(default=None, ge=0)
    km_end: Optional[Decimal] = Field(default=None, ge=0)
    toll_cost: Decimal = Field(default=Decimal(0), ge=0)
    food_cost: Decimal = Field(default=Decimal(0), ge=0)
    other_costs: Decimal = Field(default=Decimal(0), ge=0)

    # relations
    client: Client = Client()
    primary_agent: Agent = Agent()
    support_agent_1: Optional[SupportAssignment] = None
    support_agent_2: Optional[SupportAssignment] = None
    vehicle: Vehicle = Vehicle()
    plan: Plan = Plan()
    operator_name: Optional[str] = None

    # narrative
    summary: Optional[str] = Field(default=None, max_length=500)
    detailed_report: Optional[str] = Field(default=None, max_length=5000)

    photos: tuple[Photo, ...] = ()

    @field_validator("toll_cost", "food_cost", "other_costs", mode="before")
    @classmethod
    def costs_default_to_zero(cls, value: object) -> object:
        return _zero_if_missing(value)

    def support_slots(self) -> Iterator[tuple[int, SupportAssignment]]:
        """Yield ``(slot_number, assignment)`` for slots worth rendering."""
        for number, slot in ((1, self.support_agent_1), (2, self.support_agent_2)):
            if slot is not None and slot.is_active:
                yield number, slot
