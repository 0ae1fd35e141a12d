from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from ticket_report.services.report_input import (
    Agent, Client, Photo, Plan, ReportInput, SupportAssignment, Trailer, Vehicle
)
from ticket_report.storage import models
import logging

logger = logging.getLogger(__name__)

# Only two support slots are printed on the report
MAX_SUPPORT_SLOTS = 2


class TicketNotFoundError(LookupError):
    """No ticket with the requested id or code"""
    pass


class TicketRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_ticket(self, ticket_id: int) -> Optional[models.Ticket]:
        result = await self.session.execute(
            select(models.Ticket)
            .where(models.Ticket.id == ticket_id)
            .options(
                selectinload(models.Ticket.client),
                selectinload(models.Ticket.main_agent),
                selectinload(models.Ticket.vehicle),
                selectinload(models.Ticket.plan),
                selectinload(models.Ticket.operator),
                selectinload(models.Ticket.support_agents).selectinload(models.TicketSupportAgent.agent),
                selectinload(models.Ticket.photos),
            )
        )
        return result.scalar_one_or_none()

    async def get_ticket_by_code(self, code: str) -> Optional[models.Ticket]:
        result = await self.session.execute(
            select(models.Ticket.id).where(models.Ticket.code == code)
        )
        ticket_id = result.scalar_one_or_none()
        if ticket_id is None:
            return None
        return await self.get_ticket(ticket_id)

    async def load_report_input_by_code(self, code: str) -> ReportInput:
        """Same as load_report_input, looking the ticket up by its code (e.g. "CH-001")."""
        ticket = await self.get_ticket_by_code(code)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {code} not found")
        return _snapshot(ticket)

    async def load_report_input(self, ticket_id: int) -> ReportInput:
        """
        Resolve a ticket and all its relations into a report snapshot.

        Raises:
            TicketNotFoundError: no ticket with this id.
        """
        ticket = await self.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found")
        return _snapshot(ticket)


def _snapshot(ticket: models.Ticket) -> ReportInput:
    support = [_support_assignment(row) for row in ticket.support_agents[:MAX_SUPPORT_SLOTS]]
    if len(ticket.support_agents) > MAX_SUPPORT_SLOTS:
        logger.warning(
            f"Ticket {ticket.id} has {len(ticket.support_agents)} support agents, "
            f"only the first {MAX_SUPPORT_SLOTS} are reported"
        )
    support += [None] * (MAX_SUPPORT_SLOTS - len(support))

    logger.debug(f"Loaded ticket {ticket.id} ({ticket.code}): {len(ticket.photos)} photos")
    return ReportInput(
        code=ticket.code,
        service_type=ticket.service_type,
        status=ticket.status,
        city=ticket.city or "",
        state=ticket.state or "",
        latitude=ticket.coordinates_lat,
        longitude=ticket.coordinates_lng,
        start_datetime=ticket.start_datetime,
        end_datetime=ticket.end_datetime,
        km_start=ticket.km_start,
        km_end=ticket.km_end,
        toll_cost=ticket.toll_cost,
        food_cost=ticket.food_cost,
        other_costs=ticket.other_costs,
        client=Client(name=ticket.client.name, contact_phone=ticket.client.contact_phone),
        primary_agent=_agent(ticket.main_agent),
        support_agent_1=support[0],
        support_agent_2=support[1],
        vehicle=_vehicle(ticket.vehicle),
        plan=Plan(name=ticket.plan.name),
        operator_name=ticket.operator.name if ticket.operator else None,
        summary=ticket.summary,
        detailed_report=ticket.detailed_report,
        photos=tuple(Photo(url=p.file_url, caption=p.caption) for p in ticket.photos),
    )


def _agent(row: Optional[models.Agent]) -> Optional[Agent]:
    if row is None:
        return None
    return Agent(name=row.name, is_armed=row.is_armed)


def _support_assignment(row: models.TicketSupportAgent) -> SupportAssignment:
    return SupportAssignment(
        agent=_agent(row.agent),
        arrival=row.arrival,
        departure=row.departure,
        km_start=row.km_start,
        km_end=row.km_end,
        toll_cost=row.toll_cost,
        food_cost=row.food_cost,
        other_costs=row.other_costs,
    )


def _vehicle(row: models.Vehicle) -> Vehicle:
    trailers: List[Trailer] = []
    for plate, body_type in (
        (row.trailer1_plate, row.trailer1_body_type),
        (row.trailer2_plate, row.trailer2_body_type),
        (row.trailer3_plate, row.trailer3_body_type),
    ):
        if plate:
            trailers.append(Trailer(plate=plate, body_type=body_type))
    return Vehicle(
        description=row.description or "",
        tractor_plate=row.tractor_plate,
        tractor_brand=row.tractor_brand,
        tractor_model=row.tractor_model,
        trailers=tuple(trailers),
    )
