from datetime import datetime, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_report.services.report_input import ServiceType, TicketStatus
from ticket_report.storage import (
    Agent, Client, Operator, Plan, Ticket, TicketNotFoundError, TicketPhoto,
    TicketRepository, TicketSupportAgent, Vehicle,
)
from ticket_report.storage.database import (
    create_engine_for, create_session_factory, get_async_url, init_db,
)

T0 = datetime(2024, 3, 10, 14, 0)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_engine_for("sqlite:///:memory:")
    await init_db(engine)
    yield create_session_factory(engine)
    await engine.dispose()


async def _seed(session: AsyncSession, support_count: int = 3) -> int:
    client = Client(name="Transportadora Exemplo", contact_phone="(47) 3433-0000", city="Joinville", state="SC")
    main = Agent(name="Carlos Souza", is_armed=True)
    plan = Plan(name="Plano Ouro")
    operator = Operator(name="Marina Lopes")
    vehicle = Vehicle(
        description="Scania R450",
        tractor_plate="ABC1D23",
        tractor_brand="Scania",
        tractor_model="R450",
        trailer1_plate="DEF4G56",
        trailer1_body_type="bau",
        trailer2_plate="GHI7J89",
        trailer2_body_type="sider",
    )
    session.add_all([client, main, plan, operator, vehicle])
    await session.flush()

    ticket = Ticket(
        code="CH-001",
        service_type="alarme",
        status="finalizado",
        city="Joinville",
        state="SC",
        coordinates_lat=-26.3,
        coordinates_lng=-48.84,
        start_datetime=T0,
        end_datetime=T0 + timedelta(hours=2),
        km_start=Decimal(100),
        km_end=Decimal(180),
        toll_cost=Decimal("12.50"),
        detailed_report="Tudo em ordem.",
        client_id=client.id,
        main_agent_id=main.id,
        vehicle_id=vehicle.id,
        plan_id=plan.id,
        operator_id=operator.id,
    )
    session.add(ticket)
    await session.flush()

    for i in range(support_count):
        agent = Agent(name=f"Apoio {i}", is_armed=bool(i % 2))
        session.add(agent)
        await session.flush()
        session.add(TicketSupportAgent(
            ticket_id=ticket.id,
            agent_id=agent.id,
            arrival=T0 + timedelta(minutes=30),
            km_start=Decimal(0),
            km_end=Decimal(40 + i),
            created_at=T0 + timedelta(minutes=i),
        ))

    session.add_all([
        TicketPhoto(ticket_id=ticket.id, file_url="https://img.test/old.jpg", caption="Antiga",
                    created_at=T0),
        TicketPhoto(ticket_id=ticket.id, file_url="https://img.test/new.jpg", caption="Nova",
                    created_at=T0 + timedelta(hours=1)),
    ])
    await session.commit()
    return ticket.id


@pytest.mark.asyncio
async def test_load_report_input(session_factory):
    async with session_factory() as session:
        ticket_id = await _seed(session)

    async with session_factory() as session:
        data = await TicketRepository(session).load_report_input(ticket_id)

    assert data.code == "CH-001"
    assert data.service_type is ServiceType.ALARM
    assert data.status is TicketStatus.FINISHED
    assert data.client.name == "Transportadora Exemplo"
    assert data.primary_agent.is_armed is True
    assert data.operator_name == "Marina Lopes"
    assert data.plan.name == "Plano Ouro"
    assert data.km_end - data.km_start == Decimal(80)
    assert data.food_cost == 0

    assert [t.plate for t in data.vehicle.trailers] == ["DEF4G56", "GHI7J89"]
    assert data.vehicle.trailers[1].body_type == "sider"

    # first two support rows by creation order
    assert data.support_agent_1.agent.name == "Apoio 0"
    assert data.support_agent_2.agent.name == "Apoio 1"
    assert data.support_agent_2.km_end == Decimal(41)

    # newest photo first
    assert [p.caption for p in data.photos] == ["Nova", "Antiga"]


@pytest.mark.asyncio
async def test_ticket_without_support_agents(session_factory):
    async with session_factory() as session:
        ticket_id = await _seed(session, support_count=0)

    async with session_factory() as session:
        data = await TicketRepository(session).load_report_input(ticket_id)

    assert data.support_agent_1 is None
    assert data.support_agent_2 is None
    assert list(data.support_slots()) == []


@pytest.mark.asyncio
async def test_lookup_by_code(session_factory):
    async with session_factory() as session:
        ticket_id = await _seed(session)

    async with session_factory() as session:
        repo = TicketRepository(session)
        ticket = await repo.get_ticket_by_code("CH-001")
        assert ticket.id == ticket_id
        assert await repo.get_ticket_by_code("CH-404") is None


@pytest.mark.asyncio
async def test_load_report_input_by_code(session_factory):
    async with session_factory() as session:
        await _seed(session)

    async with session_factory() as session:
        repo = TicketRepository(session)
        data = await repo.load_report_input_by_code("CH-001")
        assert data.code == "CH-001"
        assert data.primary_agent.name == "Carlos Souza"
        with pytest.raises(TicketNotFoundError, match="CH-404"):
            await repo.load_report_input_by_code("CH-404")


@pytest.mark.asyncio
async def test_missing_ticket(session_factory):
    async with session_factory() as session:
        with pytest.raises(TicketNotFoundError, match="404"):
            await TicketRepository(session).load_report_input(404)


def test_async_url():
    assert get_async_url("sqlite:///./tickets.db") == "sqlite+aiosqlite:///./tickets.db"
    assert get_async_url("mysql://u:p@db/x") == "mysql+aiomysql://u:p@db/x"
    assert get_async_url("mysql+pymysql://u:p@db/x") == "mysql+aiomysql://u:p@db/x"
    assert get_async_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"
