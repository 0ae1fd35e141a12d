from decimal import Decimal

import pytest
from pydantic import ValidationError

from ticket_report.services.report_input import (
    Agent,
    ReportInput,
    ServiceType,
    SupportAssignment,
    Trailer,
    Vehicle,
)

from builders import make_report_input


def test_missing_costs_default_to_zero():
    data = make_report_input(toll_cost=None, food_cost=None, other_costs=None)
    assert (data.toll_cost, data.food_cost, data.other_costs) == (0, 0, 0)


def test_negative_km_is_rejected():
    with pytest.raises(ValidationError):
        make_report_input(km_start=Decimal(-1))


def test_at_most_three_trailers():
    trailers = tuple(Trailer(plate=f"AAA{i}B00") for i in range(4))
    with pytest.raises(ValidationError):
        Vehicle(trailers=trailers)


def test_summary_length_is_bounded():
    with pytest.raises(ValidationError):
        make_report_input(summary="x" * 501)


def test_snapshot_is_frozen(report_input):
    with pytest.raises(ValidationError):
        report_input.code = "CH-999"


def test_support_slots_skip_empty_assignments():
    data = make_report_input(
        support_agent_1=SupportAssignment(),
        support_agent_2=SupportAssignment(toll_cost=Decimal("3.00")),
    )
    assert [number for number, _ in data.support_slots()] == [2]


def test_support_slot_with_agent_is_active():
    slot = SupportAssignment(agent=Agent(name="Paulo"))
    assert slot.is_active
    assert not SupportAssignment(agent=Agent(name="  ")).is_active


def test_json_round_trip_of_plain_values():
    payload = {
        "code": "CH-002",
        "service_type": "preservacao",
        "start_datetime": "2024-03-10T14:00:00-03:00",
        "km_start": "10.5",
        "toll_cost": None,
        "vehicle": {"trailers": [{"plate": "DEF4G56", "body_type": "sider"}]},
        "photos": [{"url": "https://img.test/1.jpg"}],
    }
    data = ReportInput.model_validate(payload)
    assert data.service_type is ServiceType.PRESERVATION
    assert data.km_start == Decimal("10.5")
    assert data.toll_cost == 0
    assert data.vehicle.trailers[0].plate == "DEF4G56"
    assert data.photos[0].caption is None
