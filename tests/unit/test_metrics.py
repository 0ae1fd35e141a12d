from datetime import datetime, timedelta, timezone
from decimal import Decimal

from ticket_report.services.metrics import (
    distance_km,
    elapsed_minutes,
    mobilized_agents,
    mobilized_summary,
    participant_costs,
    team_totals,
    total_cost,
)
from ticket_report.services.report_input import Agent, SupportAssignment

from builders import make_report_input

T0 = datetime(2024, 3, 10, 10, 0)


class TestElapsedMinutes:
    def test_whole_minutes(self):
        assert elapsed_minutes(T0, T0 + timedelta(hours=2, minutes=5)) == 125

    def test_truncates_toward_zero(self):
        assert elapsed_minutes(T0, T0 + timedelta(seconds=90)) == 1
        assert elapsed_minutes(T0, T0 - timedelta(seconds=90)) == -1

    def test_negative_is_returned(self):
        assert elapsed_minutes(T0, T0 - timedelta(minutes=30)) == -30

    def test_missing_bound(self):
        assert elapsed_minutes(None, T0) is None
        assert elapsed_minutes(T0, None) is None

    def test_naive_and_aware_mix(self):
        assert elapsed_minutes(T0, T0.replace(tzinfo=timezone.utc)) is None


class TestDistance:
    def test_end_before_start(self):
        assert distance_km(100, 50) is None

    def test_regular(self):
        assert distance_km(100, 150) == Decimal(50)

    def test_missing_start(self):
        assert distance_km(None, 150) is None

    def test_zero_start_counts(self):
        assert distance_km(0, 12) == Decimal(12)

    def test_fractional(self):
        assert distance_km(Decimal("10.5"), Decimal("12")) == Decimal("1.5")


class TestTotalCost:
    def test_missing_components_are_zero(self):
        assert total_cost(None, 10.5, None) == Decimal("10.5")

    def test_all_zero(self):
        assert total_cost(0, 0, 0) == 0

    def test_sum(self):
        assert total_cost(Decimal("12.50"), Decimal("30"), Decimal("7.25")) == Decimal("49.75")


class TestMobilizedSummary:
    def test_mixed(self):
        text = mobilized_summary(
            Agent(name="A", is_armed=True),
            Agent(name="B", is_armed=False),
            Agent(name="C", is_armed=None),
        )
        assert text == "01 agente armado + 02 agentes desarmados"

    def test_only_armed(self):
        assert mobilized_summary(Agent(is_armed=True), Agent(is_armed=True)) == "02 agentes armados"

    def test_single_unarmed(self):
        assert mobilized_summary(Agent(is_armed=False)) == "01 agente desarmado"

    def test_nobody(self):
        assert mobilized_summary(None) == "-"


class TestParticipants:
    def test_primary_only(self):
        rows = participant_costs(make_report_input())
        assert [r.label for r in rows] == ["Principal"]
        assert rows[0].distance == Decimal(80)
        assert rows[0].cost == Decimal("12.50")
        assert rows[0].minutes == 125

    def test_inactive_slot_is_skipped(self):
        data = make_report_input(
            support_agent_1=SupportAssignment(),
            support_agent_2=SupportAssignment(
                agent=Agent(name="Paulo", is_armed=False),
                km_start=Decimal(10),
                km_end=Decimal(40),
                food_cost=Decimal("25.00"),
            ),
        )
        rows = participant_costs(data)
        assert [r.label for r in rows] == ["Principal", "Apoio 2"]
        assert rows[1].name == "Paulo"
        assert rows[1].distance == Decimal(30)

    def test_totals_skip_invalid_distance(self):
        data = make_report_input(
            support_agent_1=SupportAssignment(
                agent=Agent(name="Paulo"),
                km_start=Decimal(50),
                km_end=Decimal(20),
                toll_cost=Decimal("5"),
            ),
        )
        totals = team_totals(participant_costs(data))
        assert totals.distance == Decimal(80)
        assert totals.cost == Decimal("17.50")

    def test_mobilized_agents_follow_active_slots(self):
        support = Agent(name="Paulo", is_armed=False)
        data = make_report_input(support_agent_2=SupportAssignment(agent=support))
        primary, first, second = mobilized_agents(data)
        assert primary.name == "Carlos Souza"
        assert first is None
        assert second == support

    def test_unassigned_primary_is_not_counted(self):
        data = make_report_input(primary_agent=Agent())
        assert mobilized_agents(data) == (None, None, None)
        assert mobilized_summary(*mobilized_agents(data)) == "-"

    def test_unnamed_agent_with_armed_flag_still_counts(self):
        data = make_report_input(primary_agent=Agent(is_armed=True))
        assert mobilized_summary(*mobilized_agents(data)) == "01 agente armado"
