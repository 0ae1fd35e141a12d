from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from sqlalchemy import (
    Integer, String, Text, Boolean, DateTime, Float, DECIMAL, ForeignKey, Index
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Client(Base):
    """Customers requesting service"""
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    document: Mapped[Optional[str]] = mapped_column(String(20))
    contact_name: Mapped[Optional[str]] = mapped_column(String(255))
    contact_phone: Mapped[Optional[str]] = mapped_column(String(30))
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(2))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Agent(Base):
    """Field agents (primary or support)"""
    __tablename__ = "agents"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30))
    is_armed: Mapped[Optional[bool]] = mapped_column(Boolean)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Plan(Base):
    __tablename__ = "plans"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Operator(Base):
    """Control-room operators who dispatch tickets"""
    __tablename__ = "operators"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Vehicle(Base):
    """Customer vehicle: tractor plus up to three trailers"""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True)
    client_id: Mapped[Optional[int]] = mapped_column(ForeignKey("clients.id"))
    description: Mapped[str] = mapped_column(String(255), default="")
    tractor_plate: Mapped[Optional[str]] = mapped_column(String(10))
    tractor_brand: Mapped[Optional[str]] = mapped_column(String(50))
    tractor_model: Mapped[Optional[str]] = mapped_column(String(50))
    trailer1_plate: Mapped[Optional[str]] = mapped_column(String(10))
    trailer1_body_type: Mapped[Optional[str]] = mapped_column(String(30))
    trailer2_plate: Mapped[Optional[str]] = mapped_column(String(10))
    trailer2_body_type: Mapped[Optional[str]] = mapped_column(String(30))
    trailer3_plate: Mapped[Optional[str]] = mapped_column(String(10))
    trailer3_body_type: Mapped[Optional[str]] = mapped_column(String(30))


class Ticket(Base):
    """Service tickets (one report per ticket)"""
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[Optional[str]] = mapped_column(String(30), unique=True)
    service_type: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="aberto")
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(2))
    coordinates_lat: Mapped[Optional[float]] = mapped_column(Float)
    coordinates_lng: Mapped[Optional[float]] = mapped_column(Float)
    start_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_datetime: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    km_start: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 1))
    km_end: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 1))
    toll_cost: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2))
    food_cost: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2))
    other_costs: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2))
    summary: Mapped[Optional[str]] = mapped_column(String(500))
    detailed_report: Mapped[Optional[str]] = mapped_column(Text)

    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id"), nullable=False)
    main_agent_id: Mapped[int] = mapped_column(ForeignKey("agents.id"), nullable=False)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    plan_id: Mapped[int] = mapped_column(ForeignKey("plans.id"), nullable=False)
    operator_id: Mapped[Optional[int]] = mapped_column(ForeignKey("operators.id"))

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client: Mapped[Client] = relationship(lazy="raise")
    main_agent: Mapped[Agent] = relationship(lazy="raise")
    vehicle: Mapped[Vehicle] = relationship(lazy="raise")
    plan: Mapped[Plan] = relationship(lazy="raise")
    operator: Mapped[Optional[Operator]] = relationship(lazy="raise")
    support_agents: Mapped[List["TicketSupportAgent"]] = relationship(
        back_populates="ticket", lazy="raise", order_by="TicketSupportAgent.created_at"
    )
    photos: Mapped[List["TicketPhoto"]] = relationship(
        back_populates="ticket", lazy="raise", order_by="TicketPhoto.created_at.desc()"
    )


class TicketSupportAgent(Base):
    """Support agents assigned to a ticket, with their own timing and costs"""
    __tablename__ = "ticket_support_agents"

    id: Mapped[int] = mapped_column(primary_key=True)
    ticket_id: Mapped[int] = mapped_column(ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False)
    agent_id: Mapped[int] = mapped_column(ForeignKey("agents.id"), nullable=False)
    arrival: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    departure: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    km_start: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 1))
    km_end: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 1))
    toll_cost: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), default=0)
    food_cost: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), default=0)
    other_costs: Mapped[Optional[Decimal]] = mapped_column(DECIMAL(10, 2), default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    ticket: Mapped[Ticket] = relationship(back_populates="support_agents", lazy="raise")
    agent: Mapped[Agent] = relationship(lazy="raise")

    __table_args__ = (
        Index('ix_support_ticket', 'ticket_id'),
    )


class TicketPhoto(Base):
    __tablename__ = "ticket_photos"

    id: Mapped[int] = mapped_column(primary_key=True)
    ticket_id: Mapped[int] = mapped_column(ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    ticket: Mapped[Ticket] = relationship(back_populates="photos", lazy="raise")

    __table_args__ = (
        Index('ix_photo_ticket', 'ticket_id'),
    )
