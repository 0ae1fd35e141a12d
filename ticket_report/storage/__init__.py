from .database import init_db, get_db, AsyncSessionLocal, create_engine_for, create_session_factory
from .models import (
    Base, Client, Agent, Plan, Operator, Vehicle, Ticket, TicketSupportAgent, TicketPhoto
)
from .repository import TicketRepository, TicketNotFoundError

__all__ = [
    "init_db", "get_db", "AsyncSessionLocal", "create_engine_for", "create_session_factory",
    "Base", "Client", "Agent", "Plan", "Operator", "Vehicle", "Ticket",
    "TicketSupportAgent", "TicketPhoto",
    "TicketRepository", "TicketNotFoundError",
]
