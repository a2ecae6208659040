"""
Wire Modules Configuration

Modules whose `Provide[...]` markers need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticketing.app.command import (
    issue_verification_token_use_case,
    list_ticket_for_resale_use_case,
    purchase_ticket_use_case,
    verify_ticket_use_case,
)
from src.service.ticketing.app.query import (
    get_resale_quote_use_case,
    list_resale_listings_use_case,
    summarize_my_tickets_use_case,
)
from src.service.ticketing.driving_adapter.http_controller import ticket_controller
from src.service.ticketing.driving_adapter.http_controller.auth import current_user


WIRE_MODULES: list[ModuleType] = [
    list_ticket_for_resale_use_case,
    purchase_ticket_use_case,
    issue_verification_token_use_case,
    verify_ticket_use_case,
    get_resale_quote_use_case,
    list_resale_listings_use_case,
    summarize_my_tickets_use_case,
    ticket_controller,
    current_user,
]
