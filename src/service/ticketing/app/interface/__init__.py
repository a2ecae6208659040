"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_bank_registry import IBankRegistry
from src.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.app.interface.i_verification_code_generator import (
    IVerificationCodeGenerator,
)

__all__ = [
    'IBankRegistry',
    'IQrCodeRenderer',
    'ITicketingBackend',
    'IVerificationCodeGenerator',
]
