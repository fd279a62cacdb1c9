"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerSessionPort, LedgerUnitOfWorkPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerSessionPort",
    "LedgerUnitOfWorkPort",
]
