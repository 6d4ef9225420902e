"""Protocol interfaces for SoroSave components."""

from sorosave.interfaces.ledger import LedgerServer
from sorosave.interfaces.messenger import ChatMessenger

__all__ = ["LedgerServer", "ChatMessenger"]
