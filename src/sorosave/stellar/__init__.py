"""Stellar/Soroban integration components."""

from sorosave.stellar.client import SoroSaveClient
from sorosave.stellar.encoder import CONTRACT_METHODS, ArgType, ContractCall, encode_call
from sorosave.stellar.pipeline import Terminal, TransactionPipeline

__all__ = [
    "SoroSaveClient",
    "CONTRACT_METHODS", "ArgType", "ContractCall", "encode_call",
    "Terminal", "TransactionPipeline",
]
