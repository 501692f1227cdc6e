"""Chain flavours and the shared composition core."""

from .base import BaseChain, Constructor
from .bridge import BridgeChain, ToContextConstructor, bind_context
from .contextual import ContextChain, ContextConstructor
from .handler import Chain, Endware, EndwareHandler
from .transport import TransportChain

__all__ = [
    "BaseChain",
    "BridgeChain",
    "Chain",
    "Constructor",
    "ContextChain",
    "ContextConstructor",
    "Endware",
    "EndwareHandler",
    "ToContextConstructor",
    "TransportChain",
    "bind_context",
]
