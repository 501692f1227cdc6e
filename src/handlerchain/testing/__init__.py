"""Testing helpers for code that builds chains."""

from .mock import Invocation, MockContextHandler, MockHandler, MockTransport, context_tag, header_tag, tag

__all__ = [
    "Invocation",
    "MockContextHandler",
    "MockHandler",
    "MockTransport",
    "context_tag",
    "header_tag",
    "tag",
]
