"""
Request validation domain.

Turns raw query parameters into a typed FetchRequest before any portal call.
"""

from boletim.contexts.validation.request import validate_request_parameters

__all__ = [
    "validate_request_parameters",
]
