"""
Services Module - provider gateway.
"""
from .gateway import GatewayError, MissingInputError, ProviderGateway

__all__ = [
    "GatewayError",
    "MissingInputError",
    "ProviderGateway",
]
