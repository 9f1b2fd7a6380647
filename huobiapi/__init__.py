"""Signed REST client for the Huobi exchange."""

from huobiapi.data.errors import HuobiAPIError, HuobiDecodeError, HuobiError, HuobiTransportError
from huobiapi.data.huobi_client import Client

__all__ = [
    "Client",
    "HuobiAPIError",
    "HuobiDecodeError",
    "HuobiError",
    "HuobiTransportError",
]

__version__ = "0.1.0"
