"""Gateway RPC client."""

from cronlens.gateway.client import GatewayClient, GatewayError

__all__ = ["GatewayClient", "GatewayError"]
