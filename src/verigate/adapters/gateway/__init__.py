"""Gateway adapter – sessions and webhooks facade over the HTTP transport."""
from verigate.adapters.gateway.client import GatewayClient, SessionsResource, WebhooksResource

__all__ = ["GatewayClient", "SessionsResource", "WebhooksResource"]
