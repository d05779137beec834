"""FastAPI adapter – webhook route and error mapping."""
from verigate.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from verigate.adapters.fastapi.webhook_route import DEFAULT_SIGNATURE_HEADER, create_webhook_router

__all__ = ["DEFAULT_SIGNATURE_HEADER", "FastAPIExceptionMapper", "create_webhook_router"]
