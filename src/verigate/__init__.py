"""
verigate – Server-side SDK for delegated identity / age verification.

Import path convention::

    from verigate.kernel.errors import SignatureVerificationError
    from verigate.application.webhooks import construct_event, verify_signature
    from verigate.application.sessions import SessionPoller, poll
    from verigate.adapters.gateway import GatewayClient
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
