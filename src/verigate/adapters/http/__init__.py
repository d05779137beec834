"""HTTP adapter – async gateway transport."""
from verigate.adapters.http.client import HttpClient, HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
