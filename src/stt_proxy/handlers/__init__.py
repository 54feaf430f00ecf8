"""Request handler exports."""

from .proxy_handler import ProxyHandler

__all__ = ["ProxyHandler"]
