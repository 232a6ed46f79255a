"""
Demo Posts API used as the service under test.

Run it standalone with ``python -m demo_api`` or build the ASGI app with
``create_app()``.
"""

from .app import PostRequest, create_app

__all__ = [
    "PostRequest",
    "create_app",
]
