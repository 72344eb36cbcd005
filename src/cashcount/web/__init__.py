"""HTTP interface for cashcount."""

from cashcount.web.app import create_app, create_asgi_app

__all__ = ["create_app", "create_asgi_app"]
