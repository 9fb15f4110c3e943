"""HTTP API for messledger."""

from messledger.api.app import create_app

__all__ = ["create_app"]
