"""HTTP surface of the paging engine."""

from chainpage.api.server import create_app

__all__ = ["create_app"]
