"""REST API for classmarket."""

from classmarket.api.app import create_app
from classmarket.api.models import APIResponse

__all__ = [
    "APIResponse",
    "create_app",
]
