"""HTTP Client Utilities."""

from .base_client import BaseAPIClient

__all__ = ["BaseAPIClient"]
