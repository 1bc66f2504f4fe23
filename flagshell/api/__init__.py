"""REST collaborator for remote feature-flag resources."""

from .client import FlagApiClient

__all__ = ["FlagApiClient"]
