"""Todo-list API payloads (the endpoints are not implemented yet)."""

from .models import CreateEntryData, UpdateEntryData

__all__ = ["CreateEntryData", "UpdateEntryData"]
