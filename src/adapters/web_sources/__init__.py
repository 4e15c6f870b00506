"""Public web APIs (no credentials)."""

from adapters.web_sources.mymemory import MyMemoryClient
from adapters.web_sources.timeapi import TimeApiClient

__all__ = [
	"MyMemoryClient",
	"TimeApiClient",
]
