"""Local system sources (child processes).

Each module wraps one OS tool and receives a ``CommandRunner`` so tests never
spawn real processes.
"""

from adapters.system_sources.apple_contacts import AppleContacts
from adapters.system_sources.wifi import WifiInspector

__all__ = [
	"AppleContacts",
	"WifiInspector",
]
