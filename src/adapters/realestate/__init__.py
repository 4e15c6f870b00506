"""Real-estate CRMs (credentials from ``AppSettings``)."""

from adapters.realestate.dotloop import DotloopClient
from adapters.realestate.followupboss import FollowUpBossClient

__all__ = [
	"DotloopClient",
	"FollowUpBossClient",
]
