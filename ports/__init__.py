from .repos import TalentSinkPort, TalentsRepoPort
from .source import TalentDetailPort, TalentListPort, TalentSourcePort

__all__ = [
    "TalentSinkPort",
    "TalentsRepoPort",
    "TalentDetailPort",
    "TalentListPort",
    "TalentSourcePort",
]
