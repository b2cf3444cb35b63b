# clonedetect/models.py
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class ReferenceSet:
    """Read-only set of normalized legitimate domains.

    Membership checks go through a frozenset; iteration is in lexical order so
    that tie-breaks between equally similar domains are reproducible.
    """

    def __init__(self, domains: Iterable[str] = ()):
        self._members = frozenset(domains)
        self._ordered = tuple(sorted(self._members))

    def __contains__(self, domain):
        return domain in self._members

    def __iter__(self):
        return iter(self._ordered)

    def __len__(self):
        return len(self._ordered)

    def __repr__(self):
        return f"ReferenceSet({len(self)} domains)"


@dataclass(frozen=True)
class MatchResult:
    suspect_domain: str
    best_match: Optional[str]
    score: float
    exact: bool = False


class LookupStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class LookupRecord:
    domain: str
    data: str
    status: LookupStatus


@dataclass(frozen=True)
class Verdict:
    suspect_url: str
    extracted_domain: str
    best_match_domain: Optional[str]
    score: float
    is_clone: bool
    registration_info: str
    verified: bool = False

    @property
    def matching_accuracy(self) -> str:
        if self.verified:
            return "100%"
        return f"{self.score:.2f}%"

    def to_dict(self):
        # keys follow the /check-clone response format
        return {
            "suspect_url": self.suspect_url,
            "extracted_domain": self.extracted_domain,
            "best_match_domain": self.best_match_domain,
            "matching_accuracy": self.matching_accuracy,
            "isClone": self.is_clone,
            "whoisData": self.registration_info,
        }
