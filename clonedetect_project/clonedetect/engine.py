# clonedetect/engine.py
import logging
from enum import Enum

from clonedetect.config import (
    SIMILARITY_THRESHOLD, MSG_URL_REQUIRED, MSG_INVALID_URL,
    MSG_WHOIS_SKIPPED_VERIFIED, MSG_WHOIS_SKIPPED_LOW
)
from clonedetect.domain_utils import normalize, NormalizationError
from clonedetect.models import ReferenceSet, Verdict
from clonedetect.similarity import match, is_clone
from clonedetect.whois_cache import LookupCache

logger = logging.getLogger(__name__)


class InputErrorReason(Enum):
    MISSING_URL = "missing_url"
    INVALID_FORMAT = "invalid_format"


class InputError(ValueError):
    """Client-side problem with the submitted URL."""

    def __init__(self, reason: InputErrorReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class CloneDetectionEngine:
    """Turns a suspect URL into a Verdict against one reference set.

    The engine owns its LookupCache; pass one in to share or fake it.
    """

    def __init__(self, reference: ReferenceSet, cache: LookupCache | None = None,
                 threshold: float = SIMILARITY_THRESHOLD):
        self.reference = reference
        self.cache = cache if cache is not None else LookupCache()
        self.threshold = threshold

    def detect(self, suspect_url) -> Verdict:
        if suspect_url is None or (isinstance(suspect_url, str) and not suspect_url.strip()):
            raise InputError(InputErrorReason.MISSING_URL, MSG_URL_REQUIRED)
        if not isinstance(suspect_url, str):
            raise InputError(InputErrorReason.INVALID_FORMAT, MSG_INVALID_URL)
        try:
            domain = normalize(suspect_url)
        except NormalizationError as e:
            logger.info("Rejected %r: %s", suspect_url, e)
            raise InputError(InputErrorReason.INVALID_FORMAT, MSG_INVALID_URL) from e

        result = match(domain, self.reference)
        if result.exact:
            logger.info("✅ %s is a verified domain. No clone detected.", domain)
            return Verdict(suspect_url, domain, domain, 100.0, False,
                           MSG_WHOIS_SKIPPED_VERIFIED, verified=True)

        clone = is_clone(result.score, self.threshold)
        if clone:
            whois_data = self.cache.lookup(domain).data
        else:
            whois_data = MSG_WHOIS_SKIPPED_LOW
        logger.info("%s best match %s (%.2f%%) clone=%s",
                    domain, result.best_match, result.score, clone)
        return Verdict(suspect_url, domain, result.best_match, result.score, clone, whois_data)
