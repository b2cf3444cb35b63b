# clonedetect/whois_cache.py
import logging
import math
import threading
import time
from concurrent.futures import CancelledError, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import whois

from clonedetect.config import (
    WHOIS_TIMEOUT, WHOIS_MAX_WORKERS, WHOIS_CACHE_TTL,
    MSG_WHOIS_EMPTY, MSG_WHOIS_FAILED, MSG_WHOIS_UNAVAILABLE
)
from clonedetect.models import LookupRecord, LookupStatus

logger = logging.getLogger(__name__)


def whois_lookup(domain: str, timeout: float) -> str:
    """Default provider: raw WHOIS text from python-whois.

    Socket errors and socket timeouts raise instead of coming back as
    "Socket not responding" text, so the cache records them as failures.
    """
    w = whois.whois(domain, timeout=timeout, ignore_socket_errors=False, quiet=True)
    return getattr(w, "text", None) or ""


class _Pending:
    __slots__ = ("future", "deadline")

    def __init__(self, future, deadline):
        self.future = future
        self.deadline = deadline


class LookupCache:
    """Memoizes WHOIS lookups per domain with single-flight de-duplication.

    The first caller for an uncached domain submits the provider call to the
    worker pool; concurrent callers for the same domain wait on that same call.
    Whichever outcome is settled first (result, error or deadline) is stored
    and returned to every caller from then on. With ``ttl`` > 0 stored records
    expire after that many seconds; by default they live as long as the cache.
    """

    def __init__(self, provider=whois_lookup, timeout=WHOIS_TIMEOUT,
                 max_workers=WHOIS_MAX_WORKERS, ttl=WHOIS_CACHE_TTL):
        if not (math.isfinite(timeout) and timeout > 0):
            raise ValueError(f"WHOIS timeout must be a positive finite number, got {timeout!r}")
        self.provider = provider
        self.timeout = timeout
        self.ttl = ttl
        self._records = {}
        self._inflight = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="whois")

    def lookup(self, domain: str) -> LookupRecord:
        with self._lock:
            record = self._cached(domain)
            if record is not None:
                return record
            pending = self._inflight.get(domain)
            started = pending is None
            if started:
                try:
                    future = self._executor.submit(self.provider, domain, self.timeout)
                except RuntimeError:
                    logger.error("WHOIS pool unavailable, cannot look up %s", domain)
                    record = LookupRecord(domain, MSG_WHOIS_UNAVAILABLE, LookupStatus.UNAVAILABLE)
                    self._records[domain] = (record, time.monotonic())
                    return record
                pending = _Pending(future, time.monotonic() + self.timeout)
                self._inflight[domain] = pending

        if started:
            logger.info("WHOIS lookup started for %s", domain)
            # settles the record even if every waiting caller has gone away
            pending.future.add_done_callback(lambda f: self._on_done(domain, pending, f))

        try:
            pending.future.exception(timeout=max(pending.deadline - time.monotonic(), 0))
        except FutureTimeoutError:
            logger.warning("❌ WHOIS lookup timed out for %s after %.1fs", domain, self.timeout)
            record = LookupRecord(domain, MSG_WHOIS_FAILED, LookupStatus.FAILED)
        except CancelledError:
            record = LookupRecord(domain, MSG_WHOIS_UNAVAILABLE, LookupStatus.UNAVAILABLE)
        else:
            record = self._outcome(domain, pending.future)
        return self._settle(domain, pending, record)

    def clear(self):
        with self._lock:
            self._records.clear()

    def shutdown(self, wait=False):
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def __len__(self):
        with self._lock:
            return len(self._records)

    def _cached(self, domain):
        # caller holds the lock
        entry = self._records.get(domain)
        if entry is None:
            return None
        record, stored_at = entry
        if self.ttl and time.monotonic() - stored_at >= self.ttl:
            del self._records[domain]
            return None
        return record

    def _outcome(self, domain, future):
        if future.cancelled():
            return LookupRecord(domain, MSG_WHOIS_UNAVAILABLE, LookupStatus.UNAVAILABLE)
        error = future.exception()
        if error is not None:
            logger.warning("❌ WHOIS lookup failed for %s: %s", domain, error)
            return LookupRecord(domain, MSG_WHOIS_FAILED, LookupStatus.FAILED)
        data = future.result()
        return LookupRecord(domain, str(data) if data else MSG_WHOIS_EMPTY, LookupStatus.SUCCESS)

    def _on_done(self, domain, pending, future):
        with self._lock:
            if self._inflight.get(domain) is not pending:
                return
        self._settle(domain, pending, self._outcome(domain, future))

    def _settle(self, domain, pending, record):
        with self._lock:
            if self._inflight.get(domain) is pending:
                del self._inflight[domain]
                self._records[domain] = (record, time.monotonic())
                return record
            stored = self._cached(domain)
        return stored if stored is not None else record
