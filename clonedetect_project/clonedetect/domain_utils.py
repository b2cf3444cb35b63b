# clonedetect/domain_utils.py
import ipaddress
import logging
import os
import re
from urllib.parse import urlparse

import pandas as pd

from clonedetect.models import ReferenceSet

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_HOSTNAME_RE = re.compile(r"^[a-z0-9_-]+(\.[a-z0-9_-]+)*\.?$")


class NormalizationError(ValueError):
    pass


def normalize(u: str) -> str:
    """Reduce a URL (or bare domain) to its lowercase hostname without ``www.``.

    A missing scheme is repaired with ``https://`` before parsing. Only the
    hostname survives; path, query, port and credentials are dropped.
    Raises NormalizationError when no valid hostname can be extracted.
    """
    if not isinstance(u, str) or not u.strip():
        raise NormalizationError("empty URL")
    raw = u.strip()
    if not _SCHEME_RE.match(raw):
        raw = "https://" + raw

    try:
        hostname = urlparse(raw).hostname
    except ValueError as e:
        raise NormalizationError(f"cannot parse {u!r}: {e}") from e
    if not hostname:
        raise NormalizationError(f"no hostname in {u!r}")

    if ":" in hostname:
        # bracketed IPv6 literal
        try:
            return ipaddress.IPv6Address(hostname).compressed
        except ValueError as e:
            raise NormalizationError(f"bad IPv6 host in {u!r}") from e

    try:
        hostname = hostname.encode("idna").decode("ascii").lower()
    except UnicodeError as e:
        raise NormalizationError(f"bad hostname in {u!r}: {e}") from e
    if not _HOSTNAME_RE.match(hostname):
        raise NormalizationError(f"bad hostname in {u!r}")

    if hostname.startswith("www."):
        hostname = hostname[4:]
    if not hostname:
        raise NormalizationError(f"no hostname in {u!r}")
    logger.debug("Normalized %r -> %s", u, hostname)
    return hostname


def _read_csv_domains(path):
    df = pd.read_csv(path, dtype=str)
    if "original_url" not in df.columns:
        raise SystemExit(f"❌ CSV must contain an 'original_url' column: {path}")
    return df["original_url"].dropna().str.strip().tolist()


def _read_line_domains(path):
    with open(path, "r", encoding="utf-8") as f:
        return [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith("#")]


def load_reference_domains(path: str | None) -> ReferenceSet:
    """Build the reference set from a CSV ("original_url" column) or a plain list."""
    if not path:
        return ReferenceSet()
    if not os.path.exists(path):
        raise SystemExit(f"❌ Reference domain file not found: {path}")

    if path.lower().endswith(".csv"):
        items = _read_csv_domains(path)
    else:
        items = _read_line_domains(path)

    domains = set()
    for item in items:
        try:
            domains.add(normalize(item))
        except NormalizationError:
            logger.warning("Skipping invalid reference entry %r", item)
    logger.debug("Loaded %d reference domains from %s", len(domains), path)
    return ReferenceSet(domains)
