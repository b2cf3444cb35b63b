# clonedetect/config.py
import os

# Reference list of legitimate domains (CSV with an "original_url" column, or one per line)
REFERENCE_DOMAINS_PATH = os.getenv("CLONEDETECT_DOMAINS", "data/urls.csv")

# Scores strictly above this are clone candidates and get a WHOIS lookup
SIMILARITY_THRESHOLD = float(os.getenv("CLONEDETECT_THRESHOLD", "80.0"))

# WHOIS lookups
WHOIS_TIMEOUT = float(os.getenv("CLONEDETECT_WHOIS_TIMEOUT", "3.0"))   # seconds, must be finite
WHOIS_MAX_WORKERS = int(os.getenv("CLONEDETECT_WHOIS_WORKERS", "8"))
WHOIS_CACHE_TTL = float(os.getenv("CLONEDETECT_WHOIS_TTL", "0"))       # 0 = keep for process lifetime

# Flask server
HOST = os.getenv("CLONEDETECT_HOST", "127.0.0.1")
PORT = int(os.getenv("CLONEDETECT_PORT", "5000"))

# Fixed response messages
MSG_URL_REQUIRED = "❌ URL is required."
MSG_INVALID_URL = "❌ Invalid URL format."
MSG_INTERNAL_ERROR = "❌ Internal Server Error"
MSG_WHOIS_SKIPPED_VERIFIED = "WHOIS lookup skipped for verified domains."
MSG_WHOIS_SKIPPED_LOW = "WHOIS lookup skipped due to low similarity."
MSG_WHOIS_EMPTY = "No WHOIS data found."
MSG_WHOIS_FAILED = "WHOIS lookup failed."
MSG_WHOIS_UNAVAILABLE = "WHOIS data unavailable."
