"""Webhook path parsing and log redaction.

The three path ids of a Teams webhook URL are credentials; outside
DEBUG/trace logging they are replaced by a short SHA-256 prefix.
"""

import hashlib
import re

HEALTH_PATH = "/healthz"
WEBHOOK_PATH_RE = re.compile(r"^/webhookb2/([^/]+)/IncomingWebhook/([^/]+)/([^/]+)$")
REDACTED_ID_LENGTH = 7


def match_webhook_path(path: str) -> tuple[str, str, str] | None:
    """Return (id1, id2, id3) when path is /webhookb2/{id1}/IncomingWebhook/{id2}/{id3}."""
    m = WEBHOOK_PATH_RE.match(path.split("?", 1)[0])
    if not m:
        return None
    return m.group(1), m.group(2), m.group(3)


def hash_id(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:REDACTED_ID_LENGTH]


def webhook_path(id1: str, id2: str, id3: str) -> str:
    return f"/webhookb2/{id1}/IncomingWebhook/{id2}/{id3}"


def redact_webhook_path(path_ids: tuple[str, str, str]) -> str:
    """Webhook path with each id replaced by the first 7 hex chars of its SHA-256."""
    return webhook_path(*(hash_id(i) for i in path_ids))


def loggable_path(path: str, redact: bool) -> str:
    """Path as it may appear in logs; non-webhook paths are returned unchanged."""
    if not redact:
        return path
    ids = match_webhook_path(path)
    if ids is None:
        return path
    return redact_webhook_path(ids)
