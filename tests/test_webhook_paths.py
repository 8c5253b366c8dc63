"""Tests for webhook path parsing and log redaction."""

import hashlib

from teams_adaptor.webhook.paths import (
    hash_id,
    loggable_path,
    match_webhook_path,
    redact_webhook_path,
)

PATH = "/webhookb2/uid1@uid2/IncomingWebhook/uid3/uid4"


def _h(value: str) -> str:
    return hashlib.sha256(value.encode()).hexdigest()[:7]


def test_match_webhook_path() -> None:
    assert match_webhook_path(PATH) == ("uid1@uid2", "uid3", "uid4")


def test_match_ignores_query_string() -> None:
    assert match_webhook_path(PATH + "?x=1") == ("uid1@uid2", "uid3", "uid4")


def test_match_rejects_other_paths() -> None:
    assert match_webhook_path("/healthz") is None
    assert match_webhook_path("/webhookb2/a/IncomingWebhook/b") is None
    assert match_webhook_path("/webhookb2/a/IncomingWebhook/b/c/d") is None
    assert match_webhook_path("/webhookb2/a/Other/b/c") is None


def test_hash_id_is_sha256_prefix() -> None:
    assert hash_id("uid3") == _h("uid3")
    assert len(hash_id("uid3")) == 7


def test_redact_webhook_path() -> None:
    redacted = redact_webhook_path(("uid1@uid2", "uid3", "uid4"))
    assert redacted == f"/webhookb2/{_h('uid1@uid2')}/IncomingWebhook/{_h('uid3')}/{_h('uid4')}"
    assert "uid3" not in redacted


def test_loggable_path_redacts_only_when_asked() -> None:
    assert loggable_path(PATH, redact=False) == PATH
    assert loggable_path(PATH, redact=True) == redact_webhook_path(("uid1@uid2", "uid3", "uid4"))


def test_loggable_path_leaves_other_paths() -> None:
    assert loggable_path("/healthz", redact=True) == "/healthz"
