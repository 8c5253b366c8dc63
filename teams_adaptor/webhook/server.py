"""Webhook HTTP servers.

Main listener: GET /healthz and
POST /webhookb2/{id1}/IncomingWebhook/{id2}/{id3}, which transforms the
Bitbucket event and forwards it to the same path on the Teams host.
Health listener: GET /healthz only, on a separate port.
"""

import json
import logging
import threading
import time
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from teams_adaptor.config import AppConfig
from teams_adaptor.errors import DecodeError, DownstreamHTTPError, DownstreamNetworkError
from teams_adaptor.forwarder import TeamsForwarder
from teams_adaptor.transform import transform
from teams_adaptor.webhook.paths import HEALTH_PATH, loggable_path, match_webhook_path

LOG = logging.getLogger("teams_adaptor.webhook")
ACCESS_LOG = logging.getLogger("teams_adaptor.access")

REQUEST_ID_HEADER = "X-Request-Id"
GATEWAY_TIMEOUT = 504


class HealthHandler(BaseHTTPRequestHandler):
    """Answer GET /healthz with 204; everything else is 404."""

    def do_GET(self) -> None:
        if self.path == HEALTH_PATH:
            self.send_response(204)
            self.end_headers()
            return
        self.send_response(404)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


class WebhookHandler(BaseHTTPRequestHandler):
    """Handle GET /healthz and POST /webhookb2/.../IncomingWebhook/.../..."""

    config: AppConfig
    forwarder: TeamsForwarder

    def do_GET(self) -> None:
        self._begin()
        if self.path == HEALTH_PATH:
            self._send(204)
            return
        if match_webhook_path(self.path):
            self._send(405, headers={"Allow": "POST"})
            return
        self._send(404)

    def do_POST(self) -> None:
        self._begin()
        path_ids = match_webhook_path(self.path)
        if path_ids is not None:
            self._handle_webhook(path_ids)
            return
        if self.path == HEALTH_PATH:
            self._send(405, headers={"Allow": "GET"})
            return
        self._send(404)

    def _begin(self) -> None:
        self._started = time.monotonic()
        self._bytes_received = 0
        self._request_id = self.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        self._bytes_received = len(body)
        return body

    def _handle_webhook(self, path_ids: tuple[str, str, str]) -> None:
        request_id = self._request_id
        try:
            body = self._read_body()
        except ValueError:
            LOG.warning("Request %s: invalid Content-Length header", request_id)
            self._send(400)
            return
        LOG.debug("hook ids: %s, %s, %s ; body: %s", *path_ids, body.decode("utf-8", errors="replace"))

        try:
            notification = transform(body)
        except DecodeError as e:
            LOG.warning("Request %s: %s", request_id, e)
            self._send(400)
            return
        except Exception as e:
            LOG.exception("Request %s: building notification failed: %s", request_id, e)
            self._send(500)
            return
        LOG.debug("Notification body: %s", notification.decode("utf-8"))

        echo = json.dumps({"RequestID": request_id}).encode()
        try:
            code = self.forwarder.forward(path_ids, notification, request_id)
        except DownstreamHTTPError as e:
            LOG.info("Notification sent to Teams, request Id: %s ; result code: %d", request_id, e.status_code)
            LOG.error("Teams API request (%s) failed with HTTP code: %d", request_id, e.status_code)
            self._send(e.status_code)
            return
        except DownstreamNetworkError as e:
            LOG.error("Teams API request (%s) reported errors: %s", request_id, e)
            self._send(GATEWAY_TIMEOUT, echo, "application/json")
            return
        except Exception as e:
            LOG.exception("Teams API request (%s) failed unexpectedly: %s", request_id, e)
            self._send(500)
            return
        LOG.info("Notification sent to Teams, request Id: %s ; result code: %d", request_id, code)
        self._send(200, echo, "application/json")

    def _send(
        self,
        status: int,
        body: bytes = b"",
        content_type: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._log_access(status)
        self.send_response(status)
        self.send_header(REQUEST_ID_HEADER, self._request_id)
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        if content_type:
            self.send_header("Content-Type", content_type)
        # No Content-Length on 204
        if status != 204:
            self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body:
            self.wfile.write(body)

    def _log_access(self, status: int) -> None:
        ip, port = self.client_address[:2]
        latency_ms = (time.monotonic() - self._started) * 1000
        ACCESS_LOG.info(
            "ACCESS   : [%s]:%s %s %d - %.3fms %d %s %s",
            ip,
            port,
            self._request_id,
            status,
            latency_ms,
            self._bytes_received,
            self.command,
            loggable_path(self.path, self.config.logging.redact_paths),
        )

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def make_webhook_handler(config: AppConfig, forwarder: TeamsForwarder) -> type[WebhookHandler]:
    """Handler class bound to config and forwarder."""
    return type("BoundWebhookHandler", (WebhookHandler,), {"config": config, "forwarder": forwarder})


def create_webhook_server(config: AppConfig, forwarder: TeamsForwarder | None = None) -> ThreadingHTTPServer:
    """Bind the main listener (raises OSError if the port is taken)."""
    if forwarder is None:
        forwarder = TeamsForwarder(config.teams.hostname, timeout=config.teams.timeout)
    handler = make_webhook_handler(config, forwarder)
    return ThreadingHTTPServer((config.server.host, config.server.port), handler)


def create_health_server(config: AppConfig) -> ThreadingHTTPServer:
    """Bind the health-only listener."""
    return ThreadingHTTPServer((config.server.host, config.server.health_port), HealthHandler)


def start_health_thread(server: ThreadingHTTPServer) -> threading.Thread:
    """Serve the health listener in a daemon thread."""
    thread = threading.Thread(target=server.serve_forever, name="healthz", daemon=True)
    thread.start()
    return thread


def run_servers(config: AppConfig) -> None:
    """Run the health listener (if enabled) in background and the main listener in foreground."""
    health = None
    if config.server.health_enabled:
        health = create_health_server(config)
        start_health_thread(health)
        LOG.info("Health listener on %s:%s", config.server.host, config.server.health_port)
    server = create_webhook_server(config)
    LOG.info("Webhook listener on %s:%s", config.server.host, config.server.port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
        if health is not None:
            health.shutdown()
            health.server_close()
