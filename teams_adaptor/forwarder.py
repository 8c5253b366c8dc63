"""Forward notifications to a Teams incoming webhook."""

import logging
from typing import Sequence

import requests

from teams_adaptor.errors import DownstreamHTTPError, DownstreamNetworkError

LOG = logging.getLogger("teams_adaptor.forwarder")


def build_webhook_url(hostname: str, path_ids: Sequence[str]) -> str:
    """Teams webhook URL for the three ids taken from the inbound path."""
    id1, id2, id3 = path_ids
    return f"http://{hostname}/webhookb2/{id1}/IncomingWebhook/{id2}/{id3}"


class TeamsForwarder:
    """Single-attempt POST of notification JSON to the configured Teams host."""

    def __init__(self, hostname: str, timeout: float | None = None) -> None:
        self._hostname = hostname
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Content-Type"] = "application/json"

    @property
    def hostname(self) -> str:
        return self._hostname

    def forward(self, path_ids: Sequence[str], body: bytes, request_id: str) -> int:
        """POST body to Teams and return the status code (redirects not followed).

        Raises DownstreamHTTPError when Teams answers >= 400 and
        DownstreamNetworkError when no response was received. No retries.
        """
        url = build_webhook_url(self._hostname, path_ids)
        try:
            resp = self._session.request(
                "POST",
                url,
                data=body,
                headers={"X-Request-Id": request_id},
                timeout=self._timeout,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            # str(e) carries the URL, whose path ids are credentials
            raise DownstreamNetworkError(f"Teams request {request_id} failed: {type(e).__name__}") from e
        LOG.debug("Notification response body: %s", resp.text)
        if resp.status_code >= 400:
            raise DownstreamHTTPError(resp.status_code, resp.text or resp.reason or "")
        return resp.status_code

    def close(self) -> None:
        self._session.close()
