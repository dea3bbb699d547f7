from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests
from pydantic import SecretStr

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """
    Any failure talking to a remote classifier: network error, non-2xx status
    or a body that is not the expected JSON shape.
    """

    def __init__(self, message: str, endpoint_id: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.endpoint_id = endpoint_id
        self.status_code = status_code


@dataclass(frozen=True)
class ClassifierConfig:
    base_url: str
    api_token: SecretStr
    timeout_sec: float
    user_agent: str


class ClassifierClient:
    """
    Thin client for hosted text-classification models:
    - POST {"inputs": text} with a bearer token
    - Timeout
    - Single attempt per call, no retries
    - Every failure is raised as TransportError

    Each call opens and closes its own session, so no cookies or pooled
    connections carry over between calls or threads. The token is held as a
    SecretStr and only revealed when building the request header.
    """

    def __init__(
            self,
            config: ClassifierConfig,
            session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self._cfg = config
        self._session_factory = session_factory

    def endpoint_url(self, endpoint_id: str) -> str:
        return f"{self._cfg.base_url.rstrip('/')}/{endpoint_id}"

    def classify(self, endpoint_id: str, text: str) -> Any:
        """
        Send text to a classification model and return the decoded JSON body.

        Text is sent as-is, including empty strings.

        Raises:
            TransportError: network error, non-2xx response or non-JSON body
        """
        url = self.endpoint_url(endpoint_id)
        headers = {
            "User-Agent": self._cfg.user_agent,
            "Accept": "application/json",
            "Authorization": f"Bearer {self._cfg.api_token.get_secret_value()}",
        }

        with self._session_factory() as session:
            resp = self._post(session, url, endpoint_id, text, headers)
            return self._decode(resp, endpoint_id)

    def _post(
            self,
            session: requests.Session,
            url: str,
            endpoint_id: str,
            text: str,
            headers: dict[str, str],
    ) -> requests.Response:
        try:
            return session.post(
                url,
                json={"inputs": text},
                headers=headers,
                timeout=self._cfg.timeout_sec,
            )
        except requests.RequestException as e:
            logger.error("Classifier request failed: endpoint=%s err=%s", endpoint_id, e)
            raise TransportError(f"Request failed: {e}", endpoint_id) from e

    def _decode(self, resp: requests.Response, endpoint_id: str) -> Any:
        if not 200 <= resp.status_code < 300:
            logger.error(
                "Classifier returned error status: endpoint=%s status=%s",
                endpoint_id,
                resp.status_code,
            )
            raise TransportError(
                f"Unexpected status: status={resp.status_code} endpoint={endpoint_id}",
                endpoint_id,
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error("Classifier returned non-JSON body: endpoint=%s", endpoint_id)
            raise TransportError(
                f"Malformed response body from {endpoint_id}",
                endpoint_id,
                status_code=resp.status_code,
            ) from e


def unwrap_batch(raw: Any, endpoint_id: str) -> list[Any]:
    """
    Return the inner list of a batch-of-one response.

    The inference API answers a single input with [[{label, score}, ...]].

    Raises:
        TransportError: if raw is not a non-empty list whose first item is a list
    """
    if not isinstance(raw, list) or not raw or not isinstance(raw[0], list):
        raise TransportError(f"Unexpected response shape from {endpoint_id}", endpoint_id)
    return raw[0]
