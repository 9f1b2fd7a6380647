"""Huobi exchange REST API client."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from huobiapi.config import DEFAULT_HOST, AppConfig
from huobiapi.data.errors import HuobiAPIError, HuobiTransportError
from huobiapi.data.models import Credentials, Failure, parse_envelope
from huobiapi.utils.crypto import (
    SIGNATURE_METHOD,
    SIGNATURE_VERSION,
    build_presign,
    canonicalize,
    get_timestamp,
    percent_encode,
    sign,
)

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def _serialize_payload(payload: Any) -> str:
    if payload is None:
        payload = {}
    elif isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, separators=(",", ":"))


class Client:
    """Sync REST client for Huobi.

    Handles signature v2 authentication and error-envelope detection.
    Responses are returned as raw text; decoding endpoint payloads is up
    to the caller. The client holds only immutable credentials and a
    thread-safe ``httpx.Client``, so one instance can be shared between
    threads.
    """

    def __init__(
        self,
        api_key: str = "",
        secret_key: str = "",
        *,
        host: str = DEFAULT_HOST,
        timeout: float = 30.0,
        user_agent: str = "huobiapi-python",
        http_client: httpx.Client | None = None,
    ):
        self._credentials = Credentials(api_key=api_key, secret_key=secret_key)
        self.host = host
        self.user_agent = user_agent
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: AppConfig, http_client: httpx.Client | None = None) -> Client:
        hc = config.huobi
        return cls(
            hc.api_key,
            hc.secret_key,
            host=hc.host,
            timeout=hc.timeout,
            user_agent=hc.user_agent,
            http_client=http_client,
        )

    @property
    def api_key(self) -> str:
        return self._credentials.api_key

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self) -> str:
        return f"Client(host={self.host!r}, api_key={self._credentials.masked_key!r})"

    # ── Request construction ──────────────────────────────────────────

    def _auth_params(self, params: Mapping[str, Any] | None) -> dict[str, Any]:
        """Caller params plus the four auth params (auth params win)."""
        signed: dict[str, Any] = dict(params or {})
        signed["AccessKeyId"] = self._credentials.api_key
        signed["SignatureMethod"] = SIGNATURE_METHOD
        signed["SignatureVersion"] = SIGNATURE_VERSION
        signed["Timestamp"] = get_timestamp()
        return signed

    def _loggable(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return {**params, "AccessKeyId": self._credentials.masked_key}

    def build_url(self, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        """Unsigned request target. No '?' when there are no params."""
        query = canonicalize(params or {})
        base = f"https://{self.host}{endpoint}"
        return f"{base}?{query}" if query else base

    def build_signed_url(
        self, method: str, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> str:
        """Signed request target for ``method`` (GET or POST).

        The signature covers the canonical query only; it is appended
        afterwards as ``&Signature=...``.
        """
        signed = self._auth_params(params)
        logger.debug(f"[Huobi] {method} {endpoint} params: {self._loggable(signed)}")

        query = canonicalize(signed)
        presign = build_presign(method, self.host, endpoint, query)
        signature = sign(self._credentials.secret_key.get_secret_value(), presign)
        logger.debug(f"[Huobi] {method} {endpoint} signature: {signature}")

        return f"https://{self.host}{endpoint}?{query}&Signature={percent_encode(signature)}"

    def _headers(self, post: bool) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if post:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            headers["Accept"] = JSON_CONTENT_TYPE
        else:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        return headers

    # ── Public endpoints ──────────────────────────────────────────────

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        """Unsigned GET, e.g. ``/market/detail/merged``."""
        url = self.build_url(endpoint, params)
        return self._send("GET", endpoint, url, self._headers(post=False))

    # ── Private endpoints (require auth) ──────────────────────────────

    def get_signed(self, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        """Signed GET, e.g. ``/v1/account/accounts``."""
        url = self.build_signed_url("GET", endpoint, params)
        return self._send("GET", endpoint, url, self._headers(post=False))

    def post_signed(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        payload: Any = None,
    ) -> str:
        """Signed POST with a JSON body, e.g. ``/v1/order/orders/place``.

        Args:
            endpoint: request path
            params: extra query parameters (signed together with auth params)
            payload: dict, list or pydantic model serialized as the JSON body
        """
        url = self.build_signed_url("POST", endpoint, params)
        body = _serialize_payload(payload)
        return self._send("POST", endpoint, url, self._headers(post=True), content=body)

    def _send(
        self,
        method: str,
        endpoint: str,
        url: str,
        headers: dict[str, str],
        content: str | None = None,
    ) -> str:
        try:
            resp = self._client.request(method, url, headers=headers, content=content)
            body = resp.text
        except httpx.HTTPError as exc:
            raise HuobiTransportError(method, endpoint, str(exc) or type(exc).__name__) from exc

        logger.debug(f"[Huobi] {method} {endpoint} response ({resp.status_code}): {body}")

        outcome = parse_envelope(body)
        if isinstance(outcome, Failure):
            logger.warning(f"[Huobi] {method} {endpoint} rejected: [{outcome.code}] {outcome.message}")
            raise HuobiAPIError(outcome.code, outcome.message, outcome.envelope)
        return outcome.body
