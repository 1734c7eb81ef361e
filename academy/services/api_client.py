import logging
import os
import re
from typing import Any, Mapping, Optional

import requests
import streamlit as st
from streamlit.runtime.scriptrunner import get_script_run_ctx

from academy.config import API_BASE_URL_ENV, API_PORT, API_TIMEOUT, DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)

_CODESPACES_SUFFIX = ".app.github.dev"
_CODESPACES_PORT_RE = re.compile(r"-\d+\.app\.github\.dev$")


class ApiError(Exception):
    """Raised for any failed backend call; carries the backend's message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} ({self.status_code})"
        return self.message


def resolve_api_base_url(hostname: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Locate the REST backend.
    Order: Codespaces hostname rewrite, ACADEMY_API_BASE_URL, localhost.
    """
    environ = os.environ if environ is None else environ
    host = (hostname or "").split(":")[0].strip()

    if host.endswith(_CODESPACES_SUFFIX):
        codespace_base = _CODESPACES_PORT_RE.sub("", host)
        return f"https://{codespace_base}-{API_PORT}{_CODESPACES_SUFFIX}/api"

    env_url = (environ.get(API_BASE_URL_ENV) or "").strip()
    if env_url:
        return env_url.rstrip("/")

    return DEFAULT_API_BASE_URL


def _request_hostname() -> Optional[str]:
    # no request headers outside a script run, e.g. on a bare import
    if get_script_run_ctx() is None:
        return None
    return st.context.headers.get("Host")


class ApiClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = API_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        fallback: str = "Request failed",
    ) -> dict:
        """
        Send one request and return the decoded JSON body.
        Non-2xx responses and envelopes with success=false raise ApiError.
        """
        url = self.url(path)
        if params:
            params = {k: v for k, v in params.items() if v not in (None, "")}
        logger.debug("%s %s params=%s", method, url, params)

        try:
            resp = self.session.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(fallback) from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if not resp.ok or body.get("success") is False:
            message = body.get("message") or fallback
            logger.warning("%s %s -> %s: %s", method, url, resp.status_code, message)
            raise ApiError(message, status_code=resp.status_code)

        return body

    def get(self, path: str, **kw) -> dict:
        return self.request("GET", path, **kw)

    def post(self, path: str, **kw) -> dict:
        return self.request("POST", path, **kw)

    def put(self, path: str, **kw) -> dict:
        return self.request("PUT", path, **kw)

    def patch(self, path: str, **kw) -> dict:
        return self.request("PATCH", path, **kw)

    def delete(self, path: str, **kw) -> dict:
        return self.request("DELETE", path, **kw)


def unwrap(body: dict, default: Any = None) -> Any:
    """Pull `data` out of a {data, message} envelope."""
    data = body.get("data")
    return default if data is None else data


@st.cache_resource
def get_api_client() -> ApiClient:
    base_url = resolve_api_base_url(_request_hostname())
    logger.info("Using API base URL %s", base_url)
    return ApiClient(base_url)
