"""HTTP client shared by the MapQuest API bindings."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import requests

from mapquest.core.config import Settings, get_settings
from mapquest.core.errors import DecodeError
from mapquest.core.payload import load_json
from mapquest.vendors.nominatim import NominatimAPI

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"([?&]key=)[^&]*")


def redact_key(url: str) -> str:
    return _KEY_PATTERN.sub(r"\1<redacted>", url)


class Client:
    """Thin wrapper around a requests session bound to one MapQuest deployment."""

    def __init__(
        self,
        base_url: str,
        key: str = "",
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.key = key or ""
        self.timeout = timeout
        self._session = session or requests.Session()
        if user_agent:
            self._session.headers["User-Agent"] = user_agent

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Client":
        settings = settings or get_settings()
        return cls(
            settings.base_url,
            key=settings.api_key,
            timeout=settings.timeout,
            user_agent=settings.user_agent,
        )

    def nominatim(self) -> NominatimAPI:
        return NominatimAPI(self)

    def get_json(self, url: str) -> Any:
        """Perform a GET request and return the decoded JSON payload.

        HTTP and connection errors from requests are propagated unchanged.
        """
        logger.debug("GET %s", redact_key(url))
        response = self._session.get(url, timeout=self.timeout)
        response.raise_for_status()
        try:
            return load_json(response.text)
        except DecodeError as exc:
            logger.error("Response from %s is not valid JSON: %s", redact_key(url), exc)
            raise
