"""Thin client for TheCatAPI image endpoints.

The upstream answers some routes with a JSON array and others with a single
object, so every call returns one of two tagged results: ``ImageList`` or
``ImageObject``. Failures are raised, never fatal.
"""

import logging
import threading
from dataclasses import dataclass, field

import requests

logger = logging.getLogger(__name__)

CAT_API_URL = "https://api.thecatapi.com/v1"


class CatApiError(Exception):
    """Base class for anything that goes wrong talking to the upstream."""


class ConfigError(CatApiError):
    pass


class TransportError(CatApiError):
    pass


class DecodeError(CatApiError):
    pass


@dataclass
class ImageList:
    items: list = field(default_factory=list)

    def __len__(self):
        return len(self.items)


@dataclass
class ImageObject:
    data: dict = field(default_factory=dict)


def parse_payload(payload):
    """Tag a decoded JSON body as a list of objects or a single object."""
    if isinstance(payload, list) and all(isinstance(item, dict) for item in payload):
        return ImageList(payload)
    if isinstance(payload, dict):
        return ImageObject(payload)
    raise DecodeError(f"expected a JSON array of objects or a JSON object, got {type(payload).__name__}")


class CatApiClient:
    def __init__(self, api_key, base_url=CAT_API_URL, timeout=10.0, session=None):
        if not api_key:
            raise ConfigError("API key is not set in the environment variables")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Content-Type": "application/json; charset=utf-8",
            "x-api-key": api_key,
        }
        self._session = session
        self._local = threading.local()
        if session is not None:
            session.headers.update(self.headers)

    @property
    def session(self):
        # one Session per thread unless a session was handed in
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    def search_url(self, limit, breed_id=None):
        url = f"{self.base_url}/images/search?has_breeds=1&limit={limit}"
        if breed_id is not None:
            url += f"&breed_ids={breed_id}"
        return url

    def image_url(self, image_id):
        return f"{self.base_url}/images/{image_id}"

    def fetch(self, url):
        """GET ``url`` and return an ``ImageList`` or ``ImageObject``.

        Raises:
            TransportError: the request could not be built or sent, timed out,
                or came back with a non-2xx status.
            DecodeError: the body is neither an array of objects nor an object.
        """
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Upstream request to %s failed: %s", url, e)
            raise TransportError(str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("Upstream response from %s is not JSON: %s", url, e)
            raise DecodeError(str(e)) from e

        try:
            return parse_payload(payload)
        except DecodeError as e:
            logger.warning("Unexpected upstream response from %s: %s", url, e)
            raise

    def search_images(self, limit, breed_id=None):
        result = self.fetch(self.search_url(limit, breed_id))
        if not isinstance(result, ImageList):
            raise DecodeError("unexpected response format")
        return result

    def get_image(self, image_id):
        result = self.fetch(self.image_url(image_id))
        if not isinstance(result, ImageObject):
            raise DecodeError("unexpected response format")
        return result

    def close(self):
        """Close the session used by the calling thread."""
        self.session.close()
