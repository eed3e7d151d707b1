"""
PokeAPI client.

Every GET goes through the response cache first, keyed by the full URL.
Only successful response bodies are cached; decoding happens after the cache
so a cached body is parsed the same way as a fresh one.
"""

import time
from typing import Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from pokedex.core.cache import Cache
from pokedex.core.config import settings
from pokedex.core.exceptions import PokeAPIError
from pokedex.core.logging import get_logger
from pokedex.core.models import LocationArea, LocationAreaPage, Pokemon

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PokeAPIClient:
    """Client for the handful of PokeAPI endpoints the REPL needs."""

    def __init__(
        self,
        cache: Cache,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            cache: Shared response cache
            base_url: API root (defaults to settings)
            timeout: Per-request timeout in seconds (defaults to settings)
            session: HTTP session, injectable for tests
        """
        self.cache = cache
        self.base_url = (base_url or settings.pokeapi_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout
        self.session = session or requests.Session()

    def location_areas_url(self) -> str:
        return f"{self.base_url}/location-area/"

    def location_area_url(self, name: str) -> str:
        return f"{self.base_url}/location-area/{name}/"

    def pokemon_url(self, name: str) -> str:
        return f"{self.base_url}/pokemon/{name}"

    def fetch(self, url: str) -> bytes:
        """Return the raw body for url, from the cache when present."""
        cached, found = self.cache.get(url)
        if found:
            logger.debug("cache_hit", url=url)
            return cached

        start = time.time()
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.info("pokeapi_http_error", url=url, status=status)
            if status == 404:
                raise PokeAPIError(f"Not found: {url}", status_code=404) from e
            raise PokeAPIError(f"API request failed with status {status}", status_code=status) from e
        except requests.exceptions.Timeout as e:
            logger.info("pokeapi_timeout", url=url, timeout=self.timeout)
            raise PokeAPIError(f"Request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.info("pokeapi_request_failed", url=url, error=str(e))
            raise PokeAPIError(f"API request failed: {e}") from e

        body = response.content
        self.cache.add(url, body)
        logger.debug(
            "pokeapi_fetched",
            url=url,
            bytes=len(body),
            duration_ms=int((time.time() - start) * 1000),
        )
        return body

    def _get_model(self, url: str, model: Type[ModelT]) -> ModelT:
        data = self.fetch(url)
        try:
            return model.model_validate_json(data)
        except ValidationError as e:
            logger.info("pokeapi_decode_failed", url=url, model=model.__name__)
            raise PokeAPIError(f"Failed to parse response from {url}") from e

    def location_areas(self, url: Optional[str] = None) -> LocationAreaPage:
        """Fetch one page of location areas (first page when url is None)."""
        return self._get_model(url or self.location_areas_url(), LocationAreaPage)

    def location_area(self, name: str) -> LocationArea:
        return self._get_model(self.location_area_url(name), LocationArea)

    def pokemon(self, name: str) -> Pokemon:
        return self._get_model(self.pokemon_url(name), Pokemon)

    def close(self) -> None:
        self.session.close()
