"""Unit tests for PokeAPIClient caching, error mapping and decoding."""

from unittest.mock import Mock

import pytest
import requests

from pokedex.core.exceptions import PokeAPIError
from pokedex.services.pokeapi_client import PokeAPIClient

BASE_URL = "https://pokeapi.test/api/v2"


class TestFetch:
    """Test the cache-fronted raw fetch."""

    def test_fetch_caches_body_by_url(self, client, session, cache):
        """Test a second fetch of the same URL is served from the cache."""
        url = f"{BASE_URL}/location-area/"
        session.add_raw(url, b'{"count": 0}')

        first = client.fetch(url)
        second = client.fetch(url)

        assert first == second == b'{"count": 0}'
        assert session.calls == [url]
        assert cache.get(url) == (b'{"count": 0}', True)

    def test_fetch_prefers_existing_cache_entry(self, client, session, cache):
        """Test a pre-populated entry avoids the network entirely."""
        url = f"{BASE_URL}/pokemon/mew"
        cache.add(url, b"cached")

        assert client.fetch(url) == b"cached"
        assert session.calls == []

    def test_http_error_not_cached(self, client, session, cache):
        """Test a 404 raises PokeAPIError and leaves the cache empty."""
        url = f"{BASE_URL}/pokemon/missingno"

        with pytest.raises(PokeAPIError) as exc_info:
            client.fetch(url)

        assert exc_info.value.status_code == 404
        assert cache.get(url) == (None, False)

    def test_server_error_keeps_status(self, client, session):
        """Test a 5xx status code is carried on the error."""
        url = f"{BASE_URL}/pokemon/ditto"
        session.add_raw(url, b"oops", status=503)

        with pytest.raises(PokeAPIError) as exc_info:
            client.fetch(url)

        assert exc_info.value.status_code == 503

    def test_connection_error_wrapped(self, cache):
        """Test transport failures become PokeAPIError."""
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        client = PokeAPIClient(cache, base_url=BASE_URL, session=session)

        with pytest.raises(PokeAPIError, match="refused"):
            client.fetch(f"{BASE_URL}/location-area/")

    def test_timeout_wrapped(self, cache):
        """Test timeouts mention the configured timeout."""
        session = Mock()
        session.get.side_effect = requests.exceptions.Timeout()
        client = PokeAPIClient(cache, base_url=BASE_URL, timeout=7, session=session)

        with pytest.raises(PokeAPIError, match="7s"):
            client.fetch(f"{BASE_URL}/location-area/")

        session.get.assert_called_once_with(f"{BASE_URL}/location-area/", timeout=7)


class TestEndpoints:
    """Test typed endpoint helpers."""

    def test_location_areas_first_page(self, client, session):
        """Test the default page URL and decoding of results."""
        session.add_json(
            f"{BASE_URL}/location-area/",
            {
                "count": 2,
                "next": f"{BASE_URL}/location-area/?offset=20&limit=20",
                "previous": None,
                "results": [{"name": "canalave-city-area", "url": "x"}, {"name": "eterna-city-area"}],
            },
        )

        page = client.location_areas()

        assert [r.name for r in page.results] == ["canalave-city-area", "eterna-city-area"]
        assert page.next.endswith("offset=20&limit=20")
        assert page.previous is None

    def test_location_area_encounters(self, client, session):
        """Test explore payloads decode pokemon encounters."""
        session.add_json(
            f"{BASE_URL}/location-area/pastoria-city-area/",
            {"name": "pastoria-city-area", "pokemon_encounters": [{"pokemon": {"name": "tentacool"}}]},
        )

        area = client.location_area("pastoria-city-area")

        assert [e.pokemon.name for e in area.pokemon_encounters] == ["tentacool"]

    def test_pokemon(self, client, session, pikachu_payload):
        """Test pokemon payload decoding."""
        session.add_json(f"{BASE_URL}/pokemon/pikachu", pikachu_payload)

        pokemon = client.pokemon("pikachu")

        assert pokemon.base_experience == 112
        assert pokemon.stats[0].stat.name == "hp"

    def test_undecodable_body_raises(self, client, session):
        """Test invalid JSON surfaces as PokeAPIError."""
        session.add_raw(f"{BASE_URL}/pokemon/glitch", b"<html>not json</html>")

        with pytest.raises(PokeAPIError, match="Failed to parse"):
            client.pokemon("glitch")

    def test_cached_body_decoded_again(self, client, session, pikachu_payload):
        """Test a cache hit yields the same model as the first fetch."""
        session.add_json(f"{BASE_URL}/pokemon/pikachu", pikachu_payload)

        first = client.pokemon("pikachu")
        second = client.pokemon("pikachu")

        assert first == second
        assert len(session.calls) == 1

    def test_base_url_trailing_slash_stripped(self, cache):
        """Test URLs are built without a double slash."""
        client = PokeAPIClient(cache, base_url=f"{BASE_URL}/", session=Mock())

        assert client.pokemon_url("eevee") == f"{BASE_URL}/pokemon/eevee"
