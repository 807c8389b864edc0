"""Remote Pokemon catalog client.

Fetches per-id documents from a PokeAPI-compatible endpoint and caches them
for the lifetime of the client. Transport and decoding failures surface as
:class:`CatalogError`; callers decide whether to retry or abort.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

import requests

from pokebattle.core.errors import CatalogError
from pokebattle.core.logging import logger
from pokebattle.battle.factory import combatant_from_catalog
from pokebattle.battle.models import Combatant

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2/pokemon/"
DEFAULT_TIMEOUT = 10

class CatalogClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = session or requests.Session()
        self._cache: Dict[int, Dict[str, Any]] = {}

    def url_for(self, pokemon_id: int) -> str:
        return f"{self.base_url}{int(pokemon_id)}"

    def fetch(self, pokemon_id: int) -> Dict[str, Any]:
        pid = int(pokemon_id)
        if pid in self._cache:
            return self._cache[pid]
        url = self.url_for(pid)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error("CatalogFetchFailed", id=pid, url=url, error=str(e))
            raise CatalogError(pid, str(e)) from e
        except ValueError as e:
            logger.error("CatalogDecodeFailed", id=pid, url=url, error=str(e))
            raise CatalogError(pid, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CatalogError(pid, "unexpected document shape")
        logger.debug("CatalogFetched", id=pid, name=data.get("name"))
        self._cache[pid] = data
        return data

    def fetch_combatant(self, pokemon_id: int) -> Combatant:
        return combatant_from_catalog(self.fetch(pokemon_id))

    def clear_cache(self):
        self._cache.clear()

__all__ = ["CatalogClient", "DEFAULT_BASE_URL"]
