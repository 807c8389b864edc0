"""
Error classes for clearer exception sources.

The battle engine itself never raises for bad input (invalid calls are
no-ops); these cover the collaborators around it.
"""
from __future__ import annotations

class PokebattleError(Exception):
    pass

class ValidationError(PokebattleError):
    pass

class CatalogError(PokebattleError):
    def __init__(self, pokemon_id: int, detail: str):
        super().__init__(f"Catalog lookup for #{pokemon_id} failed: {detail}")
        self.pokemon_id = pokemon_id
        self.detail = detail
