from typing import Protocol

from flashlearn.domain.learning.entities.card import Card, CardEnrichment


class EnrichmentServiceProtocol(Protocol):
    async def fetch_missing_fields(self, card: Card) -> CardEnrichment: ...
