"""
Interfaz del servicio de embeddings (texto -> vector).

Solo se declara el contrato: el pipeline que genera embeddings de reviews
vive fuera de este servicio y muta `reviews.embedding_status`
(pending -> processing -> completed | failed).
"""

from __future__ import annotations

from typing import List, Protocol, Sequence, Tuple


class EmbeddingService(Protocol):
    """
    Genera embeddings para texto libre.

    Implementaciones:
    - Cliente HTTP hacia un proveedor de embeddings.
    - Fake/stub para tests.
    """

    async def embed(self, text: str) -> List[float]:
        """Embedding de un texto. Lanza excepcion si el proveedor falla."""

    async def embed_many(self, texts: Sequence[str]) -> List[List[float]]:
        """Embeddings en lote, en el mismo orden que `texts`."""

    def model_info(self) -> Tuple[str, int]:
        """(nombre del modelo, dimensiones del vector)."""
