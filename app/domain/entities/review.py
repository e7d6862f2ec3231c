"""
Entidades de dominio: Review y Translation.

Ambas son independientes del grafo de Property: se reemplazan por hotel
(reviews) o por (hotel, idioma) (traducciones) en su propia transaccion.
"""
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from app.shared.constants.hotel_constants import EmbeddingStatus, TranslationEntityType


@dataclass
class Review:
    """Review de un hotel. rating en escala 1-5."""

    hotel_id: int
    rating: int
    content: str = ""
    reviewer_name: str = ""
    title: str = ""
    language_code: str = "en"
    review_date: Optional[date] = None
    helpful_votes: int = 0
    embedding_status: EmbeddingStatus = EmbeddingStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Representacion JSON-serializable (usada por la cache y la API)."""
        data = asdict(self)
        data["embedding_status"] = self.embedding_status.value
        data["review_date"] = self.review_date.isoformat() if self.review_date else None
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Review":
        """Reconstruye una Review desde `to_dict`."""
        review_date = data.get("review_date")
        created_at = data.get("created_at")
        return cls(
            id=data.get("id"),
            hotel_id=int(data["hotel_id"]),
            rating=int(data["rating"]),
            content=data.get("content") or "",
            reviewer_name=data.get("reviewer_name") or "",
            title=data.get("title") or "",
            language_code=data.get("language_code") or "en",
            review_date=date.fromisoformat(review_date) if review_date else None,
            helpful_votes=int(data.get("helpful_votes") or 0),
            embedding_status=EmbeddingStatus(data.get("embedding_status") or EmbeddingStatus.PENDING.value),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


@dataclass
class Translation:
    """
    Texto traducido de un campo de una entidad.
    Unico por hotel y (entity_type, entity_id, language_code, field_name).
    """

    entity_type: TranslationEntityType
    entity_id: int
    language_code: str
    field_name: str
    translated_text: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["entity_type"] = self.entity_type.value
        return data
