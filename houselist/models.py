"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (Record).
- Inputs: Field values.
- Outputs: Frozen dataclass instances; sample seed records.
- Side effects: None.
- Thread-safety: Records are immutable; safe to share.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union

RecordId = Union[int, str]


@dataclass(frozen=True)
class Record:
    """
    Design (Record)
    - Purpose: Represents a single house listed for sale.
    - Fields:
        id: unique identifier within a collection.
        address: street address (free text).
        country: country name, used by the search filter.
        price: asking price, never negative.
    """
    id: RecordId
    address: str
    country: str
    price: float

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"price must be non-negative, got {self.price!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "address": self.address,
            "country": self.country,
            "price": self.price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Record:
        # "objectID" is the key used by older exports
        record_id = data["id"] if "id" in data else data["objectID"]
        return cls(
            id=record_id,
            address=str(data.get("address", "")),
            country=str(data.get("country", "")),
            price=data.get("price", 0),
        )


def sample_records() -> List[Record]:
    """Return a fresh list with the five houses shipped with the app."""
    return [
        Record(id=1, address="12 Valley of Kings, Geneva", country="Switzerland", price=900000),
        Record(id=2, address="89 Road of Forks, Bern", country="Italy", price=500000),
        Record(id=3, address="1053 Lake Side Drive", country="Netherlands", price=600500),
        Record(id=4, address="1916 Rustic Oak Road", country="USA", price=600900),
        Record(id=5, address="1256 Macapagal Road", country="Philippines", price=700900),
    ]
