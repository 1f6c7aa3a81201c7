"""
Data models for Market Helper extraction results.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union


@dataclass(frozen=True)
class Stat:
    """One stat line of a module, with its polarity markers."""

    raw: str
    positive: bool = False
    negative: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"raw": self.raw, "positive": self.positive, "negative": self.negative}


@dataclass(frozen=True)
class ModuleRecord:
    """Represents a marketplace module listing with all extracted data."""

    # Listing info
    name: str = ""
    category: str = ""
    socket_type: str = ""
    required_rank: str = ""
    price: str = ""

    # Seller info
    platform: str = ""
    reroll_count: str = ""
    seller_name: str = ""
    seller_status: str = ""
    seller_rank: str = ""
    reg_date: str = ""

    # Stats
    attributes: Tuple[str, ...] = ()
    stats: Tuple[Stat, ...] = ()

    def __post_init__(self):
        # sequences are stored as tuples
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "stats", tuple(self.stats))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the key names the viewer reads."""
        return {
            "name": self.name,
            "category": self.category,
            "socketType": self.socket_type,
            "requiredRank": self.required_rank,
            "price": self.price,
            "platform": self.platform,
            "rerollCount": self.reroll_count,
            "sellerName": self.seller_name,
            "sellerStatus": self.seller_status,
            "sellerRank": self.seller_rank,
            "regDate": self.reg_date,
            "attributes": list(self.attributes),
            "stats": [s.to_dict() for s in self.stats],
        }


@dataclass
class ExtractionResult:
    """Outcome of one run: either the parsed modules or an error message."""

    modules: List[ModuleRecord] = field(default_factory=list)
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    def to_payload(self) -> Union[List[Dict[str, Any]], Dict[str, str]]:
        """Flat list of records, or ``{"error": ...}`` when the run failed."""
        if self.error:
            return {"error": self.error}
        return [m.to_dict() for m in self.modules]
