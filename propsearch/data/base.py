from typing import Protocol, List, Optional, Dict, Any, TYPE_CHECKING
from dataclasses import dataclass, field

if TYPE_CHECKING:
    from ..schemas import SearchParams

# ----- Data shapes (thin & explicit) -----

@dataclass
class StandardizedProperty:
    id: str
    address: str = ""
    price: float = 0
    sqft: float = 0
    bedrooms: float = 0
    bathrooms: float = 0
    property_type: str = "Single Family"
    days_on_market: float = 0
    photos: List[str] = field(default_factory=list)
    description: str = ""
    status: str = "active"
    # Only some providers report these
    mls_id: Optional[str] = None
    lot_size: Optional[float] = None
    year_built: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape: camelCase core fields, optional extras only when known."""
        out: Dict[str, Any] = {
            "id": self.id,
            "address": self.address,
            "price": self.price,
            "sqft": self.sqft,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "propertyType": self.property_type,
            "daysOnMarket": self.days_on_market,
            "photos": list(self.photos),
            "description": self.description,
            "status": self.status,
        }
        for key in ("mls_id", "lot_size", "year_built", "latitude", "longitude"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out

@dataclass
class MarketSummary:
    average_price: float
    price_per_sqft: float
    median_days_on_market: float
    inventory_level: str  # "High" | "Moderate" | "Low"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "averagePrice": self.average_price,
            "pricePerSqft": self.price_per_sqft,
            "medianDaysOnMarket": self.median_days_on_market,
            "inventoryLevel": self.inventory_level,
        }

@dataclass
class PropertySearchResult:
    properties: List[StandardizedProperty]
    market_summary: MarketSummary

    @property
    def total_count(self) -> int:
        return len(self.properties)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "properties": [p.to_dict() for p in self.properties],
            "totalCount": self.total_count,
            "marketSummary": self.market_summary.to_dict(),
        }

# ----- Protocols (interfaces) -----

class ListingProvider(Protocol):
    name: str

    async def fetch(self, params: "SearchParams") -> PropertySearchResult: ...
