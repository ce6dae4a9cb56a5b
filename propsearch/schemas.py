from typing import Annotated, Literal
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

ZipCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class SearchParams(BaseModel):
    """
    Property search filters. Wire names are camelCase (zipCode, minPrice, ...).
    Immutable so the same object can be keyed, cached and passed to providers.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    zip_code: ZipCode
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    min_sqft: float | None = Field(default=None, ge=0)
    max_sqft: float | None = Field(default=None, ge=0)
    max_days_on_market: int | None = Field(default=None, ge=0)
    property_types: frozenset[str] | None = None
    renovation_potential: Literal["high", "medium", "low"] | None = None

    @model_validator(mode="after")
    def _check_ranges(self):
        for low, high in (("min_price", "max_price"), ("min_sqft", "max_sqft")):
            lo, hi = getattr(self, low), getattr(self, high)
            if lo is not None and hi is not None and lo > hi:
                raise ValueError(f"{to_camel(low)} must not exceed {to_camel(high)}")
        return self

    def cache_fields(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

class Property(BaseModel):
    id: str
    address: str
    price: float
    sqft: float
    bedrooms: float
    bathrooms: float
    propertyType: str
    daysOnMarket: float
    photos: list[str]
    description: str
    status: str = "active"
    mls_id: str | None = None
    lot_size: float | None = None
    year_built: int | None = None
    latitude: float | None = None
    longitude: float | None = None

class MarketSummary(BaseModel):
    averagePrice: float
    pricePerSqft: float
    medianDaysOnMarket: float
    inventoryLevel: Literal["High", "Moderate", "Low"]

class PropertySearchResponse(BaseModel):
    properties: list[Property]
    totalCount: int
    marketSummary: MarketSummary
    cached: bool = False
    etag: str | None = None
