"""
Pydantic schemas for property payloads, search filters and records.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal


class PropertyCreate(BaseModel):
    """
    Payload for inserting a new property.
    The field order matches the column order used by the insert statement.
    """

    owner_id: int = Field(..., description="ID of the owning user")
    title: str = Field(..., description="Listing title")
    description: str = Field(..., description="Listing description")
    thumbnail_photo_url: str = Field(..., description="Thumbnail image URL")
    cover_photo_url: str = Field(..., description="Cover image URL")
    cost_per_night: int = Field(..., description="Nightly price in cents")
    parking_spaces: int = Field(..., description="Number of parking spaces")
    number_of_bathrooms: int = Field(..., description="Number of bathrooms")
    number_of_bedrooms: int = Field(..., description="Number of bedrooms")
    country: str
    street: str
    city: str
    province: str
    post_code: str


class PropertyRecord(PropertyCreate):
    """A properties row as returned by the store."""

    id: int = Field(..., description="Generated property ID")

    model_config = {"from_attributes": True}


class PropertyListing(PropertyRecord):
    """A property search result carrying its average review rating."""

    average_rating: Optional[float] = Field(
        None,
        description="Average rating across the property's reviews"
    )


class PropertySearchFilters(BaseModel):
    """
    Optional criteria for property search, combined with AND.
    Prices are in whole currency units; the query converts them to cents.
    Only None and empty form values mean "no filter": a numeric 0 is a real
    bound, so maximum_price_per_night=0 only matches free properties.
    """

    city: Optional[str] = Field(None, description="Case-sensitive substring of the city")
    owner_id: Optional[int] = Field(None, description="Only properties owned by this user")
    minimum_price_per_night: Optional[Decimal] = Field(None, description="Inclusive lower price bound")
    maximum_price_per_night: Optional[Decimal] = Field(None, description="Inclusive upper price bound")
    minimum_rating: Optional[float] = Field(None, description="Inclusive lower bound on average rating")

    @field_validator('city', mode='before')
    @classmethod
    def empty_city_to_none(cls, v):
        """An empty city is absent; whitespace is a real substring."""
        if v == "":
            return None
        return v

    @field_validator(
        'owner_id',
        'minimum_price_per_night',
        'maximum_price_per_night',
        'minimum_rating',
        mode='before'
    )
    @classmethod
    def blank_number_to_none(cls, v):
        """Treat blank numeric form values as an absent filter."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_empty(self) -> bool:
        """True when no filter is set."""
        return all(value is None for value in self.model_dump().values())
