"""
Pydantic schemas for reservation records.
"""

from pydantic import BaseModel, Field
from datetime import date


class ReservationListing(BaseModel):
    """
    A guest reservation joined with the reserved property's columns.
    The property's own id is not repeated; it equals property_id.
    """

    # Reservation columns
    id: int = Field(..., description="Reservation ID")
    guest_id: int
    property_id: int
    start_date: date
    end_date: date

    # Property columns
    owner_id: int
    title: str
    description: str
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    parking_spaces: int
    number_of_bathrooms: int
    number_of_bedrooms: int
    country: str
    street: str
    city: str
    province: str
    post_code: str

    model_config = {"from_attributes": True}
