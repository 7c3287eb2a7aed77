from __future__ import annotations

from pydantic import BaseModel, Field

from .common import RosterRecordRead


class VenueBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    street_address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    state: str = Field(..., min_length=1, max_length=255)
    zipcode: str = Field(..., min_length=1, max_length=16)


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    street_address: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=255)
    state: str | None = Field(None, min_length=1, max_length=255)
    zipcode: str | None = Field(None, min_length=1, max_length=16)


class VenueRead(VenueBase, RosterRecordRead):
    pass
