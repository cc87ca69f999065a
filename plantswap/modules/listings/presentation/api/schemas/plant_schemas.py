# 📄 File: plantswap/modules/listings/presentation/api/schemas/plant_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines what a plant listing looks like when the app sends it to us or we send it back,
# and which values are acceptable (name length, description length and so on).
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for plant listing endpoints. The create request is
# built from multipart form fields so a photo can travel with it.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - FastAPI Form for multipart parsing
# - Plant domain model enums
#
# 🔄 Connected Modules / Calls From:
# - plantswap.modules.listings.presentation.api.v1.plants

"""
Plant Listing API Schemas

Request Schemas:
- PlantCreateRequest: New listing (multipart form fields)
- PlantUpdateRequest: Partial edit of an owned listing

Response Schemas:
- PlantResponse: Single listing
- PlantListResponse: Listing collection
"""

from datetime import datetime
from typing import List, Optional

from fastapi import Form
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from plantswap.modules.listings.domain.models.plant import Plant, PlantStatus, PlantType


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class PlantCreateRequest(BaseModel):
    """
    New plant listing.

    Required fields match the listing form: name, species and location of at
    least two characters each.
    """

    name: str = Field(..., min_length=2, max_length=50, examples=["Monstera"])
    species: str = Field(..., min_length=2, max_length=50, examples=["Monstera deliciosa"])
    subspecies: Optional[str] = Field(None, max_length=50, examples=["Thai Constellation"])
    location: str = Field(..., min_length=2, max_length=50, examples=["Berlin"])
    description: Optional[str] = Field(None, max_length=500)
    plant_type: PlantType = Field(default=PlantType.OTHER)

    @field_validator('name', 'species', 'location')
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError('Must be at least 2 characters')
        return v

    @classmethod
    def as_form(
        cls,
        name: str = Form(...),
        species: str = Form(...),
        location: str = Form(...),
        subspecies: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        plant_type: PlantType = Form(PlantType.OTHER),
    ) -> "PlantCreateRequest":
        """Build the request from multipart form fields."""
        try:
            return cls(
                name=name,
                species=species,
                location=location,
                subspecies=subspecies,
                description=description,
                plant_type=plant_type,
            )
        except PydanticValidationError as e:
            raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


class PlantUpdateRequest(BaseModel):
    """Partial edit; only fields present in the body are changed."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    species: Optional[str] = Field(None, min_length=2, max_length=50)
    subspecies: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    plant_type: Optional[PlantType] = None

    @field_validator('name', 'species', 'location', 'plant_type', mode='before')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be cleared')
        return v

    def changes(self) -> dict:
        """Fields explicitly sent by the client."""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class PlantResponse(BaseModel):
    """Plant listing as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    name: str
    species: str
    subspecies: Optional[str] = None
    location: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    plant_type: PlantType
    status: PlantStatus
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, plant: Plant) -> "PlantResponse":
        return cls.model_validate(plant)


class PlantListResponse(BaseModel):
    plants: List[PlantResponse]
    total: int

    @classmethod
    def from_domain(cls, plants: List[Plant]) -> "PlantListResponse":
        return cls(plants=[PlantResponse.from_domain(p) for p in plants], total=len(plants))
