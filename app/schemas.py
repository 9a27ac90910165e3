"""Typed shapes of the contact and quote form submissions.

Wire names are camelCase (as posted by the site); attributes are snake_case.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.config import MAX_ROOM_DIMENSION_FT

Subject = Literal["general", "quote", "support", "partnership"]
ContactMethod = Literal["email", "phone", "whatsapp"]
ProjectType = Literal["kitchen", "office", "closet", "vanity", "custom"]
CabinetStyle = Literal["modern", "traditional", "transitional", "contemporary"]
Finish = Literal["white", "wood-grain", "gray", "espresso", "custom"]
BudgetRange = Literal["15000-30000", "30000-50000", "50000-75000", "75000-100000", "100000+"]
Timeline = Literal["asap", "1-month", "2-3-months", "3-6-months", "flexible"]
RenovationType = Literal[
    "new-construction", "full-renovation", "cabinet-replacement", "partial-update"
]


class _Submission(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ContactSubmission(_Submission):
    name: str
    email: str
    phone: str
    subject: Subject
    message: str
    preferred_contact: Optional[ContactMethod] = Field(None, alias="preferredContact")
    project_type: Optional[ProjectType] = Field(None, alias="projectType")


class RoomDimensions(_Submission):
    """Room size in feet."""

    length: float = Field(..., gt=0, le=MAX_ROOM_DIMENSION_FT, allow_inf_nan=False)
    width: float = Field(..., gt=0, le=MAX_ROOM_DIMENSION_FT, allow_inf_nan=False)
    height: float = Field(..., gt=0, le=MAX_ROOM_DIMENSION_FT, allow_inf_nan=False)


class QuoteSubmission(_Submission):
    # Customer
    name: str
    email: str
    phone: str
    address: str

    # Project
    project_type: ProjectType = Field(..., alias="projectType")
    room_dimensions: Optional[RoomDimensions] = Field(None, alias="roomDimensions")
    cabinet_style: CabinetStyle = Field(..., alias="cabinetStyle")
    finish: Finish
    # Unknown add-ons are accepted; they simply carry no price multiplier
    features: List[str] = Field(default_factory=list)

    budget: BudgetRange
    timeline: Timeline

    existing_cabinets: bool = Field(False, alias="existingCabinets")
    renovation_type: Optional[RenovationType] = Field(None, alias="renovationType")
    additional_notes: Optional[str] = Field(None, alias="additionalNotes")
    preferred_contact: Optional[ContactMethod] = Field(None, alias="preferredContact")
    visit_required: bool = Field(False, alias="visitRequired")
