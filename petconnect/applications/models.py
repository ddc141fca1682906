"""Adoption application models."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from petconnect.api.contracts import ApiModel
from petconnect.applications.state_machine import ApplicationStatus
from petconnect.core.database import MAX_ROW_ID


class Application(ApiModel):
    id: int
    pet_id: int
    applicant_id: int
    applicant_name: str
    applicant_email: str
    applicant_phone: str | None = None
    home_type: str | None = None
    has_yard: bool = False
    has_pets: bool = False
    experience: str | None = None
    reason: str | None = None
    status: ApplicationStatus
    submitted_date: datetime
    shelter_id: int
    pet_name: str | None = None
    pet_image: str | None = None


class SubmitApplicationRequest(ApiModel):
    """Adopter-supplied fields.

    Server-owned fields (``status``, ``submittedDate``, ``shelterId``) are
    dropped if a client sends them.
    """

    model_config = ConfigDict(extra="ignore")

    pet_id: int = Field(gt=0, le=MAX_ROW_ID)
    applicant_name: str | None = Field(default=None, max_length=200)
    applicant_email: str | None = Field(default=None, max_length=320)
    applicant_phone: str | None = Field(default=None, max_length=50)
    home_type: str | None = None
    has_yard: bool = False
    has_pets: bool = False
    experience: str | None = None
    reason: str | None = None


class UpdateStatusRequest(ApiModel):
    status: str = Field(min_length=1)
