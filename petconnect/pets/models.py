"""Pet listing models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator

from petconnect.api.contracts import ApiModel

PetSize = Literal["Small", "Medium", "Large"]
PetGender = Literal["Male", "Female"]
PetEnergy = Literal["Low", "Medium", "High"]


class Pet(ApiModel):
    """Pet as presented to clients; list and flag columns already decoded."""

    id: int
    name: str
    species: str
    breed: str | None = None
    age: str | None = None
    size: str | None = None
    gender: str | None = None
    color: str | None = None
    energy: str | None = None
    good_with_kids: bool = False
    good_with_pets: bool = False
    description: str | None = None
    traits: list[str] = Field(default_factory=list)
    location: str | None = None
    shelter: str | None = None
    shelter_id: int
    image: str | None = None
    images: list[str] = Field(default_factory=list)


class CreatePetRequest(ApiModel):
    """Listing payload; the owning shelter always comes from the session."""

    name: str = Field(min_length=1, max_length=200)
    species: str = Field(min_length=1, max_length=100)
    breed: str | None = None
    age: str | None = None
    size: PetSize | None = None
    gender: PetGender | None = None
    color: str | None = None
    energy: PetEnergy | None = None
    good_with_kids: bool = False
    good_with_pets: bool = False
    description: str | None = None
    traits: list[str] = Field(default_factory=list)
    location: str | None = None
    shelter: str | None = None
    image: str | None = None
    images: list[str] = Field(default_factory=list)

    @field_validator("name", "species")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class PetFilters(ApiModel):
    species: str | None = None
    size: str | None = None
    energy: str | None = None
    location: str | None = None
