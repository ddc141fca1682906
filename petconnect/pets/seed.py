"""Demo accounts and listings for local development."""

from __future__ import annotations

import logging

from petconnect.auth.models import UserRole
from petconnect.auth.repository import UserRepository
from petconnect.core.security import hash_password
from petconnect.pets.models import CreatePetRequest
from petconnect.pets.repository import PetRepository

LOGGER = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_PETS = [
    CreatePetRequest(
        name="Luna",
        species="Dog",
        breed="Labrador Retriever",
        age="2 years",
        size="Large",
        gender="Female",
        color="Yellow",
        energy="High",
        good_with_kids=True,
        good_with_pets=True,
        description="Friendly and playful lab who loves long walks and fetch.",
        traits=["Playful", "Friendly", "House-trained"],
        location="San Francisco, CA",
        shelter="Golden Gate Rescue",
        image="https://images.pexels.com/photos/2253275/pexels-photo-2253275.jpeg",
    ),
    CreatePetRequest(
        name="Milo",
        species="Cat",
        breed="Domestic Short Hair",
        age="1 year",
        size="Small",
        gender="Male",
        color="Orange",
        energy="Medium",
        good_with_kids=True,
        good_with_pets=False,
        description="Curious orange tabby who loves windowsills and naps.",
        traits=["Curious", "Affectionate"],
        location="San Jose, CA",
        shelter="Silicon Valley Humane",
        image="https://images.pexels.com/photos/1170986/pexels-photo-1170986.jpeg",
    ),
    CreatePetRequest(
        name="Bella",
        species="Dog",
        breed="Beagle",
        age="3 years",
        size="Medium",
        gender="Female",
        color="Tricolor",
        energy="Medium",
        good_with_kids=True,
        good_with_pets=True,
        description="Sweet beagle who loves sniff walks and cuddles.",
        traits=["Gentle", "Calm"],
        location="Oakland, CA",
        shelter="East Bay Paws",
        image="https://images.pexels.com/photos/46024/pexels-photo-46024.jpeg",
    ),
]


def seed_demo_data(users: UserRepository, pets: PetRepository) -> bool:
    """Create one adopter, one shelter and its pets if no user exists yet."""
    if users.count() > 0:
        return False

    password_hash = hash_password(DEMO_PASSWORD)
    users.create(
        name="Alice Adopter",
        email="alice@example.com",
        password_hash=password_hash,
        role=UserRole.ADOPTER,
    )
    shelter = users.create(
        name="SF Shelter",
        email="shelter@example.com",
        password_hash=password_hash,
        role=UserRole.SHELTER,
    )
    for pet in DEMO_PETS:
        pets.create(pet, shelter_id=shelter.id, shelter_name=shelter.name)
    LOGGER.info("demo_data_seeded", extra={"user_id": shelter.id})
    return True
