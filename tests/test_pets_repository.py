from __future__ import annotations

from pathlib import Path

from petconnect.auth.models import UserRole
from petconnect.auth.repository import UserRepository
from petconnect.pets.models import CreatePetRequest, PetFilters
from petconnect.pets.repository import PetRepository
from petconnect.pets.seed import DEMO_PETS, seed_demo_data
from tests.factories import open_database


def test_pet_round_trips_flags_and_lists(tmp_path: Path) -> None:
    database = open_database(tmp_path)
    shelter = UserRepository(database).create(
        name="SF Shelter", email="s@x.com", password_hash="h", role=UserRole.SHELTER
    )
    repo = PetRepository(database)

    created = repo.create(
        CreatePetRequest(
            name="Luna",
            species="Dog",
            good_with_kids=True,
            traits=["Playful", "Friendly"],
            images=["https://example.com/luna.jpg"],
        ),
        shelter_id=shelter.id,
        shelter_name=shelter.name,
    )
    loaded = repo.get(created.id)
    database.close()

    assert loaded is not None
    assert loaded.good_with_kids is True
    assert loaded.good_with_pets is False
    assert loaded.traits == ["Playful", "Friendly"]
    assert loaded.images == ["https://example.com/luna.jpg"]
    assert loaded.shelter == "SF Shelter"
    assert loaded.shelter_id == shelter.id
    assert loaded.model_dump(by_alias=True)["goodWithKids"] is True


def test_pet_search_filters(tmp_path: Path) -> None:
    database = open_database(tmp_path)
    users = UserRepository(database)
    repo = PetRepository(database)
    assert seed_demo_data(users, repo) is True
    assert seed_demo_data(users, repo) is False

    dogs = repo.search(PetFilters(species="Dog"))
    medium_dogs = repo.search(PetFilters(species="Dog", size="Medium"))
    bay_area = repo.search(PetFilters(location="san"))
    everything = repo.search()
    database.close()

    assert [pet.name for pet in dogs] == ["Luna", "Bella"]
    assert [pet.name for pet in medium_dogs] == ["Bella"]
    assert {pet.name for pet in bay_area} == {"Luna", "Milo"}
    assert len(everything) == len(DEMO_PETS)
