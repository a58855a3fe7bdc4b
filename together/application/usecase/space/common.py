"""Response models shared by space use cases."""

from datetime import date, datetime

from pydantic import BaseModel

from together.domain.model import Space
from together.domain.value import PetNames


class SpaceResponse(BaseModel):
    """A space as seen by one of its partners."""

    id: str
    anniversary_date: date
    partners: list[str]
    invite_code: str | None
    is_paired: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, space: Space) -> "SpaceResponse":
        return cls(
            id=str(space.id),
            anniversary_date=space.anniversary_date,
            partners=[str(p) for p in space.partners],
            invite_code=space.invite_code.root if space.invite_code else None,
            is_paired=space.is_paired,
            created_at=space.created_at,
        )


class PetNamesResponse(BaseModel):
    """Pet names as seen by the requesting partner."""

    my_pet_name: str | None
    partner_pet_name: str | None

    @classmethod
    def from_domain(cls, pet_names: PetNames) -> "PetNamesResponse":
        return cls(
            my_pet_name=pet_names.my_pet_name.root if pet_names.my_pet_name else None,
            partner_pet_name=(
                pet_names.partner_pet_name.root
                if pet_names.partner_pet_name
                else None
            ),
        )
