"""Pet name use cases."""

from pydantic import BaseModel, Field

from together.application.usecase.base import BaseUseCase, to_user_id
from together.application.usecase.space.common import PetNamesResponse
from together.domain.error import ValidationError
from together.domain.service import SpaceService
from together.domain.unit_of_work import UnitOfWork
from together.domain.value import PetName


class GetPetNamesRequest(BaseModel):
    """Get pet names request."""

    user_id: str


class UpdatePetNamesRequest(BaseModel):
    """Update pet names request.

    Omitted (or null) names are left unchanged.
    """

    user_id: str
    my_pet_name: str | None = Field(default=None, min_length=1, max_length=30)
    partner_pet_name: str | None = Field(default=None, min_length=1, max_length=30)


class GetPetNamesUseCase(BaseUseCase):
    """Use case for reading pet names."""

    def __init__(self, space_service: SpaceService) -> None:
        self.space_service = space_service

    async def execute(self, request: GetPetNamesRequest) -> PetNamesResponse:
        pet_names = await self.space_service.get_pet_names(
            to_user_id(request.user_id)
        )
        return PetNamesResponse.from_domain(pet_names)


class UpdatePetNamesUseCase(BaseUseCase):
    """Use case for setting pet names.

    ``my_pet_name`` is what the user calls their partner;
    ``partner_pet_name`` is what the partner calls the user.
    """

    def __init__(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> None:
        self.space_service = space_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: UpdatePetNamesRequest) -> PetNamesResponse:
        """Update pet names.

        Raises:
            SpaceNotFoundError: If the user has no space
            NotPairedError: If a partner pet name is set before pairing
        """
        my_pet_name = _to_pet_name(request.my_pet_name)
        partner_pet_name = _to_pet_name(request.partner_pet_name)
        async with self.unit_of_work:
            pet_names = await self.space_service.update_pet_names(
                to_user_id(request.user_id),
                my_pet_name=my_pet_name,
                partner_pet_name=partner_pet_name,
            )
        return PetNamesResponse.from_domain(pet_names)


def _to_pet_name(value: str | None) -> PetName | None:
    if value is None:
        return None
    try:
        return PetName(value)
    except ValueError as e:
        raise ValidationError(str(e))
