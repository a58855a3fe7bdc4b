"""Space use cases."""

from together.application.usecase.space.common import PetNamesResponse, SpaceResponse
from together.application.usecase.space.create_space import (
    CreateSpaceRequest,
    CreateSpaceUseCase,
)
from together.application.usecase.space.delete_space import (
    DeleteSpaceRequest,
    DeleteSpaceUseCase,
)
from together.application.usecase.space.get_my_space import (
    GetMySpaceRequest,
    GetMySpaceUseCase,
)
from together.application.usecase.space.pet_names import (
    GetPetNamesRequest,
    GetPetNamesUseCase,
    UpdatePetNamesRequest,
    UpdatePetNamesUseCase,
)
from together.application.usecase.space.update_space import (
    UpdateAnniversaryDateRequest,
    UpdateAnniversaryDateUseCase,
)

__all__ = [
    "CreateSpaceRequest",
    "CreateSpaceUseCase",
    "DeleteSpaceRequest",
    "DeleteSpaceUseCase",
    "GetMySpaceRequest",
    "GetMySpaceUseCase",
    "GetPetNamesRequest",
    "GetPetNamesUseCase",
    "PetNamesResponse",
    "SpaceResponse",
    "UpdateAnniversaryDateRequest",
    "UpdateAnniversaryDateUseCase",
    "UpdatePetNamesRequest",
    "UpdatePetNamesUseCase",
]
