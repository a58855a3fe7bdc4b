"""Application layer DI providers."""

from dishka import Scope, provide

from together.application.usecase.pairing import ConfirmJoinUseCase, RedeemCodeUseCase
from together.application.usecase.space import (
    CreateSpaceUseCase,
    DeleteSpaceUseCase,
    GetMySpaceUseCase,
    GetPetNamesUseCase,
    UpdateAnniversaryDateUseCase,
    UpdatePetNamesUseCase,
)
from together.application.usecase.unbind import (
    CancelUnbindUseCase,
    GetUnbindStatusUseCase,
    RequestUnbindUseCase,
)
from together.application.usecase.user import GetProfileUseCase, UpdateProfileUseCase
from together.domain.service import (
    PairingService,
    SpaceService,
    UnbindService,
    UserService,
)
from together.domain.unit_of_work import UnitOfWork
from together.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Space use cases
    @provide(scope=Scope.REQUEST)
    def get_create_space_use_case(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> CreateSpaceUseCase:
        """Provide create space use case."""
        return CreateSpaceUseCase(
            space_service=space_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_get_my_space_use_case(
        self, space_service: SpaceService
    ) -> GetMySpaceUseCase:
        """Provide get my space use case."""
        return GetMySpaceUseCase(space_service=space_service)

    @provide(scope=Scope.REQUEST)
    def get_update_anniversary_date_use_case(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> UpdateAnniversaryDateUseCase:
        """Provide update anniversary date use case."""
        return UpdateAnniversaryDateUseCase(
            space_service=space_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_space_use_case(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> DeleteSpaceUseCase:
        """Provide delete space use case."""
        return DeleteSpaceUseCase(
            space_service=space_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_get_pet_names_use_case(
        self, space_service: SpaceService
    ) -> GetPetNamesUseCase:
        """Provide get pet names use case."""
        return GetPetNamesUseCase(space_service=space_service)

    @provide(scope=Scope.REQUEST)
    def get_update_pet_names_use_case(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> UpdatePetNamesUseCase:
        """Provide update pet names use case."""
        return UpdatePetNamesUseCase(
            space_service=space_service, unit_of_work=unit_of_work
        )

    # Pairing use cases
    @provide(scope=Scope.REQUEST)
    def get_redeem_code_use_case(
        self, pairing_service: PairingService
    ) -> RedeemCodeUseCase:
        """Provide redeem code use case."""
        return RedeemCodeUseCase(pairing_service=pairing_service)

    @provide(scope=Scope.REQUEST)
    def get_confirm_join_use_case(
        self, pairing_service: PairingService, unit_of_work: UnitOfWork
    ) -> ConfirmJoinUseCase:
        """Provide confirm join use case."""
        return ConfirmJoinUseCase(
            pairing_service=pairing_service, unit_of_work=unit_of_work
        )

    # Unbind use cases
    @provide(scope=Scope.REQUEST)
    def get_request_unbind_use_case(
        self, unbind_service: UnbindService, unit_of_work: UnitOfWork
    ) -> RequestUnbindUseCase:
        """Provide request unbind use case."""
        return RequestUnbindUseCase(
            unbind_service=unbind_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_cancel_unbind_use_case(
        self, unbind_service: UnbindService, unit_of_work: UnitOfWork
    ) -> CancelUnbindUseCase:
        """Provide cancel unbind use case."""
        return CancelUnbindUseCase(
            unbind_service=unbind_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_get_unbind_status_use_case(
        self, unbind_service: UnbindService, space_service: SpaceService
    ) -> GetUnbindStatusUseCase:
        """Provide get unbind status use case."""
        return GetUnbindStatusUseCase(
            unbind_service=unbind_service, space_service=space_service
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(self, user_service: UserService) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, user_service: UserService, unit_of_work: UnitOfWork
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(
            user_service=user_service, unit_of_work=unit_of_work
        )
