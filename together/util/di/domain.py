"""Domain layer DI providers."""

from dishka import Scope, provide

from together.config import AuthSettings, PairingSettings, UnbindSettings
from together.domain.event import EventOutbox
from together.domain.repository import (
    InviteCodeRepository,
    SpaceRepository,
    UnbindRequestRepository,
    UserRepository,
)
from together.domain.service import (
    ArchivalService,
    ContentArchiver,
    InviteCodeService,
    JWTService,
    NotificationClient,
    NotificationService,
    PairingService,
    SpaceService,
    UnbindService,
    UserService,
)
from together.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle: each unit of work gets fresh services, its own transaction and
    its own event outbox.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_notification_service(
        self, notification_client: NotificationClient
    ) -> NotificationService:
        """Provide fire-and-forget notification service."""
        return NotificationService(notification_client=notification_client)

    @provide
    def get_archival_service(
        self, content_archiver: ContentArchiver
    ) -> ArchivalService:
        """Provide content archival service."""
        return ArchivalService(content_archiver=content_archiver)

    @provide
    def get_invite_code_service(
        self,
        invite_code_repository: InviteCodeRepository,
        pairing_settings: PairingSettings,
    ) -> InviteCodeService:
        """Provide invite code registry service."""
        return InviteCodeService(
            invite_code_repository=invite_code_repository,
            pairing_settings=pairing_settings,
        )

    @provide
    def get_space_service(
        self,
        space_repository: SpaceRepository,
        invite_code_service: InviteCodeService,
        outbox: EventOutbox,
    ) -> SpaceService:
        """Provide space domain service."""
        return SpaceService(
            space_repository=space_repository,
            invite_code_service=invite_code_service,
            outbox=outbox,
        )

    @provide
    def get_pairing_service(
        self,
        invite_code_service: InviteCodeService,
        space_service: SpaceService,
        user_service: UserService,
        outbox: EventOutbox,
    ) -> PairingService:
        """Provide pairing domain service."""
        return PairingService(
            invite_code_service=invite_code_service,
            space_service=space_service,
            user_service=user_service,
            outbox=outbox,
        )

    @provide
    def get_unbind_service(
        self,
        unbind_request_repository: UnbindRequestRepository,
        space_service: SpaceService,
        outbox: EventOutbox,
        unbind_settings: UnbindSettings,
    ) -> UnbindService:
        """Provide unbind lifecycle service."""
        return UnbindService(
            unbind_request_repository=unbind_request_repository,
            space_service=space_service,
            outbox=outbox,
            unbind_settings=unbind_settings,
        )
