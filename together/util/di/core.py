"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from together.config import (
    AuthSettings,
    DatabaseSettings,
    PairingSettings,
    Settings,
    UnbindSettings,
)
from together.util.di.base import ProviderBase
from together.util.error import ConfigurationError

DEFAULT_JWT_SECRET = AuthSettings().jwt_secret


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment.

        Raises:
            ConfigurationError: If production runs with the default JWT secret
        """
        settings = Settings()
        if (
            settings.environment == "production"
            and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
        return settings

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

    @provide(scope=Scope.APP)
    def provide_pairing_settings(self, settings: Settings) -> PairingSettings:
        return settings.pairing

    @provide(scope=Scope.APP)
    def provide_unbind_settings(self, settings: Settings) -> UnbindSettings:
        return settings.unbind
