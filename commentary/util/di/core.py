"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from commentary.config import AuthSettings, CommentSettings, NotificationSettings, Settings
from commentary.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment policy."""
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        """Provide notification relay settings."""
        return settings.notifications
