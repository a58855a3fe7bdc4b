"""Dependency injection containers for the API and standalone jobs."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from together.util.di import PROVIDERS, get_provider


def _production_providers() -> list[Provider]:
    return [get_provider(base, use_mock=False)() for base in PROVIDERS]


def create_container() -> AsyncContainer:
    """Production container for the FastAPI app.

    Settings are loaded from environment variables when first requested.
    """
    return make_async_container(*_production_providers(), FastapiProvider())


def create_job_container() -> AsyncContainer:
    """Production container for scripts that run outside FastAPI."""
    return make_async_container(*_production_providers())


def setup_di(app, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so routes can use ``FromDishka``."""
    setup_dishka(container, app)
