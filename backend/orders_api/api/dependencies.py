"""FastAPI dependencies for service injection."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends

from orders_api.config import Settings, StoreConfig, settings
from orders_api.services.external.github import GitHubContentsService
from orders_api.utils.datetime_utils import Clock, epoch_millis

StoreFactory = Callable[[StoreConfig], GitHubContentsService]


def get_settings() -> Settings:
    """Get the process-wide settings."""
    return settings


def get_store_factory() -> StoreFactory:
    """Get the factory that builds a contents client for a store config.

    The client cannot be built up front: the config is only validated
    once the request method has been checked.
    """
    return GitHubContentsService


def get_clock() -> Clock:
    """Get the clock used for generated order ids."""
    return epoch_millis


# Type aliases for cleaner endpoint signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreFactoryDep = Annotated[StoreFactory, Depends(get_store_factory)]
ClockDep = Annotated[Clock, Depends(get_clock)]
