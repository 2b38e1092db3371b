"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
the user registry and its infrastructure adapters into routes,
plus the builders the lifespan uses to create those adapters.
"""

from fastapi import Depends, Request

from src.adapters.smtp.client import SmtpMessageClient
from src.adapters.smtp.console import ConsoleMessageClient
from src.config.settings import Settings, get_settings
from src.domain.ports import MessageClient, RegistryPersistence
from src.domain.registry import UserRegistry


def build_message_client(settings: Settings) -> MessageClient:
    """Create the message client selected by settings.message_client."""
    if settings.message_client == "smtp":
        return SmtpMessageClient(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.smtp_sender,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleMessageClient()


def get_persistence(request: Request) -> RegistryPersistence:
    """
    Get the persistence adapter from app state.

    The adapter is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.persistence


def get_message_client(request: Request) -> MessageClient:
    """Get the message client from app state."""
    return request.app.state.message_client


def get_registry(
    persistence: RegistryPersistence = Depends(get_persistence),
    message_client: MessageClient = Depends(get_message_client),
    settings: Settings = Depends(get_settings),
) -> UserRegistry:
    """
    Create the user registry with injected dependencies.

    Wires together persistence, message client and registry settings.
    """
    return UserRegistry(
        persistence=persistence,
        message_client=message_client,
        confirmation_base_url=settings.confirmation_base_url,
        code_length=settings.confirmation_code_length,
        propagate_delivery_errors=settings.propagate_delivery_errors,
    )
