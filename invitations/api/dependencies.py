"""FastAPI dependency injection: repository, transport, renderer, InvitationService, correlation/actor ids."""

import asyncio
import logging

from fastapi import Request

from invitations.application.interfaces import MailTransport, TemplateRenderer
from invitations.application.invitation_repository import InvitationRepository
from invitations.application.invitation_service import InvitationService
from invitations.application.invitation_store import InvitationStore
from invitations.application.message_composer import MessageComposer
from invitations.application.notification_dispatcher import NotificationDispatcher
from invitations.application.sender_directory import SenderDirectory
from invitations.config.settings import AppSettings, get_settings
from invitations.core.actor import ContextActorProvider
from invitations.domain.template_selector import TemplateSelector
from invitations.infrastructure.cache.invitation_repository_redis import RedisInvitationRepository
from invitations.infrastructure.cache.redis_client import RedisClient
from invitations.infrastructure.mail.smtp_transport import SmtpMailTransport
from invitations.infrastructure.persistence.json_file_repository import JsonFileInvitationRepository
from invitations.infrastructure.templating.jinja_renderer import JinjaTemplateRenderer

_redis_client: RedisClient | None = None
_invitation_service: InvitationService | None = None
_service_lock = asyncio.Lock()


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


async def close_clients() -> None:
    """Close the Redis client, if one was opened. Called on shutdown."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None


def build_repository(settings: AppSettings) -> InvitationRepository | None:
    """Repository for the configured persistence mode; None means transient."""
    if settings.persistence_mode == "file":
        return JsonFileInvitationRepository(settings.data_file)
    if settings.persistence_mode == "redis":
        return RedisInvitationRepository(get_redis_client(), settings.redis_snapshot_key)
    return None


def build_invitation_service(
    settings: AppSettings,
    repository: InvitationRepository | None,
    renderer: TemplateRenderer,
    transport: MailTransport,
) -> InvitationService:
    """Wire store, composer, dispatcher and service around the given collaborators."""
    logger = logging.getLogger("invitations")
    store = InvitationStore(
        repository=repository,
        actor_provider=ContextActorProvider(settings.default_actor),
        logger=logger,
    )
    composer = MessageComposer(
        renderer=renderer,
        selector=TemplateSelector(default_identity=settings.default_identity),
        logger=logger,
    )
    dispatcher = NotificationDispatcher(
        store=store,
        composer=composer,
        transport=transport,
        senders=SenderDirectory(
            settings.sender_addresses,
            settings.fallback_sender,
            default_identity=settings.default_identity,
        ),
        subject=settings.mail_subject,
        send_delay_seconds=settings.send_delay_seconds,
        logger=logger,
    )
    return InvitationService(store=store, dispatcher=dispatcher, logger=logger)


async def get_invitation_service() -> InvitationService:
    """Return the process-wide InvitationService, loading persisted invitations on first use."""
    global _invitation_service
    async with _service_lock:
        if _invitation_service is None:
            settings = get_settings()
            service = build_invitation_service(
                settings,
                repository=build_repository(settings),
                renderer=JinjaTemplateRenderer(settings.template_dir, suffix=settings.template_suffix),
                transport=SmtpMailTransport(
                    host=settings.smtp_host,
                    port=settings.smtp_port,
                    username=settings.smtp_username,
                    password=settings.smtp_password,
                    starttls=settings.smtp_starttls,
                    timeout=settings.smtp_timeout,
                ),
            )
            await service.load()
            _invitation_service = service
    return _invitation_service


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
