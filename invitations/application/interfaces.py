"""Collaborator protocols consumed by the application layer: templating, mail, actor resolution."""

from typing import Any, Mapping, Protocol


class TemplateRenderer(Protocol):
    def render(self, template_id: str, context: Mapping[str, Any]) -> str:
        """Render template_id against context. Raises TemplateRenderError if unknown or broken."""
        ...


class MailTransport(Protocol):
    async def send(self, to_address: str, from_address: str, subject: str, body: str) -> None:
        """Deliver one message. Raises on transport or delivery error."""
        ...


class ActorProvider(Protocol):
    def current_actor(self) -> str:
        """Identifier stamped into created_by / modified_by."""
        ...
