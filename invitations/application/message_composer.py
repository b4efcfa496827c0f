"""Message composer: invitation -> rendered notification text."""

import logging
from typing import Optional

from invitations.application.exceptions import TemplateRenderingError
from invitations.application.interfaces import TemplateRenderer
from invitations.domain.models.invitation import DEFAULT_SALUTATION, Invitation
from invitations.domain.template_selector import TemplateSelector


class MessageComposer:
    """Selects the template for an invitation and renders it with the invitation as context."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        selector: TemplateSelector,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._renderer = renderer
        self._selector = selector
        self._logger = logger or logging.getLogger(__name__)

    def compose(self, invitation: Invitation) -> str:
        """Render the message for invitation. Any renderer failure becomes TemplateRenderingError."""
        template_id = self._selector.select(
            invitation.salutation or DEFAULT_SALUTATION,
            invitation.contact,
        )
        context = {"invitation": invitation}
        try:
            message = self._renderer.render(template_id, context)
        except Exception as e:
            self._logger.error(
                "message_render_failed",
                extra={"invitation_id": invitation.id, "template_id": template_id, "error": str(e)},
            )
            raise TemplateRenderingError(
                f"Rendering template <{template_id}> for invitation <{invitation.id}> failed: {e}"
            ) from e
        self._logger.info(
            "message_composed",
            extra={"invitation_id": invitation.id, "template_id": template_id},
        )
        return message
