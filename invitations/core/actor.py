"""Actor resolution backed by the request-scoped context variable."""

from invitations.core.context import actor_id_ctx


class ContextActorProvider:
    """Resolve the current actor from actor_id_ctx. Implements ActorProvider protocol."""

    def __init__(self, default_actor: str = "anonymous") -> None:
        self._default_actor = default_actor

    def current_actor(self) -> str:
        return actor_id_ctx.get() or self._default_actor
