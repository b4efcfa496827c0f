"""Sender identities: contact name -> from-address, with an organizational fallback."""

import logging
from typing import Mapping, Optional

from invitations.domain.template_selector import DEFAULT_IDENTITY, normalize_identity

logger = logging.getLogger(__name__)


class SenderDirectory:
    """Fixed table of named identities. Unknown or empty names resolve to the fallback address."""

    def __init__(
        self,
        addresses: Mapping[str, str],
        fallback_address: str,
        default_identity: str = DEFAULT_IDENTITY,
    ) -> None:
        if not fallback_address or not fallback_address.strip():
            raise ValueError("fallback sender address must not be empty")
        blank = [name for name, address in addresses.items() if not address or not address.strip()]
        if blank:
            raise ValueError(f"sender addresses must not be empty: {', '.join(sorted(blank))}")
        self._addresses = {name.strip().lower(): address for name, address in addresses.items()}
        self._fallback = fallback_address
        self._default_identity = default_identity

    def address_for(self, contact_name: Optional[str]) -> str:
        identity = normalize_identity(contact_name, self._default_identity)
        address = self._addresses.get(identity, self._fallback)
        logger.debug("sender_resolved", extra={"identity": identity, "from_address": address})
        return address
