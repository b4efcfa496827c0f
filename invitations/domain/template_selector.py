"""Template selection: (salutation, contact) -> template id. Pure, table-driven."""

from typing import Mapping, Optional

from invitations.domain.models.invitation import Salutation

DEFAULT_IDENTITY = "default"

TEMPLATE_PREFIXES: Mapping[Salutation, str] = {
    Salutation.FORMAL_MALE: "email_formal_male",
    Salutation.FORMAL_FEMALE: "email_formal_female",
    Salutation.INFORMAL_FEMALE: "email_informal_female",
    Salutation.INFORMAL_MALE: "email_informal_male",
}


def normalize_identity(contact_name: Optional[str], default_identity: str = DEFAULT_IDENTITY) -> str:
    """Contact name as identity token; empty or missing maps to the default identity."""
    if contact_name is None or not contact_name.strip():
        return default_identity
    return contact_name.strip().lower()


class TemplateSelector:
    """
    Maps salutation and identity to a template id of the form <prefix>_<identity>.
    The prefix table must cover every Salutation; a gap is a programming error and
    fails at construction, so select() never needs a fallback.
    """

    def __init__(
        self,
        prefixes: Mapping[Salutation, str] = TEMPLATE_PREFIXES,
        default_identity: str = DEFAULT_IDENTITY,
    ) -> None:
        missing = [s.value for s in Salutation if not prefixes.get(s)]
        if missing:
            raise ValueError(f"template prefix table is missing salutations: {', '.join(missing)}")
        self._prefixes = dict(prefixes)
        self._default_identity = default_identity

    def select(self, salutation: Salutation, contact_name: Optional[str]) -> str:
        identity = normalize_identity(contact_name, self._default_identity)
        return f"{self._prefixes[salutation]}_{identity}"


_default_selector = TemplateSelector()


def select_template(salutation: Salutation, contact_name: Optional[str]) -> str:
    """Select template id with the built-in prefix table and default identity."""
    return _default_selector.select(salutation, contact_name)
