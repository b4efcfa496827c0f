"""JSON-file invitation repository. Whole-set import/export as a camelCase document array."""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from pydantic import TypeAdapter

from invitations.domain.models.invitation import Invitation
from invitations.domain.schemas.invitation import InvitationDocument

logger = logging.getLogger(__name__)

_DOCUMENTS = TypeAdapter(List[InvitationDocument])


class JsonFileInvitationRepository:
    """Reads and rewrites one JSON file. Implements InvitationRepository protocol."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load_all(self) -> List[Invitation]:
        return await asyncio.to_thread(self._read)

    async def save_all(self, invitations: Iterable[Invitation]) -> None:
        documents = [InvitationDocument.from_invitation(i) for i in invitations]
        payload = _DOCUMENTS.dump_json(documents, by_alias=True, indent=2)
        await asyncio.to_thread(self._write, payload)

    def _read(self) -> List[Invitation]:
        if not self._path.exists():
            logger.info("invitation_file_missing", extra={"path": str(self._path)})
            return []
        raw = self._path.read_bytes()
        if not raw.strip():
            return []
        return [d.to_invitation() for d in _DOCUMENTS.validate_json(raw)]

    def _write(self, payload: bytes) -> None:
        """Write to a temp file in the target directory, then atomically replace."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
