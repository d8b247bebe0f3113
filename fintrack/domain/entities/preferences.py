"""User preferences and remote sync credentials."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class SyncCredentials:
    """
    Access credential and remote document identifier.

    Sync is active only when both are present.
    """

    credential: Optional[str] = None
    document_id: Optional[str] = None

    @property
    def is_enabled(self) -> bool:
        return bool(self.credential) and bool(self.document_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"credential": self.credential, "documentId": self.document_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SyncCredentials":
        return cls(
            credential=data.get("credential") or None,
            document_id=data.get("documentId") or None,
        )
