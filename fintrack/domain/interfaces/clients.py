"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fintrack.domain.entities import Transaction


class RemoteDocumentClient(ABC):
    """
    Abstract client for the remote sync document.

    One document holds one JSON file with the whole transaction list.
    Every call is a single request: no retries, no backoff.
    """

    @abstractmethod
    async def create(self, credential: str, transactions: List[Transaction]) -> str:
        """
        Allocate a new remote document seeded with the transactions.

        Args:
            credential: Opaque bearer credential
            transactions: The list to store

        Returns:
            The new document identifier

        Raises:
            RemoteAuthException: If the credential is rejected
            RemoteSyncException: If the API returns an error
            RemoteSyncTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def update(
        self,
        credential: str,
        document_id: str,
        transactions: List[Transaction],
    ) -> None:
        """
        Overwrite the document content wholesale.

        Raises:
            RemoteAuthException: If the credential is rejected
            RemoteDocumentNotFoundException: If the document doesn't exist
            RemoteSyncException: If the API returns an error
        """
        ...

    @abstractmethod
    async def fetch(self, credential: str, document_id: str) -> Optional[Dict[str, Any]]:
        """
        Read the document content.

        Returns:
            The parsed JSON content, or None if the data file is absent

        Raises:
            RemoteAuthException: If the credential is rejected
            RemoteDocumentNotFoundException: If the document doesn't exist
            MalformedRemoteDocumentException: If the content is not JSON
            RemoteSyncException: If the API returns an error
        """
        ...
