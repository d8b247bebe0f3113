"""Remote sync exceptions."""

from .base import DomainException


class RemoteSyncException(DomainException):
    """Raised when the remote document API returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="REMOTE_SYNC_ERROR",
        )
        self.status_code = status_code


class RemoteSyncTimeoutException(RemoteSyncException):
    """Raised when the remote document API times out."""

    def __init__(self):
        super().__init__(
            message="Remote sync request timed out",
            status_code=None,
        )
        self.code = "REMOTE_SYNC_TIMEOUT"


class RemoteAuthException(RemoteSyncException):
    """Raised when the access credential is rejected."""

    def __init__(self, status_code: int):
        super().__init__(
            message="Remote sync credential was rejected",
            status_code=status_code,
        )
        self.code = "REMOTE_AUTH_FAILED"


class RemoteDocumentNotFoundException(RemoteSyncException):
    """Raised when the remote document does not exist."""

    def __init__(self, document_id: str):
        super().__init__(
            message=f"Remote document not found: {document_id}",
            status_code=404,
        )
        self.code = "REMOTE_DOCUMENT_NOT_FOUND"
        self.document_id = document_id


class MalformedRemoteDocumentException(RemoteSyncException):
    """Raised when the remote document content cannot be parsed."""

    def __init__(self, message: str):
        super().__init__(
            message=f"Malformed remote document: {message}",
            status_code=None,
        )
        self.code = "REMOTE_DOCUMENT_MALFORMED"


class SyncNotConfiguredException(DomainException):
    """Raised when a sync action needs credentials that are not set."""

    def __init__(self, message: str = "Remote sync is not configured"):
        super().__init__(
            message=message,
            code="SYNC_NOT_CONFIGURED",
        )
