"""
Well-known framework types.

Handlers receive these from the hosting framework rather than from the
request payload, so they never appear as described parameters. Upload
and multi-value types are recognized by the classifier for form and
query binding.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union


@dataclass
class Request:
    """The incoming HTTP request."""
    method: str = "GET"
    path: str = "/"
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class HttpResponse:
    """The outgoing HTTP response being built by the host."""
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class Identity:
    """
    Authenticated principal (claims) attached to the request.

    Attributes:
        id: Principal identifier
        claims: Claim name to value
    """
    id: str = ""
    claims: Dict[str, Any] = field(default_factory=dict)


class CancellationToken:
    """Signals that the caller abandoned the request."""

    def __init__(self, cancelled: bool = False):
        self.cancelled = cancelled


@dataclass
class RequestCtx:
    """
    Request context provided to handlers.

    Attributes:
        request: The HTTP request
        response: The HTTP response
        identity: Authenticated identity (if any)
        container: Request-scoped service container
        state: Additional state dictionary
    """
    request: Request
    response: Optional[HttpResponse] = None
    identity: Optional[Identity] = None
    container: Optional[Any] = None
    state: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UploadFile:
    """Uploaded file part of a multipart form."""
    filename: str
    content_type: str
    size: Optional[int] = None


class UploadFileCollection(Sequence[UploadFile]):
    """All files posted in a multipart form."""

    def __init__(self, files: Optional[List[UploadFile]] = None):
        self._files = list(files or [])

    def __getitem__(self, index):
        return self._files[index]

    def __len__(self) -> int:
        return len(self._files)

    def get_file(self, filename: str) -> Optional[UploadFile]:
        for upload in self._files:
            if upload.filename == filename:
                return upload
        return None


class StringValues(Sequence[str]):
    """Zero, one or many string values of a repeated query key or header."""

    def __init__(self, values: Union[None, str, List[str]] = None):
        if values is None:
            self._values: List[str] = []
        elif isinstance(values, str):
            self._values = [values]
        else:
            self._values = list(values)

    def __getitem__(self, index):
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __str__(self) -> str:
        return ",".join(self._values)


class Result:
    """
    Base class for framework handler results.

    A handler that returns a Result decides its status and payload at
    runtime, so its response shape is not statically known.
    """

    status_code: int = 200


# Types resolved from the hosting framework, never from the request.
FRAMEWORK_TYPES = (RequestCtx, Request, HttpResponse, Identity, CancellationToken)

# File types bound from multipart form data.
FILE_TYPES = (UploadFile, UploadFileCollection)
