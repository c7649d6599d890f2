"""Boundary messages exchanged with the editor front-end.

Every message is a JSON object tagged by ``command``. Requests form a
closed discriminated union; anything else fails validation.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def _to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    """Base model with camelCase JSON serialization."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys, as the front-end expects."""
        return self.model_dump(by_alias=True)


# =============================================================================
# Requests
# =============================================================================


class SendMessage(CamelModel):
    """Chat prompt with optional explicitly attached files."""

    command: Literal["sendMessage"] = "sendMessage"
    text: str
    attached_files: list[str] = Field(default_factory=list)


class GetWorkspaceFiles(CamelModel):
    """As-you-type file suggestions for the @ picker."""

    command: Literal["getWorkspaceFiles"] = "getWorkspaceFiles"
    query: str


class GetFileContent(CamelModel):
    """Preview of one file."""

    command: Literal["getFileContent"] = "getFileContent"
    file_path: str


Request = Annotated[
    SendMessage | GetWorkspaceFiles | GetFileContent,
    Field(discriminator="command"),
]


# =============================================================================
# Responses
# =============================================================================


class AiResponse(CamelModel):
    command: Literal["aiResponse"] = "aiResponse"
    text: str
    referenced_files: list[str] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    command: Literal["error"] = "error"
    text: str


class FileRecord(CamelModel):
    """Suggestion entry for the @ picker."""

    path: str
    full_path: str
    name: str
    directory: str


class WorkspaceFiles(CamelModel):
    command: Literal["workspaceFiles"] = "workspaceFiles"
    files: list[FileRecord] = Field(default_factory=list)


class FileContent(CamelModel):
    command: Literal["fileContent"] = "fileContent"
    file_path: str
    content: str


Response = Annotated[
    AiResponse | ErrorResponse | WorkspaceFiles | FileContent,
    Field(discriminator="command"),
]


_request_adapter: TypeAdapter[Request] = TypeAdapter(Request)
_response_adapter: TypeAdapter[Response] = TypeAdapter(Response)


def parse_request(payload: dict[str, Any] | str | bytes) -> Request:
    """Validate a request payload (dict or JSON text).

    Raises:
        pydantic.ValidationError: Unknown command or malformed fields
    """
    if isinstance(payload, (str, bytes)):
        return _request_adapter.validate_json(payload)
    return _request_adapter.validate_python(payload)


def parse_response(payload: dict[str, Any] | str | bytes) -> Response:
    """Validate a response payload (dict or JSON text)."""
    if isinstance(payload, (str, bytes)):
        return _response_adapter.validate_json(payload)
    return _response_adapter.validate_python(payload)
