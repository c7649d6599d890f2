"""Chat boundary: request/response messages, prompts, and the controller."""

from lodestar.chat.controller import ChatController
from lodestar.chat.messages import (
    AiResponse,
    ErrorResponse,
    FileContent,
    FileRecord,
    GetFileContent,
    GetWorkspaceFiles,
    Request,
    Response,
    SendMessage,
    WorkspaceFiles,
    parse_request,
    parse_response,
)

__all__ = [
    "ChatController",
    # Requests
    "Request",
    "SendMessage",
    "GetWorkspaceFiles",
    "GetFileContent",
    "parse_request",
    # Responses
    "Response",
    "AiResponse",
    "ErrorResponse",
    "WorkspaceFiles",
    "FileRecord",
    "FileContent",
    "parse_response",
]
