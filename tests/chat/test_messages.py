"""Tests for boundary message models."""

import json

import pytest
from pydantic import ValidationError

from lodestar.chat.messages import (
    AiResponse,
    ErrorResponse,
    FileRecord,
    GetFileContent,
    GetWorkspaceFiles,
    SendMessage,
    WorkspaceFiles,
    parse_request,
    parse_response,
)


class TestParseRequest:
    """Tests for parse_request()."""

    def test_send_message(self) -> None:
        req = parse_request({
            "command": "sendMessage",
            "text": "explain @app.ts",
            "attachedFiles": ["/ws/a.ts"],
        })

        assert isinstance(req, SendMessage)
        assert req.text == "explain @app.ts"
        assert req.attached_files == ["/ws/a.ts"]

    def test_send_message_attachments_default_empty(self) -> None:
        req = parse_request({"command": "sendMessage", "text": "hi"})
        assert req.attached_files == []

    def test_get_workspace_files(self) -> None:
        req = parse_request({"command": "getWorkspaceFiles", "query": "app"})
        assert isinstance(req, GetWorkspaceFiles)
        assert req.query == "app"

    def test_json_text(self) -> None:
        req = parse_request(json.dumps({"command": "getFileContent", "filePath": "src/a.ts"}))
        assert isinstance(req, GetFileContent)
        assert req.file_path == "src/a.ts"

    def test_unknown_command_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_request({"command": "deleteEverything"})

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_request({"command": "getWorkspaceFiles"})

    def test_malformed_json_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_request("{nope")


class TestResponses:
    """Tests for response serialization."""

    def test_ai_response_wire_shape(self) -> None:
        wire = AiResponse(text="ok", referenced_files=["/ws/a.ts"]).to_wire()
        assert wire == {"command": "aiResponse", "text": "ok", "referencedFiles": ["/ws/a.ts"]}

    def test_error_wire_shape(self) -> None:
        assert ErrorResponse(text="Error: boom").to_wire() == {"command": "error", "text": "Error: boom"}

    def test_workspace_files_records(self) -> None:
        record = FileRecord.model_validate({
            "path": "src/a.ts",
            "fullPath": "/ws/src/a.ts",
            "name": "a.ts",
            "directory": "src",
        })
        wire = WorkspaceFiles(files=[record]).to_wire()

        assert wire["command"] == "workspaceFiles"
        assert wire["files"] == [{
            "path": "src/a.ts",
            "fullPath": "/ws/src/a.ts",
            "name": "a.ts",
            "directory": "src",
        }]

    def test_parse_response_dispatches_on_command(self) -> None:
        resp = parse_response({"command": "error", "text": "x"})
        assert isinstance(resp, ErrorResponse)
