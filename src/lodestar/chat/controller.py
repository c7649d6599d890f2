"""Chat controller: one handler per boundary request.

Every failure a user can cause ends up as an ``error`` response rather
than an exception, so a front-end loop never has to guard calls.
"""

from __future__ import annotations

import logging
from typing import Any, assert_never

from pydantic import ValidationError

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
)
from lodestar.chat.prompts import (
    TASK_OPTIONS,
    build_messages,
    explain_prompt,
    refactor_prompt,
    review_prompt,
)
from lodestar.context.assembler import ContextAssembler, ContextBlock
from lodestar.context.ide import EditorContext
from lodestar.context.reader import ContentReader
from lodestar.context.reference import extract_mentions
from lodestar.foundation.config import LodestarConfig
from lodestar.foundation.errors import LodestarError
from lodestar.foundation.types.config import SearchConfig
from lodestar.models import Message, ModelProtocol, create_model
from lodestar.workspace.finder import FileFinder
from lodestar.workspace.resolver import PathResolver
from lodestar.workspace.roots import Workspace

logger = logging.getLogger(__name__)


class ChatController:
    """Routes front-end requests through the context pipeline and the model.

    Example:
        controller = ChatController(Workspace.from_paths(["/ws"]), MockModel())
        response = await controller.handle(SendMessage(text="@readme summarize this"))
    """

    def __init__(
        self,
        workspace: Workspace,
        model: ModelProtocol,
        *,
        search_config: SearchConfig | None = None,
        editor_context: EditorContext | None = None,
    ):
        self.workspace = workspace
        self.model = model
        self.search_config = search_config or SearchConfig()
        self.editor_context = editor_context
        self.reader = ContentReader()
        self.assembler = ContextAssembler(workspace, self.search_config, self.reader)
        self.resolver = PathResolver(workspace, self.search_config)
        self.finder = FileFinder(workspace, self.search_config)

    @classmethod
    def from_config(
        cls,
        config: LodestarConfig,
        *,
        editor_context: EditorContext | None = None,
        model: ModelProtocol | None = None,
    ) -> ChatController:
        """Build a controller from loaded config.

        Workspace roots come from the editor's folders when it reports any,
        otherwise from config.
        """
        if editor_context and editor_context.workspace_folders:
            workspace = Workspace.from_editor(editor_context)
        else:
            workspace = Workspace.from_paths(config.workspace.roots)
        return cls(
            workspace,
            model or create_model(config.model),
            search_config=config.search,
            editor_context=editor_context,
        )

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def handle(self, request: Request) -> Response:
        """Handle one validated request."""
        match request:
            case SendMessage(text=text, attached_files=attached):
                return await self.send_message(text, attached)
            case GetWorkspaceFiles(query=query):
                return await self.workspace_files(query)
            case GetFileContent(file_path=file_path):
                return await self.file_content(file_path)
            case _:
                assert_never(request)

    async def handle_payload(self, payload: dict[str, Any] | str | bytes) -> dict[str, Any]:
        """Validate, handle, and serialize one raw request."""
        try:
            request = parse_request(payload)
        except ValidationError as e:
            logger.debug("Rejected request: %s", e)
            return ErrorResponse(text=f"Error: invalid request ({e.error_count()} error(s))").to_wire()
        response = await self.handle(request)
        return response.to_wire()

    # =========================================================================
    # Handlers
    # =========================================================================

    async def build_context(self, text: str, attached_files: list[str] | None = None) -> ContextBlock:
        """Extract mentions from text and assemble the context block."""
        tokens = extract_mentions(text)
        return await self.assembler.assemble(text, attached_files or [], tokens)

    async def send_message(self, text: str, attached_files: list[str] | None = None) -> Response:
        try:
            block = await self.build_context(text, attached_files)
            if block.dropped_mentions:
                logger.debug("Unresolved mentions: %s", ", ".join(block.dropped_mentions))
            result = await self.model.generate(build_messages(block, self.editor_context))
        except LodestarError as e:
            logger.warning("Chat request failed: %s", e)
            return ErrorResponse(text=f"Error: {e.message}")

        return AiResponse(text=result.text, referenced_files=block.referenced_files)

    async def workspace_files(self, query: str) -> Response:
        try:
            candidates = await self.finder.suggest(query)
        except LodestarError as e:
            logger.warning("File search for %r failed: %s", query, e)
            candidates = []
        return WorkspaceFiles(
            files=[FileRecord.model_validate(c.to_record()) for c in candidates],
        )

    async def file_content(self, file_path: str) -> Response:
        try:
            self.workspace.require_open()
            path = await self.resolver.resolve(file_path)
            content = await self.reader.read(path)
        except (LodestarError, OSError) as e:
            logger.debug("getFileContent %r failed: %s", file_path, e)
            return ErrorResponse(text=f"Could not read file: {file_path}")
        return FileContent(file_path=file_path, content=content)

    # =========================================================================
    # Code tasks (no context assembly)
    # =========================================================================

    async def _run_task(self, task: str, messages: tuple[Message, ...]) -> str:
        result = await self.model.generate(messages, options=TASK_OPTIONS[task])
        return result.text

    async def explain(self, code: str, context: str | None = None) -> str:
        """Explain a code snippet."""
        return await self._run_task("explain", explain_prompt(code, context))

    async def review(self, code: str, language: str | None = None) -> str:
        """Review a code snippet."""
        return await self._run_task("review", review_prompt(code, language))

    async def refactor(self, code: str, requirements: str, language: str | None = None) -> str:
        """Refactor a code snippet to the given requirements."""
        return await self._run_task("refactor", refactor_prompt(code, requirements, language))
