"""Prompt templates for the code assistant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lodestar.models.protocol import GenerateOptions, Message

if TYPE_CHECKING:
    from lodestar.context.assembler import ContextBlock
    from lodestar.context.ide import EditorContext


SYSTEM_PROMPT = """\
You are an expert AI code assistant integrated into the editor. Your role is to:

1. Help users write, debug, and improve their code
2. Provide clear explanations of code concepts and implementations
3. Generate high-quality, well-commented code snippets
4. Suggest best practices and optimizations
5. Help with code reviews and refactoring

Guidelines:
- Always provide working, tested code when possible
- Include clear comments explaining complex logic
- Follow the coding style and conventions of the project
- Suggest modern, efficient solutions
- Be concise but thorough in explanations
- If you're unsure about something, ask for clarification"""


# Sampling settings per task; chat uses the model's configured defaults
TASK_OPTIONS: dict[str, GenerateOptions] = {
    "explain": GenerateOptions(temperature=0.2, max_tokens=1500),
    "review": GenerateOptions(temperature=0.2, max_tokens=2000),
    "refactor": GenerateOptions(temperature=0.1, max_tokens=2048),
}


def system_prompt(workspace_context: str | None = None) -> Message:
    """The assistant persona, optionally followed by workspace context."""
    content = SYSTEM_PROMPT
    if workspace_context:
        content += f"\n\nCurrent workspace context:\n{workspace_context}"
    return Message(role="system", content=content)


def build_messages(
    block: ContextBlock,
    editor_context: EditorContext | None = None,
) -> tuple[Message, ...]:
    """System + user messages for a chat request."""
    workspace_context = editor_context.describe() if editor_context else None
    return (
        system_prompt(workspace_context),
        Message(role="user", content=block.render()),
    )


def explain_prompt(code: str, context: str | None = None) -> tuple[Message, ...]:
    content = (
        "Please explain the following code in detail, including what it does, "
        f"how it works, and any potential improvements:\n\n```\n{code}\n```"
    )
    if context:
        content += f"\n\nAdditional context: {context}"
    return (system_prompt(), Message(role="user", content=content))


def review_prompt(code: str, language: str | None = None) -> tuple[Message, ...]:
    lang = language or ""
    content = (
        f"Please review the following {lang} code and provide feedback on:\n"
        "1. Code quality and best practices\n"
        "2. Potential bugs or issues\n"
        "3. Performance optimizations\n"
        "4. Security considerations\n"
        "5. Suggestions for improvement\n"
        "\n"
        "Code to review:\n"
        f"```{lang}\n{code}\n```"
    )
    return (system_prompt(), Message(role="user", content=content))


def refactor_prompt(
    code: str,
    requirements: str,
    language: str | None = None,
) -> tuple[Message, ...]:
    lang = language or ""
    content = (
        f"Please refactor the following {lang} code based on these requirements: "
        f"{requirements}\n"
        "\n"
        "Original code:\n"
        f"```{lang}\n{code}\n```\n"
        "\n"
        "Please provide the refactored code with explanations of the changes made."
    )
    return (system_prompt(), Message(role="user", content=content))
