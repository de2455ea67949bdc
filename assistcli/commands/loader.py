"""Discovery of user-authored slash commands.

Custom commands are markdown files. The optional YAML frontmatter describes
the command and the body is the prompt sent to the model when it runs.

## Directory Structure
Commands are loaded from, in discovery order:
- ~/.assistcli/commands/ (user global, named ``user:<name>``)
- <project>/.assistcli/commands/ (project local, named ``project:<name>``)

Subdirectories become extra name segments: ``git/commit.md`` in the project
directory is ``project:git:commit``.

## Command File Format
```markdown
---
description: "Review the staged diff"
name: review        # optional, replaces the derived name
alt_name: rv        # optional alias
---

Review the following change carefully: {{args}}
```
"""

from __future__ import annotations

import asyncio
import functools
import logging
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from assistcli.commands.errors import CommandParseError
from assistcli.commands.types import (
    CommandContext,
    CommandDescriptor,
    CommandKind,
    SubmitPromptAction,
)
from assistcli.core.paths import get_paths

logger = logging.getLogger(__name__)

ARGS_PLACEHOLDER = "{{args}}"

_FRONTMATTER_RE = re.compile(r"\A---\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)


class CustomCommandFrontmatter(BaseModel):
    """Fields accepted in a command file's frontmatter."""

    name: Optional[str] = Field(default=None, min_length=1)
    alt_name: Optional[str] = Field(default=None, alias="altName", min_length=1)
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    @field_validator("name", "alt_name")
    @classmethod
    def drop_command_prefix(cls, value: Optional[str]) -> Optional[str]:
        # Written as typed ("/review"); tokens are stored without the prefix
        if value is not None and value.startswith("/"):
            value = value[1:]
            if not value:
                raise ValueError("command name is empty")
        return value


def render_prompt(template: str, args: str) -> str:
    """Fill the ``{{args}}`` placeholder of a command body.

    Without a placeholder, non-empty arguments are appended after a blank line.
    """
    if ARGS_PLACEHOLDER in template:
        return template.replace(ARGS_PLACEHOLDER, args)
    if args:
        return f"{template}\n\n{args}"
    return template


def _submit_prompt(template: str, context: CommandContext, args: str) -> SubmitPromptAction:
    return SubmitPromptAction(content=render_prompt(template, args))


def derive_command_name(scope: str, root: Path, path: Path) -> str:
    """Build ``<scope>:<segments>`` from a command file's relative path."""
    relative = path.relative_to(root).with_suffix("")
    segments = [part.replace(" ", "-").lower() for part in relative.parts]
    return ":".join([scope, *segments])


def parse_command_file(scope: str, root: Path, path: Path) -> CommandDescriptor:
    """Parse one command file into a descriptor.

    Raises:
        CommandParseError: If the file cannot be read or describes no
            valid command
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CommandParseError(path, f"unreadable: {e}") from e

    content = content.replace("\r\n", "\n")
    meta = CustomCommandFrontmatter()
    body = content

    if content.startswith("---\n"):
        match = _FRONTMATTER_RE.match(content)
        if not match:
            raise CommandParseError(path, "unterminated frontmatter")
        try:
            data = yaml.safe_load(match.group(1) or "")
        except yaml.YAMLError as e:
            raise CommandParseError(path, f"invalid YAML frontmatter: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise CommandParseError(path, "frontmatter must be a mapping")
        try:
            meta = CustomCommandFrontmatter.model_validate(data)
        except ValidationError as e:
            raise CommandParseError(path, f"invalid frontmatter: {e}") from e
        body = content[match.end():]

    body = body.strip()
    if not body:
        raise CommandParseError(path, "command has no prompt body")

    stem = path.relative_to(root).with_suffix("").as_posix()
    name = meta.name or derive_command_name(scope, root, path)
    try:
        return CommandDescriptor(
            name=name,
            alt_name=meta.alt_name,
            description=meta.description or f"A custom command for {stem}",
            action=functools.partial(_submit_prompt, body),
            kind=CommandKind.CUSTOM,
            source_path=path,
        )
    except ValueError as e:
        raise CommandParseError(path, str(e)) from e


class CustomCommandLoader:
    """Finds and parses custom command files.

    Every ``discover`` call is an independent pass over the directories; it
    keeps no state between calls.
    """

    def __init__(
        self,
        command_dirs: Optional[list[tuple[str, Path]]] = None,
        working_dir: Optional[Path] = None,
        command_dir: Optional[str] = None,
    ) -> None:
        """Initialize the loader.

        Args:
            command_dirs: ``(scope, directory)`` pairs in discovery order.
                Defaults to the user then project command directories.
            working_dir: Project directory used for the defaults
            command_dir: Configured project command directory, see
                ``AppConfig.command_dir``
        """
        if command_dirs is None:
            paths = get_paths(working_dir or Path.cwd(), command_dir=command_dir)
            command_dirs = paths.get_command_dirs()
        self._dirs = list(command_dirs)

    @property
    def command_dirs(self) -> list[tuple[str, Path]]:
        return list(self._dirs)

    async def discover(self) -> list[CommandDescriptor]:
        """Run one discovery pass.

        Files are read off the event loop. A file that fails to parse is
        logged and skipped; a missing directory contributes nothing.

        Returns:
            Descriptors in discovery order: directory order, then path order
        """
        entries: list[tuple[str, Path, Path]] = []
        for scope, directory in self._dirs:
            files = await asyncio.to_thread(self._find_command_files, directory)
            entries.extend((scope, directory, path) for path in files)

        results = await asyncio.gather(
            *(self._load(scope, root, path) for scope, root, path in entries)
        )
        commands = [command for command in results if command is not None]
        logger.debug(f"Discovered {len(commands)} custom commands from {len(entries)} files")
        return commands

    async def _load(self, scope: str, root: Path, path: Path) -> Optional[CommandDescriptor]:
        try:
            return await asyncio.to_thread(parse_command_file, scope, root, path)
        except CommandParseError as e:
            logger.warning(f"Skipping custom command {e.path}: {e.reason}")
            return None

    @staticmethod
    def _find_command_files(directory: Path) -> list[Path]:
        if not directory.is_dir():
            return []
        try:
            return sorted(p for p in directory.glob("**/*.md") if p.is_file())
        except OSError as e:
            logger.warning(f"Failed to scan command directory {directory}: {e}")
            return []
