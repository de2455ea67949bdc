"""Exceptions raised by the command layer."""


class CommandError(Exception):
    """Base class for command layer errors."""


class DuplicateCommandError(CommandError, ValueError):
    """Two built-in commands claim the same name or alias."""

    def __init__(self, token: str, existing: str, incoming: str):
        self.token = token
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Command token '{token}' of '{incoming}' is already used by '{existing}'"
        )


class CommandParseError(CommandError):
    """A custom command file could not be turned into a command."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class InvalidActionResultError(CommandError, TypeError):
    """A command action returned something that is not an ActionResult."""
