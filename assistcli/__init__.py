"""AssistCLI - slash commands and approval modes for a terminal assistant."""

__version__ = "0.3.0"
