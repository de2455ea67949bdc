"""Textual UI pieces for AssistCLI."""
