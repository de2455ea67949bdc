"""Core services shared by the command layer and the UI."""
