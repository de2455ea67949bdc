"""Application configuration model."""

from pydantic import BaseModel, ConfigDict

from assistcli.models.approval import ApprovalMode

# Settings written back to disk by ConfigManager.save_config
USER_FIELDS = frozenset({"approval_mode", "debug_logging"})


class AppConfig(BaseModel):
    """Merged user and project settings."""

    approval_mode: ApprovalMode = ApprovalMode.DEFAULT
    command_dir: str = ".assistcli/commands"
    debug_logging: bool = False
    verbose: bool = False

    model_config = ConfigDict(validate_assignment=True, extra="ignore")
