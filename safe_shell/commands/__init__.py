from .copy import CopyCommand
from .makedir import MakeDirCommand
from .patch_config import PatchConfigCommand
from .placeholders import (
    AcknowledgeCommand,
    config_manager_command,
    partition_control_command,
    reboot_command,
)
from .remove import RemoveCommand
from .signal_process import SignalProcessCommand

__all__ = [
    "RemoveCommand",
    "MakeDirCommand",
    "SignalProcessCommand",
    "PatchConfigCommand",
    "CopyCommand",
    "AcknowledgeCommand",
    "config_manager_command",
    "reboot_command",
    "partition_control_command",
]
