from pytest_vboxmanage.config import VBoxManageConfig, default_path
from pytest_vboxmanage.exceptions import (
    MachineNotFound,
    MalformedRecord,
    ToolNotFound,
    ToolReportedError,
    UnclassifiedExecutionError,
    VBoxManageError,
)
from pytest_vboxmanage.forwarding import PFProto, PFRule, PortForwardingTable
from pytest_vboxmanage.machine import (
    Machine,
    MachineInfo,
    MachineState,
    list_machines,
    parse_machine_info,
)
from pytest_vboxmanage.properties import iter_properties, parse_line
from pytest_vboxmanage.runner import CommandResult, VBoxManage, classify_error
from pytest_vboxmanage.sharedfolders import SharedFolder, SharedFolderTable

__all__ = [
    "CommandResult",
    "Machine",
    "MachineInfo",
    "MachineNotFound",
    "MachineState",
    "MalformedRecord",
    "PFProto",
    "PFRule",
    "PortForwardingTable",
    "SharedFolder",
    "SharedFolderTable",
    "ToolNotFound",
    "ToolReportedError",
    "UnclassifiedExecutionError",
    "VBoxManage",
    "VBoxManageConfig",
    "VBoxManageError",
    "classify_error",
    "default_path",
    "iter_properties",
    "list_machines",
    "parse_line",
    "parse_machine_info",
]
