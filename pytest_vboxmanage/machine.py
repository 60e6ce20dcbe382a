from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from pytest_vboxmanage.exceptions import MalformedRecord
from pytest_vboxmanage.forwarding import PFRule, PortForwardingTable
from pytest_vboxmanage.properties import iter_properties
from pytest_vboxmanage.runner import VBoxManage
from pytest_vboxmanage.sharedfolders import SharedFolder, SharedFolderTable

logger = logging.getLogger(__name__)

_PAT_NAME_UUID = re.compile(r'^"(.+)" \{([0-9a-fA-F-]+)\}\s*$')


class MachineState(str, Enum):
    POWEROFF = "poweroff"
    RUNNING = "running"
    PAUSED = "paused"
    SAVED = "saved"
    ABORTED = "aborted"
    STARTING = "starting"
    STOPPING = "stopping"
    SAVING = "saving"
    RESTORING = "restoring"
    GURU_MEDITATION = "gurumeditation"

    @property
    def stopped(self) -> bool:
        return self in (MachineState.POWEROFF, MachineState.ABORTED)


@dataclass
class MachineInfo:
    name: str = ""
    uuid: str = ""
    state: MachineState | None = None
    ostype: str = ""
    cpus: int = 0
    memory: int = 0
    cfg_file: str = ""
    properties: dict[str, str] = field(default_factory=dict)
    forwarding: PortForwardingTable = field(default_factory=PortForwardingTable)
    shared_folders: list[SharedFolder] = field(default_factory=list)


def _int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def parse_machine_info(text: str) -> MachineInfo:
    """
    Build a MachineInfo from `showvminfo --machinereadable` output.

    Malformed forwarding or shared folder lines are logged and skipped so
    one bad line does not discard the rest of the machine.
    """
    info = MachineInfo()
    folders = SharedFolderTable()

    for key, value in iter_properties(text):
        info.properties[key] = value
        for table in (info.forwarding, folders):
            try:
                table.accept(key, value)
            except MalformedRecord as e:
                logger.warning("skipping %s", e)

    props = info.properties
    info.name = props.get("name", "")
    info.uuid = props.get("UUID", "")
    info.ostype = props.get("ostype", "")
    info.cpus = _int(props.get("cpus", ""))
    info.memory = _int(props.get("memory", ""))
    info.cfg_file = props.get("CfgFile", "")
    try:
        info.state = MachineState(props.get("VMState", ""))
    except ValueError:
        info.state = None
    info.shared_folders = folders.list()
    return info


def list_machines(vbm: VBoxManage) -> dict[str, str]:
    """Registered machines as name -> UUID."""
    machines: dict[str, str] = {}
    for raw in vbm.output("list", "vms").splitlines():
        m = _PAT_NAME_UUID.match(raw)
        if m:
            machines[m.group(1)] = m.group(2)
    return machines


class Machine:
    """
    A registered virtual machine.

    Usage:

        machine = Machine.describe(VBoxManage(), "web")
        rule = machine.pf_rule(guest_port=22)
    """

    def __init__(self, vbm: VBoxManage, info: MachineInfo) -> None:
        if not info.name:
            raise ValueError("machine info has no name")
        self._vbm = vbm
        self._info = info

    @classmethod
    def describe(cls, vbm: VBoxManage, name: str) -> Machine:
        if not name:
            raise ValueError("machine name must not be empty")
        out = vbm.output("showvminfo", name, "--machinereadable")
        info = parse_machine_info(out)
        if not info.name:
            info.name = name
        return cls(vbm, info)

    def refresh(self) -> None:
        self._info = Machine.describe(self._vbm, self.name)._info

    @property
    def info(self) -> MachineInfo:
        return self._info

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def state(self) -> MachineState | None:
        return self._info.state

    @property
    def stopped(self) -> bool:
        return self._info.state is not None and self._info.state.stopped

    @property
    def shared_folders(self) -> list[SharedFolder]:
        return list(self._info.shared_folders)

    def pf_rule(self, name: str = "", guest_port: int = 0) -> PFRule | None:
        return self._info.forwarding.lookup(name, guest_port)

    def shared_folder_add(
        self, name: str, path: str, transient: bool | None = None
    ) -> None:
        """Persistent mapping when the machine is stopped, transient otherwise."""
        if transient is None:
            transient = not self.stopped
        args = ["sharedfolder", "add", self.name, "--name", name, "--hostpath", path]
        if transient:
            args.append("--transient")
        self._vbm.call(*args)

    def shared_folder_remove(self, name: str, transient: bool | None = None) -> None:
        if transient is None:
            transient = not self.stopped
        args = ["sharedfolder", "remove", self.name, "--name", name]
        if transient:
            args.append("--transient")
        self._vbm.call(*args)

    def pf_rule_add(self, rule: PFRule, nic: int = 1) -> None:
        self._natpf(nic, rule.format())

    def pf_rule_delete(self, name: str, nic: int = 1) -> None:
        self._natpf(nic, "delete", name)

    def _natpf(self, nic: int, *args: str) -> None:
        if nic < 1:
            raise ValueError(f"invalid NIC number: {nic}")
        if self.stopped:
            self._vbm.call("modifyvm", self.name, f"--natpf{nic}", *args)
        else:
            self._vbm.call("controlvm", self.name, f"natpf{nic}", *args)
