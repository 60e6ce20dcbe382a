"""Pytest configuration for pytest-vboxmanage tests."""

from unittest.mock import MagicMock

import pytest

from pytest_vboxmanage import VBoxManage

SHOWVMINFO = '''name="web"
groups="/"
ostype="Ubuntu (64-bit)"
UUID="3b5a4a5e-0c6e-4d7f-9d8a-1f2e3d4c5b6a"
CfgFile="/home/user/VirtualBox VMs/web/web.vbox"
memory=2048
cpus=2
VMState="poweroff"
VMStateChangeTime="2024-01-01T00:00:00.000000000"
nic1="nat"
Forwarding(0)="ssh,tcp,,2222,,22"
Forwarding(1)="http,tcp,127.0.0.1,8080,10.0.2.15,80"
SharedFolderNameMachineMapping1="alpha"
SharedFolderPathMachineMapping1="/host/alpha"
SharedFolderPathTransientMapping1="/host/beta"
SharedFolderNameTransientMapping1="beta"
'''


@pytest.fixture
def showvminfo_output() -> str:
    return SHOWVMINFO


@pytest.fixture
def fake_vbm():
    """A VBoxManage stand-in whose output() returns canned text."""
    vbm = MagicMock(spec=VBoxManage)
    vbm.output.return_value = SHOWVMINFO
    return vbm
