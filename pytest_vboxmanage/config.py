from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Mapping


def default_path(
    environ: Mapping[str, str] | None = None, platform: str | None = None
) -> str:
    """
    Locate the VBoxManage binary.

    VBOXMANAGE_PATH wins when set. On Windows the installer exports
    VBOX_INSTALL_PATH, which does not put the tool on PATH.
    """
    env = os.environ if environ is None else environ
    plat = sys.platform if platform is None else platform

    override = env.get("VBOXMANAGE_PATH", "").strip()
    if override:
        return override
    install = env.get("VBOX_INSTALL_PATH", "").strip()
    if install and plat.startswith("win"):
        return os.path.join(install, "VBoxManage.exe")
    return "VBoxManage"


@dataclass(frozen=True)
class VBoxManageConfig:
    path: str = field(default_factory=default_path)
    timeout: float | None = None
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("pytest_vboxmanage.runner")
    )
