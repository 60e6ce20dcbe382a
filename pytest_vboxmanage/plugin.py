from __future__ import annotations

import logging
import os
from typing import Generator

import pytest

from pytest_vboxmanage.config import VBoxManageConfig, default_path
from pytest_vboxmanage.runner import VBoxManage


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "vboxmanage_path",
        "Path to the VBoxManage binary; if omitted it is looked up from the environment.",
        default="",
    )
    parser.addini(
        "vboxmanage_timeout",
        "Seconds to wait for each VBoxManage command (empty waits forever).",
        default="",
    )

    grp = parser.getgroup("vboxmanage")
    grp.addoption(
        "--vboxmanage-path",
        action="store",
        dest="vboxmanage_path",
        help="Path to the VBoxManage binary",
    )
    grp.addoption(
        "--vboxmanage-timeout",
        action="store",
        dest="vboxmanage_timeout",
        help="Seconds to wait for each VBoxManage command",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: needs a working VirtualBox installation"
    )


def _read_opt(config: pytest.Config, name: str, env: str, default: str) -> str:
    from_cli = config.getoption(name, default=None)
    if from_cli:
        return str(from_cli)
    from_ini = config.getini(name)
    if isinstance(from_ini, str) and from_ini.strip():
        return from_ini.strip()
    from_env = os.getenv(env)
    if from_env:
        return from_env.strip()
    return default


def resolve_config(config: pytest.Config) -> VBoxManageConfig:
    path = _read_opt(config, "vboxmanage_path", "VBOXMANAGE_PATH", "") or default_path()

    raw_timeout = _read_opt(config, "vboxmanage_timeout", "VBOXMANAGE_TIMEOUT", "")
    timeout: float | None = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise pytest.UsageError(
                f"Invalid vboxmanage_timeout={raw_timeout!r}. Must be a number of seconds."
            ) from e
        if timeout <= 0:
            raise pytest.UsageError(
                f"Invalid vboxmanage_timeout={raw_timeout!r}. Must be positive."
            )

    return VBoxManageConfig(
        path=path,
        timeout=timeout,
        logger=logging.getLogger("pytest_vboxmanage.runner"),
    )


@pytest.fixture(scope="session")
def vboxmanage(request: pytest.FixtureRequest) -> Generator[VBoxManage, None, None]:
    yield VBoxManage(resolve_config(request.config))
