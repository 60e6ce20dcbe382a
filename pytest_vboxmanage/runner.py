from __future__ import annotations

import re
import subprocess
from typing import NamedTuple

from pytest_vboxmanage.config import VBoxManageConfig
from pytest_vboxmanage.exceptions import (
    MachineNotFound,
    ToolNotFound,
    ToolReportedError,
    UnclassifiedExecutionError,
    VBoxManageError,
)

_PAT_ERROR = re.compile(r"^VBoxManage(?:\.exe)?: error: (.*?)\s*$", re.MULTILINE)
_PAT_MACHINE_NOT_FOUND = re.compile(r"Could not find a registered machine named '(.+)'")


class CommandResult(NamedTuple):
    stdout: str
    stderr: str


def _text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def classify_error(
    error: BaseException | None, stderr: str, stdout: str = ""
) -> VBoxManageError | None:
    """
    Map a failed invocation onto the VBoxManageError taxonomy.

    Returns None only when there was no error.
    """
    if error is None:
        return None
    if isinstance(error, (FileNotFoundError, PermissionError)):
        return ToolNotFound(f"VBoxManage not found: {error}")
    if isinstance(error, subprocess.CalledProcessError):
        m = _PAT_ERROR.search(stderr)
        if m:
            message = m.group(1)
            nf = _PAT_MACHINE_NOT_FOUND.search(message)
            if nf:
                return MachineNotFound(
                    message, nf.group(1), stdout=stdout, stderr=stderr
                )
            return ToolReportedError(message, stdout=stdout, stderr=stderr)
        return UnclassifiedExecutionError(
            str(error), returncode=error.returncode, stdout=stdout, stderr=stderr
        )
    return UnclassifiedExecutionError(str(error), stdout=stdout, stderr=stderr)


class VBoxManage:
    """
    Runs VBoxManage and turns its failures into VBoxManageError.

    Each call blocks until the child exits, or until config.timeout.
    """

    def __init__(self, config: VBoxManageConfig | None = None) -> None:
        self.config = config or VBoxManageConfig()

    @property
    def path(self) -> str:
        return self.config.path

    def _log(self, msg: str, *args: object) -> None:
        # a failing logger must not change the result of a command
        try:
            self.config.logger.debug(msg, *args)
        except Exception:
            pass

    def run(self, *args: str) -> CommandResult:
        cmd = [self.config.path, *args]
        self._log("executing: %s", " ".join(cmd))

        stdout = stderr = ""
        error: Exception | None = None
        try:
            cp = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                timeout=self.config.timeout,
                check=True,
            )
            stdout, stderr = cp.stdout, cp.stderr
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
            stdout, stderr = _text(e.stdout), _text(e.stderr)
            error = e
        except OSError as e:
            error = e

        if error is not None:
            self._log("Error: %s", error)
        if stdout:
            self._log("StdOut: %s", stdout)
        if stderr:
            self._log("StdErr: %s", stderr)

        exc = classify_error(error, stderr, stdout)
        if exc is not None:
            raise exc from error
        return CommandResult(stdout, stderr)

    def output(self, *args: str) -> str:
        return self.run(*args).stdout

    def call(self, *args: str) -> None:
        self.run(*args)
