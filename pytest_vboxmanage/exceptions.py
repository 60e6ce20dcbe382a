from __future__ import annotations


class VBoxManageError(Exception):
    """Base exception for VBoxManage errors."""


class MalformedRecord(VBoxManageError):
    """A recognised property line could not be parsed into a record."""

    def __init__(self, key: str, value: str, reason: str) -> None:
        super().__init__(f"Bad property: {reason} ({key}={value})")
        self.key = key
        self.value = value
        self.reason = reason


class ToolNotFound(VBoxManageError):
    """VBoxManage binary could not be located or executed."""


class ToolReportedError(VBoxManageError):
    """VBoxManage ran and reported an error of its own."""

    def __init__(self, message: str, stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.stdout = stdout
        self.stderr = stderr


class MachineNotFound(ToolReportedError):
    """No registered machine with the requested name."""

    def __init__(
        self, message: str, machine: str, stdout: str = "", stderr: str = ""
    ) -> None:
        super().__init__(message, stdout=stdout, stderr=stderr)
        self.machine = machine


class UnclassifiedExecutionError(VBoxManageError):
    """VBoxManage failed without a recognisable error message."""

    def __init__(
        self,
        detail: str,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
