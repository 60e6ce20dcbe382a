from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pytest_vboxmanage.exceptions import MalformedRecord

logger = logging.getLogger(__name__)

_PREFIX = "SharedFolder"
_PAT_KEY = re.compile(r"^SharedFolder(Name|Path)(Machine|Transient)Mapping([0-9]+)$")


@dataclass(frozen=True)
class SharedFolder:
    name: str
    path: str


def _build_shared_folder(fields: dict[str, str]) -> SharedFolder:
    missing = [k for k in ("Name", "Path") if k not in fields]
    if missing:
        raise ValueError("shared folder missing: " + ", ".join(missing))
    return SharedFolder(name=fields["Name"], path=fields["Path"])


class SharedFolderTable:
    """
    Shared folders of one showvminfo pass.

    Name and Path arrive on separate lines, in any order, tied together by
    the scope (Machine or Transient) and mapping index in the key.
    """

    def __init__(self) -> None:
        self._folders: dict[tuple[str, str], dict[str, str]] = {}

    def accept(self, key: str, value: str) -> None:
        if not key.startswith(_PREFIX):
            return
        m = _PAT_KEY.match(key)
        if not m:
            raise MalformedRecord(key, value, "unknown shared folder property")
        field, scope, index = m.groups()
        self._folders.setdefault((scope, index), {})[field] = value

    def list(self) -> list[SharedFolder]:
        out: list[SharedFolder] = []
        for (scope, index), fields in self._folders.items():
            try:
                out.append(_build_shared_folder(fields))
            except ValueError as e:
                logger.debug("skipping %s mapping %s: %s", scope, index, e)
        return out
