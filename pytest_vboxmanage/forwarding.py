from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from pytest_vboxmanage.exceptions import MalformedRecord

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_PREFIX = "Forwarding("
_PAT_PORT = re.compile(r"^[0-9]+$")


class PFProto(str, Enum):
    TCP = "tcp"
    UDP = "udp"


@dataclass(frozen=True)
class PFRule:
    """
    A NAT port forwarding rule.

    host_ip None matches any host interface; guest_ip None forwards to the
    address leased by the built-in DHCP server.
    """

    name: str
    proto: PFProto
    host_ip: IPAddress | None
    host_port: int
    guest_ip: IPAddress | None
    guest_port: int

    def format(self) -> str:
        """Value of a --natpfN argument, as read back by PortForwardingTable."""
        return ",".join(
            (
                self.name,
                self.proto.value,
                _ip_str(self.host_ip),
                str(self.host_port),
                _ip_str(self.guest_ip),
                str(self.guest_port),
            )
        )

    def __str__(self) -> str:
        return (
            f"{self.proto.value}://{_ip_str(self.host_ip)}:{self.host_port}"
            f" --> {_ip_str(self.guest_ip)}:{self.guest_port}"
        )


def _ip_str(ip: IPAddress | None) -> str:
    return "" if ip is None else str(ip)


def _parse_ip(key: str, value: str, field: str) -> IPAddress | None:
    if field == "":
        return None
    try:
        return ipaddress.ip_address(field)
    except ValueError as e:
        raise MalformedRecord(key, value, f"bad IP {field!r}") from e


def _parse_port(key: str, value: str, field: str) -> int:
    if not _PAT_PORT.match(field) or int(field) > 0xFFFF:
        raise MalformedRecord(key, value, f"bad port {field!r}")
    return int(field)


def parse_rule(key: str, value: str) -> PFRule:
    fields = value.split(",")
    if len(fields) != 6:
        raise MalformedRecord(key, value, "wrong number of parameters")
    name, proto, host_ip, host_port, guest_ip, guest_port = fields

    try:
        pf_proto = PFProto(proto)
    except ValueError as e:
        raise MalformedRecord(key, value, f"unknown protocol {proto!r}") from e

    return PFRule(
        name=name,
        proto=pf_proto,
        host_ip=_parse_ip(key, value, host_ip),
        host_port=_parse_port(key, value, host_port),
        guest_ip=_parse_ip(key, value, guest_ip),
        guest_port=_parse_port(key, value, guest_port),
    )


class PortForwardingTable:
    """Forwarding rules of one showvminfo pass, keyed by rule name."""

    def __init__(self) -> None:
        self._rules: dict[str, PFRule] = {}

    def accept(self, key: str, value: str) -> None:
        if not key.startswith(_PREFIX):
            return
        rule = parse_rule(key, value)
        self._rules[rule.name] = rule

    def lookup(self, name: str = "", guest_port: int = 0) -> PFRule | None:
        """
        Find a rule by name, falling back to the guest port.

        A name match always wins. Which rule is returned when several share
        the guest port is unspecified.
        """
        if name:
            rule = self._rules.get(name)
            if rule is not None:
                return rule
        if guest_port > 0:
            for rule in self._rules.values():
                if rule.guest_port == guest_port:
                    return rule
        return None

    def rules(self) -> dict[str, PFRule]:
        return dict(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[PFRule]:
        return iter(list(self._rules.values()))
