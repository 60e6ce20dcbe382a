"""Tests for the machine-readable line parser."""

import pytest

from pytest_vboxmanage.properties import iter_properties, parse_line


@pytest.mark.parametrize(
    "line, expected",
    [
        ('name="web"', ("name", "web")),
        ("memory=2048", ("memory", "2048")),
        ('"SharedFolderNameMachineMapping1"="alpha"', ("SharedFolderNameMachineMapping1", "alpha")),
        ('"storagecontrollername0"=IDE', ("storagecontrollername0", "IDE")),
        ("description=", ("description", "")),
        ('description=""', ("description", "")),
        ('description="a=b"', ("description", "a=b")),
        ('Forwarding(0)="ssh,tcp,,2222,,22"', ("Forwarding(0)", "ssh,tcp,,2222,,22")),
        ("Name:            host-only", ("Name", "host-only")),
        ('Name: "quoted"', ("Name", "quoted")),
        ("Description:   a=b", ("Description", "a=b")),
        ("Default machine folder:  /vms/env=prod", ("Default machine folder", "/vms/env=prod")),
        ("C:\\vms=local", ("C:\\vms", "local")),
    ],
)
def test_parse_line(line, expected):
    assert parse_line(line) == expected


@pytest.mark.parametrize("line", ["", "   ", "no separator here", "=value", "Name:nospace"])
def test_parse_line_skips(line):
    assert parse_line(line) is None


def test_iter_properties_skips_junk():
    text = 'name="web"\n\nrandom junk\nmemory=512\n'
    assert list(iter_properties(text)) == [("name", "web"), ("memory", "512")]


def test_iter_properties_empty():
    assert list(iter_properties("")) == []
