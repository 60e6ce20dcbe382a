"""Tests for the shared folder accumulator."""

import pytest

from pytest_vboxmanage import MalformedRecord, SharedFolder, SharedFolderTable


def test_name_and_path_make_one_folder():
    table = SharedFolderTable()
    table.accept("SharedFolderNameMachineMapping1", "alpha")
    table.accept("SharedFolderPathMachineMapping1", "/host/alpha")
    assert table.list() == [SharedFolder(name="alpha", path="/host/alpha")]


def test_path_before_name():
    table = SharedFolderTable()
    table.accept("SharedFolderPathTransientMapping3", "/host/beta")
    table.accept("SharedFolderNameTransientMapping3", "beta")
    assert table.list() == [SharedFolder(name="beta", path="/host/beta")]


def test_scopes_are_separate_records():
    table = SharedFolderTable()
    table.accept("SharedFolderNameMachineMapping1", "alpha")
    table.accept("SharedFolderPathMachineMapping1", "/host/alpha")
    table.accept("SharedFolderNameTransientMapping1", "beta")
    table.accept("SharedFolderPathTransientMapping1", "/host/beta")
    assert sorted(table.list(), key=lambda f: f.name) == [
        SharedFolder("alpha", "/host/alpha"),
        SharedFolder("beta", "/host/beta"),
    ]


def test_partial_folder_not_listed():
    table = SharedFolderTable()
    table.accept("SharedFolderNameMachineMapping1", "alpha")
    table.accept("SharedFolderNameMachineMapping2", "gamma")
    table.accept("SharedFolderPathMachineMapping2", "/host/gamma")
    assert table.list() == [SharedFolder("gamma", "/host/gamma")]


def test_empty_path_is_kept():
    table = SharedFolderTable()
    table.accept("SharedFolderNameMachineMapping1", "alpha")
    table.accept("SharedFolderPathMachineMapping1", "")
    assert table.list() == [SharedFolder("alpha", "")]


def test_index_text_identifies_record():
    table = SharedFolderTable()
    table.accept("SharedFolderNameMachineMapping1", "alpha")
    table.accept("SharedFolderPathMachineMapping1", "/host/alpha")
    table.accept("SharedFolderNameMachineMapping01", "gamma")
    table.accept("SharedFolderPathMachineMapping01", "/host/gamma")
    assert sorted(table.list(), key=lambda f: f.name) == [
        SharedFolder("alpha", "/host/alpha"),
        SharedFolder("gamma", "/host/gamma"),
    ]


def test_empty_table():
    assert SharedFolderTable().list() == []


@pytest.mark.parametrize(
    "key",
    [
        "SharedFolderNameMachineMapping",
        "SharedFolderSizeMachineMapping1",
        "SharedFolderNamePermanentMapping1",
        "SharedFolderNameMachineMapping1x",
    ],
)
def test_bad_key_with_prefix(key):
    table = SharedFolderTable()
    with pytest.raises(MalformedRecord, match="unknown shared folder property"):
        table.accept(key, "alpha")
    assert table.list() == []


@pytest.mark.parametrize("key", ["name", "Forwarding(0)", "sharedfoldernamemachinemapping1"])
def test_other_keys_ignored(key):
    table = SharedFolderTable()
    table.accept(key, "alpha")
    assert table.list() == []
