from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from fileaccess.config import StaticConfiguration
from fileaccess.errors import ConfigurationUnavailable, ErrorKind, InsufficientRights, PathConflict
from fileaccess.service import FileAccessService
from fileaccess.storage.files import ProbeStatus
from fileaccess.storage.temp import TempAllocator


@pytest.fixture()
def service(tmp_path: Path) -> FileAccessService:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    configuration = StaticConfiguration(str(tmp_path / "home" / "alice"), "app")
    return FileAccessService(configuration, temp_allocator=TempAllocator(temp_dir))


def test_private_file_creates_home_root(service: FileAccessService, tmp_path: Path) -> None:
    handle = service.get_private_persistent_file("accounts.dat")

    home = tmp_path / "home" / "alice" / "app"
    assert home.is_dir()
    assert handle.path == home / "accounts.dat"
    assert handle.status is ProbeStatus.CREATABLE
    assert not handle.path.exists()


def test_private_file_returns_existing_file(service: FileAccessService, tmp_path: Path) -> None:
    first = service.get_private_persistent_file("accounts.dat")
    first.path.write_text("alice", encoding="utf-8")

    second = service.get_private_persistent_file("accounts.dat")

    assert second.path == first.path
    assert second.status is ProbeStatus.ACCESSIBLE
    assert second.exists


@pytest.mark.skipif(
    sys.platform.startswith("win") or os.geteuid() == 0,
    reason="permission bits are not enforced for this user/platform",
)
def test_private_file_raises_insufficient_rights(service: FileAccessService, tmp_path: Path) -> None:
    home = tmp_path / "home" / "alice" / "app"
    home.mkdir(parents=True)
    home.chmod(0o500)
    try:
        with pytest.raises(InsufficientRights) as excinfo:
            service.get_private_persistent_file("accounts.dat")
    finally:
        home.chmod(0o700)

    assert excinfo.value.kind is ErrorKind.INSUFFICIENT_RIGHTS
    assert excinfo.value.path == home / "accounts.dat"
    assert isinstance(excinfo.value, PermissionError)


def test_private_directory_is_idempotent(service: FileAccessService) -> None:
    first = service.get_private_persistent_directory("history")
    second = service.get_private_persistent_directory("history")

    assert first == second
    assert first.is_dir()


def test_private_directory_joins_segments_in_order(service: FileAccessService, tmp_path: Path) -> None:
    directory = service.get_private_persistent_directory(["logs", "2024", "01"])

    assert directory == tmp_path / "home" / "alice" / "app" / "logs" / "2024" / "01"
    assert directory.is_dir()


def test_private_directory_conflicts_with_existing_file(service: FileAccessService) -> None:
    handle = service.get_private_persistent_file("history")
    handle.path.write_text("", encoding="utf-8")

    with pytest.raises(PathConflict) as excinfo:
        service.get_private_persistent_directory("history")

    assert excinfo.value.kind is ErrorKind.PATH_CONFLICT
    assert excinfo.value.path == handle.path


def test_unset_configuration_fails_persistent_calls_only(tmp_path: Path) -> None:
    service = FileAccessService(temp_allocator=TempAllocator(tmp_path))

    with pytest.raises(ConfigurationUnavailable):
        service.get_private_persistent_file("accounts.dat")
    with pytest.raises(ConfigurationUnavailable):
        service.get_private_persistent_directory(["logs"])

    assert service.get_temporary_file().is_file()
    assert service.get_temporary_directory().is_dir()


def test_unset_only_clears_matching_configuration(tmp_path: Path) -> None:
    active = StaticConfiguration(str(tmp_path), "app")
    stale = StaticConfiguration(str(tmp_path), "app")
    service = FileAccessService()
    assert not service.configured

    service.set_configuration_service(active)
    assert service.unset_configuration_service(stale) is False
    assert service.configured

    assert service.unset_configuration_service(active) is True
    assert not service.configured


def test_configuration_is_read_on_every_call(tmp_path: Path) -> None:
    service = FileAccessService(StaticConfiguration(str(tmp_path), "first"))
    first = service.get_private_persistent_directory("data")

    service.set_configuration_service(StaticConfiguration(str(tmp_path), "second"))
    second = service.get_private_persistent_directory("data")

    assert first == tmp_path / "first" / "data"
    assert second == tmp_path / "second" / "data"
