import pytest

import os

from pathlib import Path

from lss.identity import IdentityResolver, IdentityLookupError


class FakeIdentityResolver(IdentityResolver):
    """
    A resolver with a fixed set of known users and groups.
    """

    def __init__(self, users: dict[int, str], groups: dict[int, str]) -> None:
        self.users = users
        self.groups = groups

    def username(self, uid: int) -> str:
        try:
            return self.users[uid]
        except KeyError:
            raise IdentityLookupError(uid)

    def groupname(self, gid: int) -> str:
        try:
            return self.groups[gid]
        except KeyError:
            raise IdentityLookupError(gid)


@pytest.fixture
def resolver() -> FakeIdentityResolver:
    return FakeIdentityResolver(
        users={os.getuid(): "alice"},
        groups={os.getgid(): "staff"},
    )


@pytest.fixture
def listing_dir(tmp_path: Path) -> Path:
    """
    A directory containing one of each interesting kind of entry.
    """
    (tmp_path / "subdir").mkdir()

    (tmp_path / "notes.txt").write_bytes(b"x" * 1536)
    (tmp_path / "notes.txt").chmod(0o644)

    (tmp_path / "run.sh").write_text("#!/bin/sh\n")
    (tmp_path / "run.sh").chmod(0o755)

    (tmp_path / "link").symlink_to("notes.txt")
    (tmp_path / "dangling").symlink_to("does-not-exist")

    (tmp_path / ".hidden").write_text("")

    return tmp_path
