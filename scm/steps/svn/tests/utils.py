# Copyright (C) 2022-2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

import functools
from io import BytesIO
import os
from types import SimpleNamespace
from typing import Dict, List, Optional

from subvertpy import NODE_FILE, SubversionException, client, delta, repos
from subvertpy.ra import Auth, RemoteAccess, get_username_provider
from typing_extensions import TypedDict


class CommitChange(TypedDict, total=False):
    path: str
    properties: Dict[str, str]
    data: bytes


def add_commit(repo_url: str, message: str, changes: List[CommitChange]) -> None:
    conn = RemoteAccess(repo_url, auth=Auth([get_username_provider()]))
    editor = conn.get_commit_editor({"svn:log": message})
    root = editor.open_root()
    for change in changes:
        split_path = change["path"].rstrip("/").split("/")
        for i in range(len(split_path) - 1):
            path = "/".join(split_path[0 : i + 1])
            try:
                root.add_directory(path).close()
            except SubversionException:
                pass
        path = "/".join(split_path)
        try:
            file = root.add_file(path)
        except SubversionException:
            file = root.open_file(path)
        for prop, value in change.get("properties", {}).items():
            file.change_prop(prop, value)
        if "data" in change:
            txdelta = file.apply_textdelta()
            delta.send_stream(BytesIO(change["data"]), txdelta)
        file.close()
    root.close()
    editor.close()


def create_repo(tmp_path, repo_name="tmprepo"):
    repo_path = os.path.join(tmp_path, repo_name)
    repos.create(repo_path)
    return f"file://{repo_path}"


def checkout(repo_url: str, path: str) -> str:
    svnclient = client.Client(auth=Auth([get_username_provider()]))
    svnclient.checkout(repo_url, path, "HEAD")
    return path


def fake_info(
    revision: int = 42,
    url: str = "https://example.org/repo/trunk",
    repos_uuid: str = "11111111-2222-3333-4444-555555555555",
    last_changed_author: Optional[str] = "alice",
    last_changed_revision: int = 40,
    kind: int = NODE_FILE,
):
    """Object with the attributes of subvertpy.client.Info"""
    return SimpleNamespace(
        kind=kind,
        last_changed_author=last_changed_author,
        last_changed_date=1546300800000000,
        last_changed_revision=last_changed_revision,
        repos_root_url="https://example.org/repo",
        repos_uuid=repos_uuid,
        revision=revision,
        size=-1,
        url=url,
        wc_info=SimpleNamespace(
            changelist=None,
            copyfrom_rev=-1,
            copyfrom_url=None,
            recorded_size=3,
            recorded_time=1546300800000000,
            schedule=0,
            wcroot_abspath="/ws/trunk",
        ),
    )


class FakeClient:
    """Stand-in for subvertpy.client.Client, whose methods cannot be patched
    by the mocker fixture as subvertpy.client is a C extension module.

    """

    def __init__(self, info=None):
        self._info = info if info is not None else fake_info()
        self.info_calls: List[tuple] = []

    def info(self, path, revision=None, peg_revision=None):
        self.info_calls.append((path, revision, peg_revision))
        return {path: self._info}


def _raise(exception, *args, **kwargs):
    raise exception


class FailingClient:
    """Client whose info queries fail with the given exception.

    The failing call frame does not reference the client, so that tracebacks
    do not keep it alive.
    """

    def __init__(self, exception):
        self.info = functools.partial(_raise, exception)
