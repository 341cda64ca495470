# Copyright (C) 2015-2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

"""Working copy inspection: query the subversion client for the state of a
working copy and shape it as the ordered string mapping returned by the
``svninfo`` step.

"""

from collections import OrderedDict
from contextlib import contextmanager
import hashlib
import logging
import os
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional

from subvertpy import NODE_FILE, SubversionException, client, wc
from subvertpy.ra import Auth, get_username_provider

from .exception import SvnInfoQueryFailure

logger = logging.getLogger(__name__)

WORKING_REVISION = "WORKING"

INFO_KEYS = (
    "REVISION",
    "URL",
    "CHECKSUM",
    "REPOSITORY_UUID",
    "LAST_AUTHOR",
    "LAST_CHANGE_REVISION",
)


def default_client_factory() -> Any:
    """Create a subvertpy client for local working copy queries.

    Only the username provider is registered, working copy queries at the
    WORKING revision never reach the repository.
    """
    return client.Client(auth=Auth([get_username_provider()]))


client_factory: Callable[[], Any] = default_client_factory


class SvnClient:
    """Svn client handle scoped to a single working copy query.

    Args:
        factory: callable returning a subvertpy client like object, defaults
            to the module level ``client_factory``

    """

    def __init__(self, factory: Optional[Callable[[], Any]] = None):
        self.client = (factory or client_factory)()

    @property
    def closed(self) -> bool:
        return self.client is None

    def info(self, path: str, revision: Any = WORKING_REVISION):
        """Simple wrapper around subvertpy.client.Client.info returning the
        info object of the target itself.
        """
        if self.client is None:
            raise ValueError("svn client already released")
        logger.debug("svn info %s@%s", path, revision)
        info = self.client.info(path, revision=revision, peg_revision=revision)
        return next(iter(info.values()))

    def close(self) -> None:
        # the underlying apr pool is released with the last reference to the client
        self.client = None


@contextmanager
def svn_client(factory: Optional[Callable[[], Any]] = None) -> Iterator[SvnClient]:
    """Acquire an svn client and release it whatever the outcome of the
    enclosed block."""
    svnclient = SvnClient(factory)
    try:
        yield svnclient
    finally:
        svnclient.close()


def _revnum(value: Optional[int]) -> str:
    if value is None or value < 0:
        # SVN_INVALID_REVNUM, node scheduled for addition and never committed
        return "0"
    return str(int(value))


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def pristine_checksum(path: str) -> str:
    """SHA1 hex digest of the pristine text of a versioned file, as reported
    by ``svn info``; empty for a file without pristine text (locally added)."""
    stream = wc.get_pristine_contents(path)
    if stream is None:
        return ""
    try:
        return hashlib.sha1(stream.read()).hexdigest()
    finally:
        stream.close()


def info_to_mapping(info: Any, path: str) -> Mapping[str, str]:
    """Convert a subvertpy info object into the working copy info mapping.

    Args:
        info: :class:`subvertpy.client.Info` of the working copy node
        path: working copy path of the node, used to checksum file contents

    Returns:
        read-only mapping whose keys are :data:`INFO_KEYS`, in that order

    """
    result = OrderedDict()
    result["REVISION"] = _revnum(info.revision)
    result["URL"] = _text(info.url)
    result["CHECKSUM"] = pristine_checksum(path) if info.kind == NODE_FILE else ""
    result["REPOSITORY_UUID"] = _text(info.repos_uuid)
    result["LAST_AUTHOR"] = _text(info.last_changed_author)
    result["LAST_CHANGE_REVISION"] = _revnum(info.last_changed_revision)
    return MappingProxyType(result)


def working_copy_info(
    path: str, factory: Optional[Callable[[], Any]] = None
) -> Mapping[str, str]:
    """Retrieve svn information about the working copy rooted at path, in its
    current (uncommitted) state.

    Args:
        path: directory or file of an svn working copy
        factory: optional svn client factory override

    Raises:
        SvnInfoQueryFailure: the svn client failed to provide the information
            (not a working copy, corrupted metadata, I/O error)

    """
    path = os.fspath(path)
    with svn_client(factory) as svnclient:
        try:
            return info_to_mapping(svnclient.info(path), path)
        except (SubversionException, OSError) as e:
            logger.debug("svn info failed for %s: %s", path, e)
            raise SvnInfoQueryFailure(path, e) from e
