# Copyright (C) 2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

"""The ``svninfo`` pipeline step: provides some data from svn info as a map."""

from dataclasses import dataclass
import logging
import os
from types import MappingProxyType
from typing import Mapping, Optional

from .exception import WorkspaceConfinementError
from .registry import StepContext, StepDescriptor
from .remote import run_on_workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """Handle on the root directory of a build workspace.

    Args:
        root: workspace directory, as seen by the process owning it
        queue: worker queue of the build agent owning the workspace, None
            when the workspace is on the local filesystem
        timeout: seconds to wait for a remote worker
        confined: whether paths resolved in the workspace must stay in it

    """

    root: str
    queue: Optional[str] = None
    timeout: Optional[float] = None
    confined: bool = True

    def child(self, path: str) -> str:
        """Resolve path relative to the workspace root.

        Raises:
            WorkspaceConfinementError: the resolved path is outside the root
                while the workspace is confined

        """
        root = os.path.abspath(self.root)
        resolved = os.path.normpath(os.path.join(root, path))
        if self.confined and os.path.commonpath([root, resolved]) != root:
            raise WorkspaceConfinementError(
                f"{path} resolves to {resolved}, outside of workspace {root}"
            )
        return resolved


class SvninfoStep:
    def __init__(self, path: str):
        self.path = path

    def start(self, context: StepContext) -> "Execution":
        return Execution(self.path, context)


class Execution:
    def __init__(self, path: str, context: StepContext):
        self.path = path
        self.context = context

    def run(self) -> Mapping[str, str]:
        workspace = self.context.require(Workspace)
        target = workspace.child(self.path)
        logger.debug("svninfo %s in workspace %s", target, workspace.root)
        result = run_on_workspace(
            target, queue=workspace.queue, timeout=workspace.timeout
        )
        return MappingProxyType(dict(result))


DESCRIPTOR = StepDescriptor(
    function_name="svninfo",
    display_name="Provides some data from svn info as a map.",
    step_class=SvninfoStep,
    required_context=frozenset([Workspace]),
)
