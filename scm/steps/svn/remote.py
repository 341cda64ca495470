# Copyright (C) 2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

"""Run the working copy inspection in the process owning the workspace.

Workspaces living on the local filesystem are inspected in-process. Remote
workspaces are inspected by the celery worker consuming the queue of the
build agent holding them.
"""

from collections import OrderedDict
import logging
from typing import Mapping, Optional

from .svn_info import INFO_KEYS, working_copy_info

logger = logging.getLogger(__name__)


def _svninfo_task():
    from .celery_app import app
    from .tasks import SVNINFO_TASK_NAME

    return app.tasks[SVNINFO_TASK_NAME]


def _ordered(result: Mapping[str, str]) -> Mapping[str, str]:
    # result backends do not all preserve key order
    return OrderedDict((key, result[key]) for key in INFO_KEYS)


def run_on_workspace(
    path: str, queue: Optional[str] = None, timeout: Optional[float] = None
) -> Mapping[str, str]:
    """Inspect the working copy at path where it physically resides.

    Args:
        path: working copy path, as seen by the process owning it
        queue: name of the worker queue of the build agent owning the
            workspace, None for a workspace on the local filesystem
        timeout: seconds to wait for the worker result

    Raises:
        SvnInfoQueryFailure: raised unchanged from the inspection, wherever it ran

    """
    if queue is None:
        return working_copy_info(path)

    logger.debug("Sending svn info query for %s to queue %s", path, queue)
    async_result = _svninfo_task().apply_async(args=(path,), queue=queue)
    result = async_result.get(timeout=timeout)
    return _ordered(result)
