# Copyright (C) 2015-2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information


from celery import shared_task

from .svn_info import working_copy_info

SVNINFO_TASK_NAME = __name__ + ".SvnInfo"


@shared_task(name=SVNINFO_TASK_NAME)
def svninfo(path):
    """Query svn information about the working copy at path on the worker
    owning it.

    The mapping is returned as a plain dict for the result backend.
    """
    return dict(working_copy_info(path))
