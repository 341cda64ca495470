# Copyright (C) 2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

"""Celery application shipping svn info queries to the workers owning the
build workspaces.

Start a worker on a build agent with::

    celery -A scm.steps.svn.celery_app worker -Q <agent-queue>

"""

from celery import Celery

from . import register
from .config import load_config

TASK_MODULES = register()["task_modules"]


def build_app(config=None) -> Celery:
    if config is None:
        config = load_config()
    celery_app = Celery("scm.steps.svn", include=TASK_MODULES)
    celery_app.conf.update(config["celery"])
    return celery_app


app = build_app()
