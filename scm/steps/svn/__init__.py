# Copyright (C) 2019-2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

from typing import Any, Dict


def register() -> Dict[str, Any]:
    from scm.steps.svn.step import DESCRIPTOR

    return {
        "task_modules": [f"{__name__}.tasks"],
        "step": DESCRIPTOR,
    }
