# Copyright (C) 2016-2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information


class SvnInfoQueryFailure(OSError):
    """The svn client could not provide working copy information for a path.

    The constructor arguments are kept as the exception ``args`` so that the
    failure can be rebuilt after crossing a worker boundary.

    """

    def __init__(self, path, cause):
        super().__init__(str(path), str(cause))
        self.path = str(path)
        self.cause = str(cause)

    def __str__(self):
        return f"failed to get svn infos for {self.path}: {self.cause}"


class WorkspaceConfinementError(ValueError):
    """Resolved path escapes the workspace root"""

    pass


class MissingContextError(LookupError):
    """A capability required by a step is absent from its context."""

    pass


class StepNotFound(LookupError):
    pass
