# Copyright (C) 2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

"""Table of the pipeline steps available to orchestration scripts, keyed by
function name.

Steps are contributed by distributions through the ``scm.steps`` entry point
group, each entry point being a ``register`` callable returning a dict with a
``step`` key holding a :class:`StepDescriptor`.
"""

from dataclasses import dataclass, field
from importlib.metadata import entry_points
import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Type

from .exception import MissingContextError, StepNotFound

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "scm.steps"


@dataclass(frozen=True)
class StepDescriptor:
    function_name: str
    display_name: str
    step_class: Type
    required_context: FrozenSet[Type] = field(default_factory=frozenset)


class StepContext(dict):
    """Capabilities supplied to a step by its execution context, keyed by
    capability type."""

    def require(self, capability: Type) -> Any:
        try:
            return self[capability]
        except KeyError:
            raise MissingContextError(
                f"{capability.__name__} is missing from the step context"
            )


_STEPS: Dict[str, StepDescriptor] = {}


def register_step(descriptor: StepDescriptor) -> StepDescriptor:
    if descriptor.function_name in _STEPS:
        logger.debug("Replacing step %s", descriptor.function_name)
    _STEPS[descriptor.function_name] = descriptor
    return descriptor


def unregister_step(function_name: str) -> None:
    _STEPS.pop(function_name, None)


def get_step(function_name: str) -> StepDescriptor:
    try:
        return _STEPS[function_name]
    except KeyError:
        raise StepNotFound(f"No step registered under the name {function_name!r}")


def registered_steps() -> List[StepDescriptor]:
    return [_STEPS[name] for name in sorted(_STEPS)]


def load_steps() -> List[StepDescriptor]:
    """Populate the step table from the ``scm.steps`` entry points."""
    loaded = []
    for entry_point in entry_points(group=ENTRY_POINT_GROUP):
        logger.debug("Loading steps from entry point %s", entry_point.name)
        registry_entry = entry_point.load()()
        loaded.append(register_step(registry_entry["step"]))
    return loaded


def run_step(
    function_name: str, arguments: Mapping[str, Any], context: Mapping[Type, Any]
) -> Any:
    """Run a registered step.

    Args:
        function_name: name the step is registered under
        arguments: step parameters, passed as keyword arguments to the step class
        context: capabilities available to the step, keyed by type

    Raises:
        StepNotFound: no step is registered under function_name
        MissingContextError: a capability required by the step is missing

    """
    descriptor = get_step(function_name)
    missing = [
        capability.__name__
        for capability in descriptor.required_context
        if capability not in context
    ]
    if missing:
        raise MissingContextError(
            "Step %s requires %s in its context"
            % (function_name, ", ".join(sorted(missing)))
        )
    step = descriptor.step_class(**arguments)
    return step.start(StepContext(context)).run()
