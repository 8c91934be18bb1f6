"""Ordering of applications in a release.

Only one version of each application is expected in the list passed here,
which implies the constraint solve has already happened.
"""

import logging
from collections.abc import Sequence

from ._graph import CycleError, Pair, format_cycle, topological_sort
from ._models import AppInfo

logger = logging.getLogger(__name__)

INDENT = "    "


def sort_apps(apps: Sequence[AppInfo]) -> list[AppInfo]:
    """Order applications so that every application follows its dependencies.

    Applications that neither depend on nor are depended on by anything are
    kept and placed after the connected ones. Dependencies that are not
    among ``apps`` take part in the ordering but are not returned.

    Args:
        apps: Applications to order.

    Returns:
        The same application objects, reordered.

    Raises:
        CycleError: If the dependencies contain a cycle.

    """
    names = topological_sort(apps_to_pairs(apps), nodes=[app.name for app in apps])
    known = {app.name for app in apps}
    external = [name for name in names if name not in known]
    if external:
        logger.debug(f"Skipping dependencies not in the release: {external}")
    return names_to_apps([name for name in names if name in known], apps)


def apps_to_pairs(apps: Sequence[AppInfo]) -> list[Pair[str]]:
    """Build ``(dependency, dependent)`` pairs from the dependencies of each app."""
    return [(dep, app.name) for app in apps for dep in app.deps]


def names_to_apps(names: Sequence[str], apps: Sequence[AppInfo]) -> list[AppInfo]:
    """Look up the application for each name, keeping the order of ``names``."""
    by_name = {app.name: app for app in apps}
    result: list[AppInfo] = []
    for name in names:
        assert name in by_name, f"Application '{name}' is not in the release"  # noqa: S101
        result.append(by_name[name])
    return result


def format_error(error: CycleError) -> str:
    """Format a cycle error for display."""
    msg = "Cycle detected in dependency graph, this must be resolved before we can continue:\n"
    if not error.pairs:
        return msg
    return msg + INDENT + format_cycle(error.pairs)
