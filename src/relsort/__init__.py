"""Dependency ordering of applications in a release."""

__all__ = [
    "AppInfo",
    "CycleError",
    "ManifestError",
    "apps_to_pairs",
    "export_order_to_toml",
    "format_cycle",
    "format_error",
    "load_apps_from_toml",
    "names_to_apps",
    "sort_apps",
    "topological_sort",
]

from ._graph import CycleError, format_cycle, topological_sort
from ._io import ManifestError, export_order_to_toml, load_apps_from_toml
from ._models import AppInfo
from ._topo import apps_to_pairs, format_error, names_to_apps, sort_apps
