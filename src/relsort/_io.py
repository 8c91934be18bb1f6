import logging
import tomllib
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from ._models import AppInfo

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Error in a release manifest."""


def manifest_to_apps(data: dict[str, Any], base_dir: Path | None = None) -> list[AppInfo]:
    """Convert the parsed contents of a release manifest to applications.

    Args:
        data: Parsed TOML with an ``app`` array of tables.
        base_dir: Directory relative ``dir`` entries are resolved against.

    Returns:
        Applications in manifest order.

    Raises:
        ManifestError: If an entry is not a valid application.

    """
    entries = data.get("app", [])
    if not isinstance(entries, list):
        msg = "Invalid manifest: 'app' must be an array of tables"
        raise ManifestError(msg)

    apps: list[AppInfo] = []
    for i, entry in enumerate(entries):
        try:
            app = AppInfo.model_validate(entry)
        except ValidationError as e:
            msg = f"Invalid application at app[{i}]: {e}"
            raise ManifestError(msg) from e
        if base_dir is not None and app.dir is not None and not app.dir.is_absolute():
            app = app.model_copy(update={"dir": base_dir / app.dir})
        apps.append(app)
    return apps


def load_apps_from_toml(input_path: Path) -> list[AppInfo]:
    """Load the applications of a release from a TOML manifest.

    Relative application directories are resolved from the manifest's directory.
    """
    with input_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise ManifestError(msg) from e

    apps = manifest_to_apps(data, base_dir=input_path.parent)
    logger.debug(f"Loaded {len(apps)} applications from {input_path}")
    return apps


def order_to_dict(apps: Sequence[AppInfo]) -> dict[str, Any]:
    """Convert ordered applications to a TOML-serializable dictionary."""
    return {
        "order": [app.name for app in apps],
        "app": [app.model_dump(mode="json", exclude_none=True) for app in apps],
    }


def export_order_to_toml(apps: Sequence[AppInfo], output_path: Path) -> None:
    """Write ordered applications to a TOML file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(order_to_dict(apps), f)
    logger.debug(f"Exported order to {output_path}")
