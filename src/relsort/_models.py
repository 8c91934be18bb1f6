from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class AppInfo(BaseModel):
    """An application in a release.

    Only one version of each application is expected in a release, so the
    name alone identifies it. Version constraints must already be resolved.

    Attributes:
        name: Application name, unique within a release.
        vsn: Application version.
        dir: Directory the application lives in, if known.
        active_deps: Applications that must be started before this one.
        library_deps: Applications that must be loaded before this one.

    """

    model_config = ConfigDict(frozen=True)

    name: str
    vsn: str = "0.0.0"
    dir: Path | None = None
    active_deps: tuple[str, ...] = Field(default_factory=tuple)
    library_deps: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def deps(self) -> tuple[str, ...]:
        """All dependencies, active ones first."""
        return self.active_deps + self.library_deps
