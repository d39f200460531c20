import json
import platform
from dataclasses import dataclass
from importlib import metadata

from . import __version__

DISTRIBUTION_NAME = "deepl-translate-cli"


@dataclass(frozen=True)
class VersionInfo:
    """Build and runtime information for this installation.

    Computed once at start-up by `collect_version_info` and passed to the
    parts of the program that need it.
    """
    version: str
    commit: str
    python_implementation: str
    python_version: str
    os_name: str
    arch: str

    def __str__(self) -> str:
        return (
            f"{self.version} (rev {self.commit}) "
            f"[{self.os_name} {self.arch} {self.python_implementation} {self.python_version}]"
        )


def _commit_from_distribution(dist: metadata.Distribution) -> str:
    """Returns the VCS commit recorded by pip for VCS installs (PEP 610)."""
    direct_url = dist.read_text("direct_url.json")
    if not direct_url:
        return "unknown"
    try:
        vcs_info = json.loads(direct_url).get("vcs_info", {})
    except (ValueError, AttributeError):
        return "unknown"
    commit_id = vcs_info.get("commit_id")
    vcs = vcs_info.get("vcs")
    if vcs and commit_id:
        return f"{vcs} [{commit_id}]"
    return commit_id or vcs or "unknown"


def collect_version_info() -> VersionInfo:
    """Gathers the package version, VCS commit, and runtime platform."""
    version = __version__
    commit = "unknown"
    try:
        dist = metadata.distribution(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        dist = None
    if dist is not None:
        version = dist.version
        commit = _commit_from_distribution(dist)

    return VersionInfo(
        version=version,
        commit=commit,
        python_implementation=platform.python_implementation(),
        python_version=platform.python_version(),
        os_name=platform.system().lower() or "unknown",
        arch=platform.machine() or "unknown",
    )
