"""Self-update helpers: check the latest release, download it, swap the executable.

The upgrade runs in two processes. ``upgrade`` downloads the new build next
to the running executable as ``<exe>.new``; the caller starts that file with
``app-upgrade-finish``, which calls ``upgrade_finish`` to copy itself over the
original path.
"""

from __future__ import annotations

import io
import logging
import os
import re
import shutil
import sys
import zipfile
from dataclasses import dataclass
from pathlib import Path

import httpx

from .config import DEFAULT_TIMEOUT_SECONDS, ENV_UPDATE_REPOSITORY
from .exceptions import UpdateError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
DEFAULT_UPDATE_REPOSITORY = "pveshell/pveshell"
NEW_EXECUTABLE_SUFFIX = ".new"


@dataclass
class UpdateInfo:
    """Outcome of a release check."""

    info: str
    is_new_version: bool
    download_url: str | None = None
    latest_version: str | None = None


def update_repository() -> str:
    return os.environ.get(ENV_UPDATE_REPOSITORY) or DEFAULT_UPDATE_REPOSITORY


def parse_version(value: str) -> tuple[int, ...]:
    """``'v1.10.2'`` -> ``(1, 10, 2)``; non numeric parts are ignored."""
    return tuple(int(part) for part in re.findall(r"\d+", value.split("-")[0]))


def _platform_tag() -> str:
    if sys.platform.startswith("win"):
        return "win"
    if sys.platform == "darwin":
        return "osx"
    return "linux"


def _select_asset(assets: list[dict], app_name: str) -> str | None:
    platform_tag = _platform_tag()
    for asset in assets:
        name = asset.get("name", "").lower()
        if app_name.lower() in name and platform_tag in name:
            return asset.get("browser_download_url")
    return None


def get_update_info(app_name: str, current_version: str) -> UpdateInfo:
    """Compare ``current_version`` with the latest GitHub release.

    Raises:
        UpdateError: If the release information cannot be fetched.
    """
    url = f"{GITHUB_API_URL}/repos/{update_repository()}/releases/latest"
    try:
        with httpx.Client(timeout=DEFAULT_TIMEOUT_SECONDS, follow_redirects=True) as client:
            response = client.get(url, headers={"Accept": "application/vnd.github+json"})
            response.raise_for_status()
            release = response.json()
    except httpx.HTTPError as e:
        raise UpdateError(f"Unable to check for updates: {e}") from e
    except ValueError as e:
        raise UpdateError(f"Invalid release information from {url}") from e

    if not isinstance(release, dict):
        raise UpdateError(f"Invalid release information from {url}")

    latest = str(release.get("tag_name", "")).lstrip("v")
    is_new_version = parse_version(latest) > parse_version(current_version)
    download_url = _select_asset(release.get("assets", []), app_name) if is_new_version else None

    lines = [
        f"Application: {app_name}",
        f"Version current: {current_version}",
        f"Version last: {latest}",
        f"Version {'' if is_new_version else 'not '}available",
    ]
    if download_url:
        lines.append(f"Download: {download_url}")

    return UpdateInfo(
        info="\n".join(lines) + "\n",
        is_new_version=is_new_version,
        download_url=download_url,
        latest_version=latest,
    )


def check_for_update(app_name: str, current_version: str) -> str:
    """Return the release check as printable text."""
    return get_update_info(app_name, current_version).info


def upgrade(download_url: str, executable_path: str | Path) -> Path:
    """Download the new executable next to ``executable_path``.

    Zip assets are extracted (first file member). The file is made executable.

    Returns:
        Path of the new executable, ``<executable_path>.new``.

    Raises:
        UpdateError: If the download fails, the archive is invalid or holds no
            file, or the new executable cannot be written.
    """
    executable_path = Path(executable_path)
    new_path = executable_path.with_name(executable_path.name + NEW_EXECUTABLE_SUFFIX)

    try:
        with httpx.Client(timeout=DEFAULT_TIMEOUT_SECONDS, follow_redirects=True) as client:
            response = client.get(download_url)
            response.raise_for_status()
            content = response.content
    except httpx.HTTPError as e:
        raise UpdateError(f"Unable to download {download_url}: {e}") from e

    if download_url.lower().endswith(".zip"):
        try:
            with zipfile.ZipFile(io.BytesIO(content)) as archive:
                members = [m for m in archive.infolist() if not m.is_dir()]
                if not members:
                    raise UpdateError(f"No executable found in {download_url}")
                content = archive.read(members[0])
        except zipfile.BadZipFile as e:
            raise UpdateError(f"Invalid archive {download_url}: {e}") from e

    try:
        new_path.write_bytes(content)
        os.chmod(new_path, 0o755)
    except OSError as e:
        raise UpdateError(f"Unable to write {new_path}: {e}") from e
    logger.debug("Downloaded %s to %s", download_url, new_path)
    return new_path


def upgrade_finish(process_path: str | Path) -> Path:
    """Copy the running ``<exe>.new`` over ``<exe>`` and return the target path.

    Raises:
        UpdateError: If ``process_path`` is not a downloaded upgrade.
    """
    process_path = Path(process_path)
    if not process_path.name.endswith(NEW_EXECUTABLE_SUFFIX):
        raise UpdateError(f"{process_path} is not an upgrade executable")

    target = process_path.with_name(process_path.name[: -len(NEW_EXECUTABLE_SUFFIX)])
    shutil.copy2(process_path, target)
    logger.debug("Replaced %s with %s", target, process_path)
    return target
