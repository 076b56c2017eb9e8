"""Download, extraction and configuration helpers used by the plugins."""

from __future__ import annotations

import shutil
import sys
import zipfile
from pathlib import Path, PurePosixPath
from typing import TextIO

import requests

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
MIN_ARCHIVE_SIZE = 1000
_KB_STEP = 102400
_CHUNK_SIZE = 64 * 1024


class DownloadError(Exception):
    """Raised when a plugin archive cannot be downloaded."""


class ProgressReporter:
    """Writes single-line progress updates for a long operation."""

    def __init__(self, operation: str, stream: TextIO | None = None) -> None:
        self.operation = operation
        self._stream = stream
        self.last_percentage = 0

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def update(self, current: int, total: int) -> bool:
        """Report progress; return True if a line was written."""
        if total > 0:
            percentage = int(current / total * 100)
            if percentage <= self.last_percentage:
                return False
            self.last_percentage = percentage
            text = f"\r{self.operation}: {percentage}%"
        else:
            if current % _KB_STEP != 0:
                return False
            text = f"\r{self.operation}: {current // 1024} KB"
        self.stream.write(text)
        self.stream.flush()
        return True


def download_plugin(plugin_url: str, save_to: str | Path) -> None:
    """Download ``plugin_url`` into the file ``save_to``, reporting progress."""
    save_path = Path(save_to)
    try:
        with requests.get(
            plugin_url,
            headers={"User-Agent": USER_AGENT},
            stream=True,
            timeout=60,
        ) as response:
            if not response.ok:
                raise DownloadError(
                    f"Failed to download {plugin_url}: HTTP status "
                    f"{response.status_code} {response.reason}"
                )

            content_type = response.headers.get("content-type")
            if content_type is not None and not (
                "application/zip" in content_type
                or "application/octet-stream" in content_type
            ):
                print(f"Warning: Expected zip file but got content-type: {content_type}")

            try:
                total_size = int(response.headers.get("content-length", 0))
            except ValueError:
                total_size = 0

            progress = ProgressReporter("Download")
            downloaded = 0
            with save_path.open("wb") as out:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if not chunk:
                        continue
                    out.write(chunk)
                    downloaded += len(chunk)
                    progress.update(downloaded, total_size)
    except requests.RequestException as exc:
        raise DownloadError(f"Failed to download {plugin_url}: {exc}") from exc

    if save_path.stat().st_size < MIN_ARCHIVE_SIZE:
        raise DownloadError("Downloaded file is too small to be a valid archive")

    print("\nDownload complete!")


def _enclosed_parts(name: str) -> list[str] | None:
    """Split an archive member name into safe relative parts, or None if unsafe."""
    if "\0" in name:
        return None
    normalized = name.replace("\\", "/")
    path = PurePosixPath(normalized)
    if path.is_absolute() or (len(normalized) > 1 and normalized[1] == ":"):
        return None
    parts: list[str] = []
    for part in path.parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                return None
            parts.pop()
        else:
            parts.append(part)
    return parts


def unzip(src: str | Path, dest: str | Path) -> None:
    """Extract the zip archive ``src`` into ``dest`` and delete the archive."""
    src_path = Path(src)
    dest_path = Path(dest)
    dest_path.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(src_path) as archive:
        members = archive.infolist()
        progress = ProgressReporter("Extract")
        for processed, info in enumerate(members, start=1):
            parts = _enclosed_parts(info.filename)
            if parts is None:
                continue
            outpath = dest_path.joinpath(*parts)
            if info.filename.endswith("/"):
                outpath.mkdir(parents=True, exist_ok=True)
            else:
                outpath.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as source, outpath.open("wb") as target:
                    shutil.copyfileobj(source, target)
            progress.update(processed, len(members))

    print("\nExtraction complete!")
    print("Cleaning up temporary files...")
    try:
        src_path.unlink()
    except OSError as exc:
        print(f"Warning: Could not remove temporary file {src}: {exc}")
    else:
        print(f"Removed temporary file: {src}")


def write_conf(config_bytes: bytes, dest: str | Path) -> None:
    """Write ``config_bytes`` to ``dest``, creating parent directories."""
    dest_path = Path(dest)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    dest_path.write_bytes(config_bytes)