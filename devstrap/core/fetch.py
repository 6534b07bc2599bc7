"""
Resource fetcher — downloads and archive extraction.

Three modes, all funnelled through ``fetch()``:

    raw             stream the URL's bytes to a file
    archive         download, extract every entry into a directory
    archive + strip same, dropping the top N path components

Nothing is ever left half-written at the destination: raw files go to
a temp file next to the destination and are renamed into place;
archives are extracted into a staging directory and moved into place
only once extraction succeeded. Temp directories are scoped and
removed on both success and failure.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
import tarfile
import tempfile
import urllib.error
import urllib.request
import zipfile
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from devstrap import __version__
from devstrap.core.errors import FetchError
from devstrap.core.models.resource import RemoteResource

logger = logging.getLogger(__name__)

USER_AGENT = f"devstrap/{__version__}"
DEFAULT_TIMEOUT = 60
_CHUNK = 8192


# ── Network ─────────────────────────────────────────────────────


def _open(url: str, timeout: int):
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        return urllib.request.urlopen(req, timeout=timeout)
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise FetchError(f"Download failed for {url}: {e}") from e


def read_url(url: str, *, timeout: int = DEFAULT_TIMEOUT) -> bytes:
    """Return the body of ``url`` in memory."""
    with _open(url, timeout) as resp:
        try:
            return resp.read()
        except OSError as e:
            raise FetchError(f"Download failed for {url}: {e}") from e


def _stream_to(url: str, target: Path, timeout: int) -> int:
    """Stream ``url`` into ``target``; returns the byte count."""
    written = 0
    with _open(url, timeout) as resp:
        try:
            with open(target, "wb") as f:
                while True:
                    chunk = resp.read(_CHUNK)
                    if not chunk:
                        break
                    f.write(chunk)
                    written += len(chunk)
        except OSError as e:
            raise FetchError(f"Download failed for {url}: {e}") from e
    logger.debug("Downloaded %d bytes from %s", written, url)
    return written


def download(url: str, destination: Path, *, timeout: int = DEFAULT_TIMEOUT) -> int:
    """Raw mode: write the URL's bytes to ``destination``.

    Parent directories are created; an existing file is overwritten.

    Returns:
        Number of bytes written.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=destination.parent,
        prefix=f".{destination.name}.",
        suffix=".part",
    )
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        size = _stream_to(url, tmp, timeout)
        tmp.replace(destination)
    finally:
        tmp.unlink(missing_ok=True)
    logger.info("Fetched %s → %s", url, destination)
    return size


# ── Archives ────────────────────────────────────────────────────


def _strip(name: str, strip_components: int) -> PurePosixPath | None:
    """Drop the leading components of an archive entry name.

    Returns None for entries that vanish after stripping.

    Raises:
        FetchError: For absolute names or names escaping the root.
    """
    path = PurePosixPath(name)
    if path.is_absolute() or ".." in path.parts:
        raise FetchError(f"Unsafe archive entry: {name}")
    parts = [p for p in path.parts if p != "."][strip_components:]
    if not parts:
        return None
    return PurePosixPath(*parts)


def _wanted(rel: PurePosixPath, include: Iterable[str]) -> bool:
    patterns = list(include)
    if not patterns:
        return True
    return any(fnmatch.fnmatch(rel.name, pattern) for pattern in patterns)


def _extract_tar(archive: Path, staging: Path, strip: int, include: list[str]) -> int:
    count = 0
    with tarfile.open(archive, "r:*") as tar:
        for member in tar.getmembers():
            rel = _strip(member.name, strip)
            if rel is None:
                continue
            target = staging.joinpath(*rel.parts)
            if member.isdir():
                if not include:
                    target.mkdir(parents=True, exist_ok=True)
                continue
            if not _wanted(rel, include):
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if member.issym():
                link = PurePosixPath(member.linkname)
                if link.is_absolute() or ".." in link.parts:
                    logger.debug("Skipping symlink leaving the archive: %s", member.name)
                    continue
                target.unlink(missing_ok=True)
                os.symlink(member.linkname, target)
            elif member.isfile():
                source = tar.extractfile(member)
                if source is None:
                    continue
                with source, open(target, "wb") as out:
                    shutil.copyfileobj(source, out)
                os.chmod(target, member.mode & 0o777 or 0o644)
            else:
                continue
            count += 1
    return count


def _extract_zip(archive: Path, staging: Path, strip: int, include: list[str]) -> int:
    count = 0
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            rel = _strip(info.filename, strip)
            if rel is None:
                continue
            target = staging.joinpath(*rel.parts)
            if info.is_dir():
                if not include:
                    target.mkdir(parents=True, exist_ok=True)
                continue
            if not _wanted(rel, include):
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as source, open(target, "wb") as out:
                shutil.copyfileobj(source, out)
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                os.chmod(target, mode)
            count += 1
    return count


def _unpack(archive: Path, staging: Path, strip: int, include: list[str]) -> int:
    staging.mkdir(parents=True, exist_ok=True)
    try:
        if zipfile.is_zipfile(archive):
            return _extract_zip(archive, staging, strip, include)
        if tarfile.is_tarfile(archive):
            return _extract_tar(archive, staging, strip, include)
    except (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError) as e:
        raise FetchError(f"Cannot extract {archive.name}: {e}") from e
    raise FetchError("Downloaded file is neither a tar nor a zip archive")


def _swap_in(staging: Path, destination: Path, scratch: Path) -> None:
    """Replace ``destination`` wholesale with ``staging``."""
    if destination.exists() or destination.is_symlink():
        previous = scratch / "previous"
        destination.rename(previous)
    staging.rename(destination)


def _merge_in(staging: Path, destination: Path) -> None:
    """Copy staged entries over ``destination``, keeping the rest."""
    destination.mkdir(parents=True, exist_ok=True)
    for source in sorted(staging.rglob("*")):
        rel = source.relative_to(staging)
        target = destination / rel
        if source.is_dir() and not source.is_symlink():
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.is_symlink() or target.is_file():
            target.unlink()
        shutil.copy2(source, target, follow_symlinks=False)


def extract_archive(
    url: str,
    destination: Path,
    *,
    strip_components: int = 0,
    include: Iterable[str] = (),
    replace: bool = False,
    timeout: int = DEFAULT_TIMEOUT,
) -> int:
    """Archive modes: download ``url`` and extract it into ``destination``.

    Args:
        url: Archive URL (tar in any compression, or zip).
        destination: Target directory.
        strip_components: Leading path components dropped from entries.
        include: Basename globs; when given, only matching files are kept.
        replace: Swap the whole directory in (True) or merge entries
            into an existing directory (False).

    Returns:
        Number of extracted entries.
    """
    patterns = list(include)
    destination.parent.mkdir(parents=True, exist_ok=True)

    # Scratch space next to the destination so the final move is a rename.
    with tempfile.TemporaryDirectory(
        dir=destination.parent, prefix=f".{destination.name}.devstrap-"
    ) as scratch_name:
        scratch = Path(scratch_name)
        archive = scratch / "archive"
        staging = scratch / "staging"

        _stream_to(url, archive, timeout)
        count = _unpack(archive, staging, strip_components, patterns)
        archive.unlink()

        if replace:
            _swap_in(staging, destination, scratch)
        else:
            _merge_in(staging, destination)

    logger.info("Extracted %d entries from %s → %s", count, url, destination)
    return count


def fetch(resource: RemoteResource, *, timeout: int = DEFAULT_TIMEOUT) -> int:
    """Materialize a RemoteResource at its destination."""
    destination = Path(resource.destination)
    if resource.mode == "raw":
        return download(resource.url, destination, timeout=timeout)
    return extract_archive(
        resource.url,
        destination,
        strip_components=resource.strip_components,
        include=resource.include,
        replace=resource.replace,
        timeout=timeout,
    )
