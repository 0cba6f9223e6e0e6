"""Path normalisation.

Every path that leaves a detector goes through :func:`normalize` before it
is compared, sorted or cached.  The canonical form is:

* leading ``~`` expanded to the home directory (best effort),
* forward slashes only, no repeated slashes,
* no trailing slash unless the path is a bare root (``/`` or ``C:/``),
* symlinks resolved when the path exists on disk.

Nothing in here raises for a bad or missing path: the syntactically
cleaned input is the fallback answer.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from urllib.parse import unquote, urlparse

_SLASH_RUN = re.compile(r"/+")
_DRIVE_ROOT = re.compile(r"^[A-Za-z]:/$")
# file:///C:/x parses to path "/C:/x"
_URI_DRIVE = re.compile(r"^/[A-Za-z]:")
_DRIVE = re.compile(r"^[A-Za-z]:$")
_DRIVE_ABS = re.compile(r"^[A-Za-z]:/")


def _home() -> str | None:
    """Home directory, or ``None`` when it cannot be determined."""
    try:
        home = str(Path.home())
    except (RuntimeError, KeyError):
        return None
    if not home or home == "~":
        return None
    return home


def _is_bare_root(path: str) -> bool:
    return path == "/" or bool(_DRIVE_ROOT.match(path))


def norm(path: str) -> str:
    """Syntactic normalisation only (no filesystem access).

    ``~`` is expanded only when it stands alone or is followed by a
    separator; ``~user`` forms are left untouched.
    """
    if path == "~" or path.startswith(("~/", "~\\")):
        home = _home()
        if home is None:
            return path
        if len(home) > 1 and home[-1] in "\\/":
            home = home[:-1]
        path = home + path[1:]

    path = _SLASH_RUN.sub("/", path.replace("\\", "/"))

    if path.endswith("/") and not _is_bare_root(path):
        path = path[:-1]
    return path


def _is_absolute(path: str) -> bool:
    return path.startswith("/") or bool(_DRIVE_ABS.match(path))


def normalize(path: str | os.PathLike[str] | None) -> str | None:
    """Return the canonical form of *path*, or ``None`` for empty input.

    Symlinks are resolved with a strict ``resolve()``; when that fails
    (missing path, permission denied, symlink loop) the syntactically
    cleaned input is returned instead, anchored at the working directory
    if it was relative.  An unexpanded ``~`` is left alone.  The result
    is idempotent: ``normalize(normalize(p)) == normalize(p)``.
    """
    if path is None:
        return None
    raw = os.fspath(path)
    if not raw:
        return None

    cleaned = norm(raw)
    try:
        resolved = Path(cleaned).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        if _is_absolute(cleaned) or cleaned.startswith("~"):
            return cleaned
        return norm(os.path.abspath(cleaned))
    return norm(str(resolved))


def dirname(path: str) -> str:
    """Parent of a normalised path; a bare root is its own parent."""
    if _is_bare_root(path):
        return path
    head, sep, _ = path.rpartition("/")
    if not sep:
        return "."
    if not head:
        return "/"
    if _DRIVE.match(head):
        return head + "/"
    return head


def is_within(path: str, parent: str) -> bool:
    """True when normalised *path* equals *parent* or lies below it."""
    if path == parent:
        return True
    prefix = parent if parent.endswith("/") else parent + "/"
    return path.startswith(prefix)


def uri_to_path(uri: str) -> str:
    """Convert a ``file://`` URI to a filesystem path.

    Anything that is not a ``file`` URI is returned unchanged, so plain
    paths reported by language services pass straight through.
    """
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return uri

    path = unquote(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        path = f"//{parsed.netloc}{path}"
    elif _URI_DRIVE.match(path):
        path = path[1:]
    return path


def to_native(path: str) -> str:
    """Presentation-only: swap ``/`` for the platform separator."""
    if os.sep == "/":
        return path
    return path.replace("/", os.sep)


def current_dir() -> str:
    """Normalised process working directory."""
    cwd = normalize(os.getcwd())
    assert cwd is not None  # os.getcwd() is never empty
    return cwd
