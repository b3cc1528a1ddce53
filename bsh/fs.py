"""File-system helpers for ``Bsh``.

Thin wrappers around ``os`` / ``shutil`` whose failures are routed through
``Bsh.panic`` instead of being raised at every call site. The ``*_err``
variants return the error instead.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import stat as stat_mod
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from bsh.errors import BshError

PathLike = str | os.PathLike


class FileOps:
    """Mixin providing file helpers; the host class supplies ``panic`` and ``verbosef``."""

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def getwd(self) -> str:
        try:
            return os.getcwd()
        except OSError as e:
            self.panic(e)
            return ""

    def chdir(self, path: PathLike) -> None:
        self.verbosef("Chdir: %s", path)
        try:
            os.chdir(path)
        except OSError as e:
            self.panic(e)

    def mkdir_all(self, path: PathLike) -> None:
        self.verbosef("MkdirAll: %s", path)
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            self.panic(e)

    @contextlib.contextmanager
    def in_dir(self, path: PathLike) -> Iterator[None]:
        """Create *path* if needed and make it the cwd for the ``with`` body."""
        prev = self.getwd()
        self.mkdir_all(path)
        self.chdir(path)
        try:
            yield
        finally:
            self.chdir(prev)

    def remove(self, path: PathLike) -> None:
        """Remove a file or an empty directory."""
        self.verbosef("Remove: %s", path)
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.remove(path)
        except OSError as e:
            self.panic(e)

    def remove_all(self, path: PathLike) -> None:
        """Remove *path* and everything below it. A missing path is fine."""
        self.verbosef("RemoveAll: %s", path)
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.panic(e)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _stat_or_none(self, path: PathLike) -> os.stat_result | None:
        try:
            return os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            self.panic(e)
            return None

    def exists(self, path: PathLike) -> bool:
        return self._stat_or_none(path) is not None

    def is_file(self, path: PathLike) -> bool:
        st = self._stat_or_none(path)
        return st is not None and not stat_mod.S_ISDIR(st.st_mode)

    def is_dir(self, path: PathLike) -> bool:
        st = self._stat_or_none(path)
        return st is not None and stat_mod.S_ISDIR(st.st_mode)

    def stat(self, path: PathLike) -> os.stat_result | None:
        self.verbosef("Stat: %s", path)
        try:
            return os.stat(path)
        except OSError as e:
            self.panic(e)
            return None

    # ------------------------------------------------------------------
    # Copy
    # ------------------------------------------------------------------

    def copy(self, src: PathLike, dst: PathLike) -> bool:
        """Copy file *src* to *dst*, overwriting it.

        Returns False if *src* does not exist; other errors are escalated.
        """
        err = self._copy(src, dst)
        if err is not None:
            if isinstance(err, FileNotFoundError):
                return False
            self.panic(err)
        return True

    def must_copy(self, src: PathLike, dst: PathLike) -> None:
        err = self._copy(src, dst)
        if err is not None:
            self.panic(err)

    def _copy(self, src: PathLike, dst: PathLike) -> BaseException | None:
        self.verbosef("Copy: %s => %s", src, dst)
        try:
            sf = open(src, "rb")
        except FileNotFoundError as e:
            return e
        except OSError as e:
            return BshError(f"error opening src {src}: {e}")
        with sf:
            try:
                info = os.fstat(sf.fileno())
            except OSError as e:
                return BshError(f"error reading src {src}: {e}")
            if not stat_mod.S_ISREG(info.st_mode):
                return BshError(f"{src} is not a regular file")
            try:
                df = open(dst, "wb")
            except OSError as e:
                return BshError(f"error creating dst {dst}: {e}")
            with df:
                try:
                    shutil.copyfileobj(sf, df)
                    dst_size = df.tell()
                except OSError as e:
                    return BshError(f"error copying from src {src} to dst {dst}: {e}")
        if dst_size != info.st_size:
            return BshError(
                f"{src} has {info.st_size} byte(s), but the copy {dst} only has {dst_size} byte(s)"
            )
        return None

    # ------------------------------------------------------------------
    # Write / append
    # ------------------------------------------------------------------

    def write(self, path: PathLike, contents: str) -> None:
        """Create or truncate *path* and write *contents*."""
        self._check(self._write(path, contents.encode(), append=False))

    def writef(self, path: PathLike, fmt: str, *args: Any) -> None:
        self._check(self._write(path, (fmt % args).encode(), append=False))

    def write_err(self, path: PathLike, contents: str) -> BaseException | None:
        return self._write(path, contents.encode(), append=False)

    def write_bytes(self, path: PathLike, data: bytes) -> None:
        self._check(self._write(path, data, append=False))

    def write_bytes_err(self, path: PathLike, data: bytes) -> BaseException | None:
        return self._write(path, data, append=False)

    def append(self, path: PathLike, contents: str) -> None:
        """Append *contents* to *path*, creating it if needed."""
        self._check(self._write(path, contents.encode(), append=True))

    def appendf(self, path: PathLike, fmt: str, *args: Any) -> None:
        self._check(self._write(path, (fmt % args).encode(), append=True))

    def append_err(self, path: PathLike, contents: str) -> BaseException | None:
        return self._write(path, contents.encode(), append=True)

    def append_bytes(self, path: PathLike, data: bytes) -> None:
        self._check(self._write(path, data, append=True))

    def append_bytes_err(self, path: PathLike, data: bytes) -> BaseException | None:
        return self._write(path, data, append=True)

    def _check(self, err: BaseException | None) -> None:
        if err is not None:
            self.panic(err)

    def _write(self, path: PathLike, data: bytes, append: bool) -> BaseException | None:
        if append:
            self.verbosef("Append to file: %s", path)
        else:
            self.verbosef("Write to file: %s", path)
        try:
            with open(path, "ab" if append else "wb") as f:
                f.write(data)
        except OSError as e:
            return e
        return None

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, path: PathLike) -> str:
        text, err = self.read_err(path)
        if err is not None:
            self.panic(err)
        return text

    def read_err(self, path: PathLike) -> tuple[str, BaseException | None]:
        try:
            return Path(path).read_bytes().decode(), None
        except (OSError, UnicodeDecodeError) as e:
            return "", e

    def read_file(self, path: PathLike) -> bytes:
        self.verbosef("Read from file: %s", path)
        try:
            return Path(path).read_bytes()
        except OSError as e:
            self.panic(e)
            return b""
