"""File-descriptor redirection with backup and restore."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import IntFlag
from types import TracebackType
from typing import Iterable


class RedirType(IntFlag):
    """Flags describing how a redirection is carried out."""

    FD_FD = 0x0
    PATH_FD = 0x1
    NODES = 0x2
    NOKEEP = 0x8
    INPUT = 0x10
    OUTPUT = 0x20
    APPEND = 0x40


class RedirectionError(Exception):
    """Raised when a descriptor cannot be redirected or restored."""


@dataclass(frozen=True)
class Redirection:
    """One redirection: a file name or source descriptor, the destination descriptor, and flags."""

    target: str | int
    dest: int
    kind: RedirType


def _open_flags(kind: RedirType) -> int:
    if kind & RedirType.OUTPUT:
        flags = os.O_CREAT
        flags |= os.O_APPEND if kind & RedirType.APPEND else os.O_TRUNC
        flags |= os.O_RDWR if kind & RedirType.INPUT else os.O_WRONLY
        return flags
    return os.O_RDONLY


def _is_open(fd: int) -> bool:
    try:
        os.fstat(fd)
    except OSError:
        return False
    return True


def _flush_std() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError, OSError):
            pass


class Redirector:
    """Applies redirections and remembers the original descriptors so they can be restored."""

    def __init__(self) -> None:
        self._backups: list[tuple[int, int]] = []

    def _has_backup(self, fd: int) -> bool:
        return any(orig == fd for orig, _ in self._backups)

    def redirect(self, info: Redirection) -> None:
        """Carry out a single redirection."""
        if info.kind & RedirType.NODES:
            try:
                os.close(int(info.target))
            except OSError as exc:
                raise RedirectionError(f"close: {exc.strerror}") from exc
            return

        if (
            not info.kind & RedirType.NOKEEP
            and _is_open(info.dest)
            and not self._has_backup(info.dest)
        ):
            try:
                backup = os.dup(info.dest)
            except OSError as exc:
                raise RedirectionError(f"redirect: {exc.strerror}") from exc
            self._backups.append((info.dest, backup))

        from_path = bool(info.kind & RedirType.PATH_FD)
        if from_path:
            try:
                source = os.open(str(info.target), _open_flags(info.kind), 0o754)
            except OSError as exc:
                raise RedirectionError(f"open: {info.target}: {exc.strerror}") from exc
        else:
            source = int(info.target)

        _flush_std()
        try:
            os.dup2(source, info.dest)
        except OSError as exc:
            raise RedirectionError(f"dup2: {exc.strerror}") from exc
        finally:
            if from_path and source != info.dest:
                try:
                    os.close(source)
                except OSError as exc:
                    raise RedirectionError(f"close: {exc.strerror}") from exc

    def apply(self, redirections: Iterable[Redirection]) -> None:
        """Carry out redirections in order."""
        for info in redirections:
            self.redirect(info)

    def recover(self) -> None:
        """Restore every backed-up descriptor, most recent first."""
        _flush_std()
        while self._backups:
            orig, backup = self._backups[-1]
            try:
                os.dup2(backup, orig)
            except OSError as exc:
                raise RedirectionError(f"recover: {exc.strerror}") from exc
            self._backups.pop()
            os.close(backup)

    def __enter__(self) -> Redirector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.recover()