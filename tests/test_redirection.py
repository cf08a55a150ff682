import os

import pytest

from minish.redirection import RedirType, Redirection, RedirectionError, Redirector

OUT = RedirType.PATH_FD | RedirType.OUTPUT


def _open_write(path):
    return os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)


def _free_fd():
    fd = os.open(os.devnull, os.O_RDONLY)
    os.close(fd)
    return fd


def test_output_redirection_is_restored(tmp_path):
    original = tmp_path / "original.txt"
    target = tmp_path / "target.txt"
    fd = _open_write(original)
    try:
        redirector = Redirector()
        redirector.redirect(Redirection(str(target), fd, OUT))
        os.write(fd, b"redirected")
        redirector.recover()
        os.write(fd, b"restored")
    finally:
        os.close(fd)
    assert target.read_bytes() == b"redirected"
    assert original.read_bytes() == b"restored"


def test_output_truncates_existing_file(tmp_path):
    original = tmp_path / "original.txt"
    target = tmp_path / "target.txt"
    target.write_bytes(b"old content")
    fd = _open_write(original)
    try:
        with Redirector() as redirector:
            redirector.redirect(Redirection(str(target), fd, OUT))
            os.write(fd, b"new")
    finally:
        os.close(fd)
    assert target.read_bytes() == b"new"


def test_append_keeps_existing_content(tmp_path):
    original = tmp_path / "original.txt"
    target = tmp_path / "target.txt"
    target.write_bytes(b"old")
    fd = _open_write(original)
    try:
        with Redirector() as redirector:
            redirector.redirect(
                Redirection(str(target), fd, OUT | RedirType.APPEND)
            )
            os.write(fd, b"new")
    finally:
        os.close(fd)
    assert target.read_bytes() == b"old" + b"new"


def test_input_redirection(tmp_path):
    original = tmp_path / "original.txt"
    original.write_bytes(b"from original")
    source = tmp_path / "source.txt"
    source.write_bytes(b"from source")
    fd = os.open(original, os.O_RDONLY)
    try:
        redirector = Redirector()
        redirector.redirect(
            Redirection(str(source), fd, RedirType.PATH_FD | RedirType.INPUT)
        )
        redirected = os.read(fd, 100)
        redirector.recover()
        restored = os.read(fd, 100)
    finally:
        os.close(fd)
    assert redirected == b"from source"
    assert restored == b"from original"


def test_descriptor_to_descriptor(tmp_path):
    file_a = tmp_path / "a.txt"
    file_b = tmp_path / "b.txt"
    fd_a = _open_write(file_a)
    fd_b = _open_write(file_b)
    try:
        inode_a = os.fstat(fd_a).st_ino
        inode_b = os.fstat(fd_b).st_ino
        redirector = Redirector()
        redirector.redirect(Redirection(fd_b, fd_a, RedirType.OUTPUT))
        inode_during = os.fstat(fd_a).st_ino
        os.write(fd_a, b"to b")
        redirector.recover()
        inode_after = os.fstat(fd_a).st_ino
        os.write(fd_a, b"to a")
    finally:
        os.close(fd_a)
        os.close(fd_b)
    assert inode_during == inode_b
    assert inode_after == inode_a
    assert file_b.read_bytes() == b"to b"
    assert file_a.read_bytes() == b"to a"


def test_close_descriptor():
    fd = os.open(os.devnull, os.O_RDONLY)
    Redirector().redirect(Redirection(fd, fd, RedirType.NODES))
    with pytest.raises(OSError):
        os.fstat(fd)


def test_nokeep_is_not_restored(tmp_path):
    original = tmp_path / "original.txt"
    target = tmp_path / "target.txt"
    fd = _open_write(original)
    try:
        redirector = Redirector()
        redirector.redirect(Redirection(str(target), fd, OUT | RedirType.NOKEEP))
        redirector.recover()
        os.write(fd, b"still redirected")
    finally:
        os.close(fd)
    assert target.read_bytes() == b"still redirected"
    assert original.read_bytes() == b""


def test_apply_twice_to_same_descriptor_restores_original(tmp_path):
    original = tmp_path / "original.txt"
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    fd = _open_write(original)
    try:
        with Redirector() as redirector:
            redirector.apply(
                [
                    Redirection(str(first), fd, OUT),
                    Redirection(str(second), fd, OUT),
                ]
            )
            os.write(fd, b"last one wins")
        os.write(fd, b"back home")
    finally:
        os.close(fd)
    assert first.read_bytes() == b""
    assert second.read_bytes() == b"last one wins"
    assert original.read_bytes() == b"back home"


def test_missing_input_file_raises(tmp_path):
    original = tmp_path / "original.txt"
    fd = _open_write(original)
    try:
        redirector = Redirector()
        with pytest.raises(RedirectionError):
            redirector.redirect(
                Redirection(
                    str(tmp_path / "missing.txt"),
                    fd,
                    RedirType.PATH_FD | RedirType.INPUT,
                )
            )
        redirector.recover()
        os.write(fd, b"unchanged")
    finally:
        os.close(fd)
    assert original.read_bytes() == b"unchanged"


def test_closed_destination_is_opened(tmp_path):
    target = tmp_path / "target.txt"
    fd = _free_fd()
    redirector = Redirector()
    redirector.redirect(Redirection(str(target), fd, OUT))
    try:
        redirector.recover()
        os.write(fd, b"opened")
    finally:
        os.close(fd)
    assert target.read_bytes() == b"opened"