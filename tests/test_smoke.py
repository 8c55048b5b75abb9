import errno
import io
import logging
import os

import pytest

from line_reverser import reverse
from line_reverser.main import main


def run(tmp_path, data: bytes):
    src = tmp_path / "in.txt"
    dst = tmp_path / "out.txt"
    src.write_bytes(data)
    status = main(["line-reverser", str(src), str(dst)])
    return status, dst.read_bytes()


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"hello\nworld\n", b"olleh\ndlrow\n"),
        (b"a\n\nbc\n", b"a\n\ncb\n"),
        (b"noeol", b"loeon"),
        (b"", b""),
    ],
)
def test_reverse_scenarios(tmp_path, data, expected):
    status, out = run(tmp_path, data)
    assert status == 0
    assert out == expected


def test_success_is_silent(tmp_path, capsys):
    status, _ = run(tmp_path, b"abc\n")
    assert status == 0
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""


def test_output_is_truncated(tmp_path):
    dst = tmp_path / "out.txt"
    dst.write_bytes(b"previous content that is much longer\n")
    status, out = run(tmp_path, b"xy\n")
    assert status == 0
    assert out == b"yx\n"


@pytest.mark.parametrize("extra", [[], ["one"], ["one", "two", "three"]])
def test_wrong_argument_count(tmp_path, capsys, extra):
    dst = tmp_path / "two"
    argv = ["line-reverser"] + [str(tmp_path / name) for name in extra]
    status = main(argv)

    assert status != 0
    assert capsys.readouterr().err.strip() == "Usage: line-reverser [in-file] [out-file]"
    assert not dst.exists()


def test_missing_input(tmp_path, capsys):
    src = tmp_path / "missing.txt"
    dst = tmp_path / "out.txt"
    status = main(["line-reverser", str(src), str(dst)])

    assert status != 0
    assert str(src) in capsys.readouterr().err
    assert not dst.exists()


def test_unwritable_output(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_bytes(b"abc\n")
    dst = tmp_path / "no-such-dir" / "out.txt"
    status = main(["line-reverser", str(src), str(dst)])

    assert status != 0
    assert str(dst) in capsys.readouterr().err


class FullSink(io.BytesIO):
    """Sink that fails every write, and fails again when closed."""

    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")

    def close(self):
        if not self.closed:
            super().close()
            raise OSError(errno.ENOSPC, "No space left on device")


def test_write_failure_reported_on_stderr(tmp_path, capsys, monkeypatch):
    src = tmp_path / "in.txt"
    src.write_bytes(b"abc\n")
    opened = []
    real_open = reverse._open

    def fake_open(path, mode):
        stream = FullSink() if mode == "wb" else real_open(path, mode)
        opened.append(stream)
        return stream

    monkeypatch.setattr(reverse, "_open", fake_open)
    status = main(["line-reverser", str(src), str(tmp_path / "out.txt")])

    assert status != 0
    assert capsys.readouterr().err.startswith("I/O error: write failed:")
    assert len(opened) == 2
    assert all(stream.closed for stream in opened)


@pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
def test_full_device_reported_on_stderr(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_bytes(b"hello\nworld\n")
    status = main(["line-reverser", str(src), "/dev/full"])

    assert status != 0
    assert capsys.readouterr().err.startswith("I/O error:")


def test_multibyte_input_warns(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        status, out = run(tmp_path, "Montréal\n".encode("utf-8"))

    assert status == 0
    assert len(out) == len("Montréal\n".encode("utf-8"))
    assert "non-ASCII" in caplog.text
