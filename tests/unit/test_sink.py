from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from cpm.codegen import FileSystemSink, MemorySink, OutputSink


def test_sinks_satisfy_protocol(tmp_path):
    assert isinstance(MemorySink(), OutputSink)
    assert isinstance(FileSystemSink(tmp_path), OutputSink)


def test_filesystem_sink_writes_utf8_with_lf(tmp_path):
    sink = FileSystemSink(tmp_path)
    sink.makedirs("a/b")
    sink.makedirs("a/b")  # existing is fine
    with sink.open(PurePosixPath("a/b/c.txt")) as fh:
        fh.write("héllo\nworld\n")
    assert (tmp_path / "a/b/c.txt").read_bytes() == "héllo\nworld\n".encode("utf-8")


def test_filesystem_sink_truncates(tmp_path):
    sink = FileSystemSink(tmp_path)
    with sink.open("f.txt") as fh:
        fh.write("a much longer first version")
    with sink.open("f.txt") as fh:
        fh.write("short")
    assert (tmp_path / "f.txt").read_text(encoding="utf-8") == "short"


def test_filesystem_sink_missing_parent_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        with FileSystemSink(tmp_path).open("missing/f.txt") as fh:
            fh.write("x")


def test_memory_sink_records_dirs_and_files():
    sink = MemorySink()
    sink.makedirs("cpm_out/onchain/go/")
    with sink.open("cpm_out/onchain/go/x.go") as fh:
        fh.write("package x\n")
    assert sink.dirs == {"cpm_out", "cpm_out/onchain", "cpm_out/onchain/go"}
    assert sink.read(PurePosixPath("cpm_out/onchain/go/x.go")) == "package x\n"


def test_memory_sink_drops_output_when_writer_fails():
    sink = MemorySink()
    with sink.open("f") as fh:
        fh.write("complete")
    with pytest.raises(RuntimeError):
        with sink.open("f") as fh:
            fh.write("partial")
            raise RuntimeError("boom")
    assert sink.files == {"f": "complete"}
    with pytest.raises(RuntimeError):
        with sink.open("g") as fh:
            fh.write("partial")
            raise RuntimeError("boom")
    assert "g" not in sink.files
