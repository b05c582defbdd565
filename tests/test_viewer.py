import logging

from UFOArray.integrations import viewer as viewer_module
from UFOArray.integrations.viewer import DefaultViewer, open_in_default_viewer


class FakeProcess:
    def __init__(self, cmd, **kwargs):
        self.cmd = cmd
        self.kwargs = kwargs
        self.returncode = None

    def poll(self):
        return self.returncode


def _use_posix(monkeypatch, platform, launched):
    def fake_popen(cmd, **kwargs):
        proc = FakeProcess(cmd, **kwargs)
        launched.append(proc)
        return proc

    monkeypatch.setattr(viewer_module.os, "name", "posix")
    monkeypatch.setattr(viewer_module.sys, "platform", platform)
    monkeypatch.setattr(viewer_module.subprocess, "Popen", fake_popen)


def test_linux_uses_xdg_open(monkeypatch):
    launched = []
    _use_posix(monkeypatch, "linux", launched)
    monkeypatch.setattr(viewer_module, "_default_viewer", DefaultViewer())

    open_in_default_viewer("/tmp/store.txt")

    assert [proc.cmd for proc in launched] == [["xdg-open", "/tmp/store.txt"]]
    assert launched[0].kwargs["start_new_session"] is True


def test_macos_uses_open(monkeypatch):
    launched = []
    _use_posix(monkeypatch, "darwin", launched)

    DefaultViewer().open("store.txt")

    assert [proc.cmd for proc in launched] == [["open", "store.txt"]]


def test_finished_launchers_are_reaped(monkeypatch):
    launched = []
    _use_posix(monkeypatch, "linux", launched)
    viewer = DefaultViewer()

    viewer.open("a.txt")
    viewer.open("b.txt")
    assert viewer.reap() == 2

    launched[0].returncode = 0
    assert viewer.reap() == 1

    launched[1].returncode = 0
    viewer.open("c.txt")
    assert viewer.reap() == 1


def test_launch_failure_is_logged_not_raised(monkeypatch, caplog):
    def fail(cmd, **kwargs):
        raise FileNotFoundError("xdg-open")

    monkeypatch.setattr(viewer_module.os, "name", "posix")
    monkeypatch.setattr(viewer_module.sys, "platform", "linux")
    monkeypatch.setattr(viewer_module.subprocess, "Popen", fail)

    viewer = DefaultViewer()
    with caplog.at_level(logging.WARNING, logger="UFOArray.integrations.viewer"):
        viewer.open("store.txt")

    assert "Failed to open store.txt" in caplog.text
    assert viewer.reap() == 0
