import pytest
from PIL import Image

from touchup_editor.core.session import EditorSession


class FakeShortcutHost:
    """Stands in for the Tk root: records bind_all / unbind_all calls."""

    def __init__(self):
        self.bindings = {}
        self.unbound = []

    def bind_all(self, sequence, func):
        self.bindings[sequence] = func

    def unbind_all(self, sequence):
        self.bindings.pop(sequence, None)
        self.unbound.append(sequence)

    def press(self, sequence):
        return self.bindings[sequence](None)


class Recorder:
    def __init__(self):
        self.saved = []
        self.cancelled = 0

    def on_save(self, data):
        self.saved.append(data)

    def on_cancel(self):
        self.cancelled += 1


def solid(size=(100, 100), color=(255, 255, 255, 255)):
    return Image.new("RGBA", size, color)


@pytest.fixture
def white_raster():
    return solid()


@pytest.fixture
def shortcut_host():
    return FakeShortcutHost()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def session(recorder, shortcut_host):
    # scale 1, pan 0: display coordinates equal image coordinates
    return EditorSession(solid(), recorder.on_save, recorder.on_cancel, shortcut_host=shortcut_host)
