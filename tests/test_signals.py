import pytest

from stackdock.signals import Signal, SignalError, signal


class Emitter:
    @signal
    def changed(self, value: int) -> None:
        """Emitted with the new value."""

    @signal
    def reset(self) -> None:
        """Emitted without arguments."""


def test_connect_and_emit():
    emitter = Emitter()
    received = []
    emitter.changed.connect(received.append)
    emitter.changed(3)
    emitter.changed.emit(4)
    assert received == [3, 4]


def test_signals_are_per_instance():
    a, b = Emitter(), Emitter()
    received = []
    a.changed.connect(received.append)
    b.changed(1)
    assert received == []
    assert a.changed is not b.changed


def test_connect_is_idempotent_and_disconnect_works():
    emitter = Emitter()
    received = []
    emitter.changed.connect(received.append)
    emitter.changed.connect(received.append)
    emitter.changed(1)
    assert received == [1]

    emitter.changed.disconnect(received.append)
    assert not emitter.changed.is_connected(received.append)
    emitter.changed(2)
    assert received == [1]


def test_callback_arity_is_validated():
    emitter = Emitter()
    with pytest.raises(SignalError):
        emitter.changed.connect(lambda a, b: None)
    with pytest.raises(SignalError):
        emitter.reset.connect(lambda value: None)
    emitter.reset.connect(lambda value=None: None)
    emitter.changed.connect(lambda *args: None)


def test_failing_callback_is_logged_and_others_still_run(caplog):
    emitter = Emitter()
    received = []

    def broken(value):
        raise RuntimeError("boom")

    emitter.changed.connect(broken)
    emitter.changed.connect(received.append)
    emitter.changed(5)

    assert received == [5]
    assert "boom" in caplog.text


def test_signal_cannot_be_reassigned():
    emitter = Emitter()
    with pytest.raises(SignalError):
        emitter.changed = Signal("changed")


def test_disconnect_all():
    emitter = Emitter()
    emitter.reset.connect(lambda: None)
    emitter.reset.disconnect_all()
    assert emitter.reset.get_connections() == []
