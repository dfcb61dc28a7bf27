"""
Signal system for stackdock.

Decorator-declared signals with callback validation. The engine uses them to
publish each new snapshot and status transition to observers.

Usage:
    class MyEngine:
        @signal
        def snapshot_changed(self, snapshot: Snapshot) -> None:
            '''Emitted after every committed or rolled-back transition.'''

    engine = MyEngine()
    engine.snapshot_changed.connect(lambda snapshot: print(len(snapshot.stacks)))
    engine.snapshot_changed(snapshot)  # or engine.snapshot_changed.emit(snapshot)
"""
import inspect
import logging
import weakref
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


class SignalError(Exception):
    """Exception raised for signal-related errors."""
    pass


class Signal:
    """
    A signal that can have callbacks connected to it.

    Signals are callable - calling the signal emits it.
    Validates callback arity against the signal's signature.
    A callback that raises is logged and does not stop the others.
    """

    def __init__(self, name: str = "", signature: Any = None) -> None:
        """
        Initialize the signal.

        Args:
            name: Signal name (for error messages).
            signature: The signal method's signature for validation.
        """
        self.name = name
        self._callbacks: List[Callable] = []
        self._expected_params: List[inspect.Parameter] = []

        if signature:
            sig = inspect.signature(signature)
            self._expected_params = [
                p for pname, p in sig.parameters.items() if pname != "self"
            ]

    def connect(self, callback: Callable) -> None:
        """
        Connect a callback to this signal.

        Args:
            callback: Function to call when signal is emitted.

        Raises:
            SignalError: If callback cannot accept the signal's arguments.
        """
        if callback in self._callbacks:
            return
        self._validate_callback(callback)
        self._callbacks.append(callback)

    def _validate_callback(self, callback: Callable) -> None:
        try:
            callback_sig = inspect.signature(callback)
        except (ValueError, TypeError):
            # Can't inspect signature (e.g., built-in), skip validation
            return

        params = list(callback_sig.parameters.values())
        if any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params):
            return

        positional = [
            p for p in params
            if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ]
        required = [p for p in positional if p.default is inspect.Parameter.empty]
        expected = len(self._expected_params)

        if len(required) > expected or len(positional) < expected:
            raise SignalError(
                f"Callback for signal '{self.name}' takes {len(positional)} "
                f"parameters, but signal emits {expected}. "
                f"Signal signature: ({', '.join(p.name for p in self._expected_params)})"
            )

    def disconnect(self, callback: Callable) -> None:
        """Disconnect a callback from this signal."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def disconnect_all(self) -> None:
        """Disconnect all callbacks from this signal."""
        self._callbacks.clear()

    def emit(self, *args, **kwargs) -> None:
        """
        Emit the signal, calling all connected callbacks.

        Args:
            *args: Positional arguments to pass to callbacks.
            **kwargs: Keyword arguments to pass to callbacks.
        """
        for callback in list(self._callbacks):
            try:
                callback(*args, **kwargs)
            except Exception:
                logger.exception("Callback %r for signal '%s' failed", callback, self.name)

    def __call__(self, *args, **kwargs) -> None:
        """Emit the signal (shorthand for emit())."""
        self.emit(*args, **kwargs)

    def is_connected(self, callback: Callable) -> bool:
        """Check if a callback is connected to this signal."""
        return callback in self._callbacks

    def get_connections(self) -> List[Callable]:
        """Get list of connected callbacks."""
        return list(self._callbacks)


class SignalDescriptor:
    """
    Descriptor that provides per-instance Signal objects.

    Instances are held weakly, so a discarded engine takes its signals with it.
    """

    def __init__(self, name: str, signature: Any = None) -> None:
        self.name = name
        self.signature = signature
        self.instance_signals: "weakref.WeakKeyDictionary[Any, Signal]" = weakref.WeakKeyDictionary()

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self

        if obj not in self.instance_signals:
            self.instance_signals[obj] = Signal(
                name=self.name,
                signature=self.signature
            )

        return self.instance_signals[obj]

    def __set__(self, obj, value) -> None:
        raise SignalError(f"Cannot reassign signal '{self.name}'")


def signal(func=None):
    """
    Decorator to declare a method as a signal.

    The decorated method's signature is used to validate connected callbacks;
    its body is documentation only.

    Args:
        func: The method being decorated.

    Returns:
        SignalDescriptor that creates per-instance Signal objects.
    """
    if func is None:
        # Called as @signal() with parentheses
        def decorator(f):
            return signal(f)
        return decorator

    return SignalDescriptor(name=func.__name__, signature=func)
