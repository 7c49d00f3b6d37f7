"""Utility functions for Panekit."""

from typing import Any, Callable


def forward(to: Callable[[Any], Any], methods: list[str]) -> Callable[[type], type]:
    """Class decorator forwarding method calls to another object.

    ``to`` receives the instance the method is called on and returns the
    object that should handle the call.

    Example:
        @forward(lambda self: self.active, ["focus_up"])
        class Screen: ...
    """
    def _create_forwarder(method: str) -> Callable[..., Any]:
        def _forward_fn(self: Any, *args: Any, **kwargs: Any) -> Any:
            return getattr(to(self), method)(*args, **kwargs)
        _forward_fn.__name__ = method
        return _forward_fn

    def _forward(cls: type) -> type:
        for method in methods:
            setattr(cls, method, _create_forwarder(method))
        return cls

    return _forward
