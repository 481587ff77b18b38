"""
Markers for scenario types and example methods.

    @skip
    class parser_edge_cases(Scenario):
        ...

    class calculator(Scenario):
        @tag("focus")
        def when_dividing_by_zero(self):
            ...
"""

from typing import Any, Callable, Optional, Union

SKIP_ATTRIBUTE = "__scenario_skip__"
TAG_ATTRIBUTE = "__scenario_tag__"


def skip(cls: type) -> type:
    """Mark a scenario type as skipped. Subclasses inherit the marker."""
    setattr(cls, SKIP_ATTRIBUTE, True)
    return cls


def is_skipped(cls: Optional[type]) -> bool:
    if cls is None:
        return False
    return bool(getattr(cls, SKIP_ATTRIBUTE, False))


def tag(name: Union[str, Callable[..., Any]] = "") -> Any:
    """
    Tag an example method so that only tagged examples of its scenario run.

    Usable bare (``@tag``) or with a display name (``@tag("focus")``).
    """
    if callable(name):
        setattr(name, TAG_ATTRIBUTE, "")
        return name

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, TAG_ATTRIBUTE, name)
        return func

    return decorator


def is_tagged(func: Any) -> bool:
    return hasattr(func, TAG_ATTRIBUTE)


def get_tag(func: Any) -> str:
    """Return the tag name of a method, or an empty string."""
    return getattr(func, TAG_ATTRIBUTE, "") or ""
