"""
Method classifier - partitions scenario methods into roles by name.

A scenario declares its behavior through ordinary methods whose names start
with a role prefix:

- ARRANGE: ``before_``, ``given_``, ``arrange_`` (run once before examples)
- ACT: ``act_``, ``do_`` (run for every example, after its pre-actions)
- TEARDOWN: ``after_``, ``finally_`` (run once after examples)
- EXAMPLE: ``when_``, ``it_``, ``should_``, ``then_``, ``assert_``

Only public functions taking no arguments besides ``self``, returning
nothing, and whose name contains the scenario's separator are considered.
Methods are collected from the scenario type and its ancestors, excluding
root types (``Scenario`` itself or a host adapter) and what they inherit.

Example usage:
    from scenario_core.classifier import classify

    classification = classify(calculator_addition)
    for method in classification.examples:
        print(method.name, method.skipped)
"""

import inspect
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .markers import get_tag, is_skipped, is_tagged

logger = logging.getLogger(__name__)

ROOT_ATTRIBUTE = "__scenario_root__"
DEFAULT_SEPARATOR = "_"

METHOD_ORDER_DECLARATION = "declaration"
METHOD_ORDER_LEGACY = "legacy"
METHOD_ORDERS = (METHOD_ORDER_DECLARATION, METHOD_ORDER_LEGACY)


class Role(Enum):
    """Role a scenario method plays in an execution cycle."""
    ARRANGE = "arrange"
    ACT = "act"
    TEARDOWN = "teardown"
    EXAMPLE = "example"


# Checked in this order; the first matching prefix decides the role.
ROLE_PREFIXES: Dict[Role, Tuple[str, ...]] = {
    Role.ARRANGE: ("before_", "given_", "arrange_"),
    Role.ACT: ("act_", "do_"),
    Role.TEARDOWN: ("after_", "finally_"),
    Role.EXAMPLE: ("when_", "it_", "should_", "then_", "assert_"),
}


@dataclass(frozen=True)
class DeclaredMethod:
    """
    A convention-named method discovered on a scenario type.

    Attributes:
        name: Method name as declared
        role: Role derived from the name prefix
        declaring_type: Type whose body provides the method
        tagged: True if the method carries a tag marker
        tag: Tag display name (may be empty even when tagged)
        skipped: True if the declaring or concrete type is marked skipped
    """
    name: str
    role: Role
    declaring_type: type
    tagged: bool = False
    tag: str = ""
    skipped: bool = False


@dataclass(frozen=True)
class Classification:
    """
    Role-partitioned methods of one scenario type, in execution order.

    ``examples`` already has tag filtering applied; ``tags`` lists the
    non-empty tag names of the selected examples.
    """
    scenario_type: type
    separator: str
    method_order: str
    arrange: Tuple[DeclaredMethod, ...] = field(default_factory=tuple)
    act: Tuple[DeclaredMethod, ...] = field(default_factory=tuple)
    teardown: Tuple[DeclaredMethod, ...] = field(default_factory=tuple)
    examples: Tuple[DeclaredMethod, ...] = field(default_factory=tuple)
    tags: Tuple[str, ...] = field(default_factory=tuple)
    skipped: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scenario": self.scenario_type.__name__,
            "skipped": self.skipped,
            "method_order": self.method_order,
            "tags": list(self.tags),
            "arrange": [m.name for m in self.arrange],
            "act": [m.name for m in self.act],
            "teardown": [m.name for m in self.teardown],
            "examples": [
                {"name": m.name, "tag": m.tag, "skipped": m.skipped}
                for m in self.examples
            ],
        }


_cache: Dict[Tuple[type, str, str], Classification] = {}
_cache_lock = threading.Lock()


def is_root(cls: type) -> bool:
    """True for ``Scenario`` and host adapter types."""
    return bool(cls.__dict__.get(ROOT_ATTRIBUTE, False))


def role_for(name: str) -> Optional[Role]:
    """Return the role implied by a method name, or None."""
    for role, prefixes in ROLE_PREFIXES.items():
        if any(name.startswith(prefix) for prefix in prefixes):
            return role
    return None


def is_method_for_consideration(name: str, value: Any, separator: str = DEFAULT_SEPARATOR) -> bool:
    """
    Check the shape constraints for a convention method.

    The method must be a public plain function, take only ``self``, declare
    no return value other than None, and contain the separator in its name.
    """
    if name.startswith("_") or separator not in name:
        return False
    if not inspect.isfunction(value):
        return False

    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        return False

    if len(signature.parameters) != 1:
        return False
    return signature.return_annotation in (inspect.Signature.empty, None, "None")


def scenario_chain(cls: type) -> List[type]:
    """
    Types contributing methods to ``cls``, most derived first.

    Root types and everything they inherit from are excluded; mixins listed
    after a root base still contribute.
    """
    excluded = {object}
    for klass in cls.__mro__:
        if is_root(klass):
            excluded.update(klass.__mro__)
    return [klass for klass in cls.__mro__ if klass not in excluded]


def _declaring_type(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in vars(klass):
            return klass
    return cls


def _discover(cls: type, separator: str, method_order: str) -> List[str]:
    chain = scenario_chain(cls)
    if method_order == METHOD_ORDER_DECLARATION:
        chain = list(reversed(chain))

    names: List[str] = []
    for klass in chain:
        for name, value in vars(klass).items():
            if name in names:
                continue
            if is_method_for_consideration(name, value, separator):
                names.append(name)
    return names


def _preserve_inheritance_order(cls: type, methods: List[DeclaredMethod], method_order: str) -> List[DeclaredMethod]:
    """
    Reverse bottom-up discovery when the scenario sits more than one level
    below a root type, so ancestors' methods run first.
    """
    if method_order != METHOD_ORDER_LEGACY or not methods:
        return methods
    direct_base = cls.__bases__[0] if cls.__bases__ else object
    if is_root(direct_base):
        return methods
    return list(reversed(methods))


def classify(
    cls: type,
    separator: Optional[str] = None,
    method_order: Optional[str] = None,
) -> Classification:
    """
    Classify the convention methods of a scenario type.

    Args:
        cls: Scenario type to inspect
        separator: Word separator (default: the type's ``separator`` attribute)
        method_order: 'declaration' or 'legacy' (default: the type's
            ``method_order`` attribute)

    Returns:
        Cached Classification for the type

    Raises:
        ValueError: If method_order is not a known ordering
    """
    separator = separator or getattr(cls, "separator", DEFAULT_SEPARATOR)
    method_order = method_order or getattr(cls, "method_order", METHOD_ORDER_DECLARATION)
    if method_order not in METHOD_ORDERS:
        raise ValueError(
            f"Invalid method_order: {method_order}. Must be one of {', '.join(METHOD_ORDERS)}."
        )

    key = (cls, separator, method_order)
    with _cache_lock:
        cached = _cache.get(key)
    if cached is not None:
        return cached

    classification = _build(cls, separator, method_order)
    with _cache_lock:
        _cache[key] = classification
    return classification


def _build(cls: type, separator: str, method_order: str) -> Classification:
    type_skipped = is_skipped(cls)
    buckets: Dict[Role, List[DeclaredMethod]] = {role: [] for role in Role}

    for name in _discover(cls, separator, method_order):
        role = role_for(name)
        if role is None:
            continue
        func = getattr(cls, name)
        declaring = _declaring_type(cls, name)
        buckets[role].append(DeclaredMethod(
            name=name,
            role=role,
            declaring_type=declaring,
            tagged=is_tagged(func),
            tag=get_tag(func),
            skipped=type_skipped or is_skipped(declaring),
        ))

    ordered = {
        role: _preserve_inheritance_order(cls, methods, method_order)
        for role, methods in buckets.items()
    }

    act = [m for m in ordered[Role.ACT] if not is_skipped(m.declaring_type)]

    examples = ordered[Role.EXAMPLE]
    tagged = [m for m in examples if m.tagged]
    if tagged:
        examples = tagged

    classification = Classification(
        scenario_type=cls,
        separator=separator,
        method_order=method_order,
        arrange=tuple(ordered[Role.ARRANGE]),
        act=tuple(act),
        teardown=tuple(ordered[Role.TEARDOWN]),
        examples=tuple(examples),
        tags=tuple(m.tag for m in examples if m.tag),
        skipped=type_skipped,
    )
    logger.debug(
        "Classified %s: %d arrange, %d act, %d teardown, %d example(s)",
        cls.__name__,
        len(classification.arrange),
        len(classification.act),
        len(classification.teardown),
        len(classification.examples),
    )
    return classification


def clear_cache() -> None:
    """Drop all cached classifications."""
    with _cache_lock:
        _cache.clear()
