"""
Per-run state for the FDL interpreter.

One RunContext is created for every listing that is interpreted. It owns
the identity cache, the root registry, the path table and the error
reporter; nothing in it is shared between runs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple
from contextlib import contextmanager

from ..errors import ErrorReporter
from ..resolver import PathTable


@dataclass
class IdentityCache:
    """
    Canonical path -> materialized object.

    Grows monotonically during a run and never evicts. A stored None is
    indistinguishable from a miss.
    """
    objects: Dict[str, Any] = field(default_factory=dict)

    def get(self, path: str) -> Optional[Any]:
        return self.objects.get(path)

    def put(self, path: str, obj: Any) -> None:
        self.objects[path] = obj

    def __contains__(self, path: str) -> bool:
        return self.objects.get(path) is not None

    def __len__(self) -> int:
        return len(self.objects)


@dataclass
class RootRegistry:
    """Level-0 resources keyed by canonical path, read back in path order."""
    roots: Dict[str, Any] = field(default_factory=dict)

    def register(self, path: str, resource: Any) -> None:
        self.roots[path] = resource

    def items(self) -> List[Tuple[str, Any]]:
        """Registered (path, resource) pairs in ascending path order."""
        return sorted(self.roots.items(), key=lambda item: item[0])

    def values(self) -> List[Any]:
        return [resource for _, resource in self.items()]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self.roots)


@dataclass
class RunContext:
    """
    The full state of one interpretation run.

    Tracks:
    - The path table filled by the resolver
    - The identity cache and root registry filled by the interpreter
    - Static and runtime diagnostics
    - The current nesting level
    """
    paths: PathTable = field(default_factory=PathTable)
    cache: IdentityCache = field(default_factory=IdentityCache)
    roots: RootRegistry = field(default_factory=RootRegistry)
    reporter: ErrorReporter = field(default_factory=ErrorReporter)
    level: int = 0

    @contextmanager
    def down_level(self):
        """
        Context manager for evaluating an assignment's value.

        Usage:
            with ctx.down_level():
                value = evaluate(expr.value)
        """
        self.level += 1
        try:
            yield self.level
        finally:
            self.level -= 1

    @property
    def at_top_level(self) -> bool:
        return self.level == 0

    @property
    def has_errors(self) -> bool:
        return self.reporter.has_errors


def create_context(reporter: Optional[ErrorReporter] = None) -> RunContext:
    """Create a fresh context, optionally reusing a reporter that already
    holds the static diagnostics of the listing."""
    if reporter is None:
        return RunContext()
    return RunContext(reporter=reporter)
