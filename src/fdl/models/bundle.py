"""The ordered container of root resources returned by a run."""

import json
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .base import Resource

__all__ = ["Bundle"]


class Bundle:
    """
    Root resources of one run, in ascending canonical path order.

    Usage:
        bundle = Bundle(resources)
        print(bundle.to_json(indent=2))
    """

    def __init__(self, entries: Optional[Iterable[Resource]] = None, bundle_type: str = "batch"):
        self.entries: List[Resource] = list(entries or [])
        self.type = bundle_type

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Resource:
        return self.entries[index]

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __repr__(self) -> str:
        kinds = ", ".join(r.resource_type for r in self.entries)
        return f"Bundle([{kinds}])"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceType": "Bundle",
            "type": self.type,
            "entry": [{"resource": r.to_dict()} for r in self.entries],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
