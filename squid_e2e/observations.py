"""Sink for informational UI checks.

Some tests look for optional affordances (a logout button, a footer, a
search box) whose absence is not a defect. Those results go here instead of
through ``assert``: they are logged, kept on the sink, and copied onto the
pytest report as ``user_properties`` so junit-xml output carries them. The
sink never raises.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    name: str
    value: Any
    nodeid: str = ""


class ObservationLog:
    def __init__(self, nodeid: str = "") -> None:
        self.nodeid = nodeid
        self._items: List[Observation] = []

    def note(self, name: str, value: Any) -> Any:
        """Record ``value`` under ``name`` and hand it back unchanged."""
        observation = Observation(name=name, value=value, nodeid=self.nodeid)
        self._items.append(observation)
        logger.info("%s: %s", name, value)
        return value

    @property
    def items(self) -> List[Observation]:
        return list(self._items)

    def get(self, name: str) -> Optional[Any]:
        for observation in reversed(self._items):
            if observation.name == name:
                return observation.value
        return None

    def as_user_properties(self) -> List[tuple]:
        return [(f"observation:{o.name}", o.value) for o in self._items]

    def __len__(self) -> int:
        return len(self._items)
