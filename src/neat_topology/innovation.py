from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InnovationTracker:
    """Per-generation registry of structural innovations.

    Identical ``(src, dst)`` connections created within one generation share an
    id. ``reset`` forgets the mapping but keeps the counter, so an id is never
    reused for a different structure.
    """

    next_innovation: int = 0
    conn_innov: dict[tuple[int, int], int] = field(default_factory=dict)

    def get_connection_innovation(self, src: int, dst: int) -> int:
        key = (src, dst)
        if key not in self.conn_innov:
            self.conn_innov[key] = self.next_innovation
            self.next_innovation += 1
        return self.conn_innov[key]

    def reset(self) -> None:
        self.conn_innov.clear()
