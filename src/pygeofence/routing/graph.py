"""Zone-to-zone route graph.

A small fixed network of zones joined by hand-drawn polylines that
approximate real roads. Every defined segment is also usable in reverse
(its polyline reversed), so reachability is symmetric while polyline
orientation follows the direction of travel.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, Sequence

from pygeofence.models.geo import Coordinate

EdgeKey = tuple[str, str]


def _pts(*pairs: tuple[float, float]) -> tuple[Coordinate, ...]:
    return tuple(Coordinate(lat=lat, lng=lng) for lat, lng in pairs)


DEFAULT_ROUTE_GRAPH_PATHS: dict[EdgeKey, tuple[Coordinate, ...]] = {
    ("palace", "abbey"): _pts(
        (51.5014, -0.1419),
        (51.5008, -0.1390),  # Birdcage Walk
        (51.5005, -0.1350),
        (51.5002, -0.1300),
        (51.4993, -0.1273),
    ),
    ("abbey", "eye"): _pts(
        (51.4993, -0.1273),
        (51.5008, -0.1250),  # Westminster Bridge
        (51.5012, -0.1220),
        (51.5033, -0.1195),
    ),
    ("eye", "stpauls"): _pts(
        (51.5033, -0.1195),
        (51.5080, -0.1180),  # Waterloo Bridge
        (51.5110, -0.1170),
        (51.5130, -0.1100),  # Fleet St
        (51.5138, -0.0984),
    ),
    ("stpauls", "tower"): _pts(
        (51.5138, -0.0984),
        (51.5110, -0.0900),  # Cannon St
        (51.5090, -0.0800),
        (51.5081, -0.0759),
    ),
    ("tower", "shard"): _pts(
        (51.5081, -0.0759),
        (51.5055, -0.0754),  # Tower Bridge
        (51.5045, -0.0865),
    ),
    ("shard", "museum"): _pts(
        (51.5045, -0.0865),
        (51.5070, -0.0880),  # London Bridge
        (51.5150, -0.0900),
        (51.5170, -0.1100),  # Holborn
        (51.5194, -0.1270),
    ),
    ("museum", "hydepark"): _pts(
        (51.5194, -0.1270),
        (51.5160, -0.1300),  # Oxford St
        (51.5140, -0.1500),
        (51.5120, -0.1600),  # Marble Arch
        (51.5073, -0.1657),
    ),
    ("hydepark", "palace"): _pts(
        (51.5073, -0.1657),
        (51.5030, -0.1500),  # Constitution Hill
        (51.5014, -0.1419),
    ),
}


class RouteGraph:
    """Undirected hop graph over zone ids with directed polyline payloads."""

    def __init__(
        self,
        paths: Mapping[EdgeKey, Sequence[Coordinate]],
        *,
        nodes: Sequence[str] = (),
    ) -> None:
        self._edges: dict[EdgeKey, tuple[Coordinate, ...]] = {}
        self._adjacency: dict[str, list[str]] = {node: [] for node in nodes}

        # Explicit definitions take precedence over synthesized reverses.
        for (start, end), polyline in paths.items():
            self._edges[(start, end)] = tuple(polyline)
        for (start, end), polyline in paths.items():
            self._edges.setdefault((end, start), tuple(reversed(tuple(polyline))))
            self._link(start, end)
            self._link(end, start)

    @classmethod
    def default(cls, *, nodes: Sequence[str] = ()) -> RouteGraph:
        return cls(DEFAULT_ROUTE_GRAPH_PATHS, nodes=nodes)

    def _link(self, a: str, b: str) -> None:
        neighbors = self._adjacency.setdefault(a, [])
        if b not in neighbors:
            neighbors.append(b)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._adjacency

    def neighbors(self, zone_id: str) -> list[str]:
        """Neighbours in insertion order (this order breaks BFS ties)."""
        return list(self._adjacency.get(zone_id, ()))

    def edge(self, start: str, end: str) -> tuple[Coordinate, ...] | None:
        return self._edges.get((start, end))

    def zone_path(self, start: str, end: str) -> list[str] | None:
        """Fewest-hop zone sequence from *start* to *end*, both included.

        Polyline length plays no part in the choice. ``None`` when
        unreachable.
        """
        if start == end:
            return [start]
        if start not in self._adjacency or end not in self._adjacency:
            return None

        parents: dict[str, str | None] = {start: None}
        queue: deque[str] = deque([start])
        while queue:
            current = queue.popleft()
            for neighbor in self._adjacency[current]:
                if neighbor in parents:
                    continue
                parents[neighbor] = current
                if neighbor == end:
                    return self._unwind(parents, end)
                queue.append(neighbor)
        return None

    @staticmethod
    def _unwind(parents: dict[str, str | None], end: str) -> list[str]:
        path: list[str] = []
        node: str | None = end
        while node is not None:
            path.append(node)
            node = parents[node]
        path.reverse()
        return path

    def shortest_path(self, start: str, end: str) -> list[Coordinate] | None:
        """Concatenated polyline along the fewest-hop path.

        Empty when ``start == end``; ``None`` when unreachable. Joint
        points shared by consecutive segments are kept twice.
        """
        zones = self.zone_path(start, end)
        if zones is None:
            return None
        coordinates: list[Coordinate] = []
        for current, nxt in zip(zones, zones[1:]):
            coordinates.extend(self._edges.get((current, nxt), ()))
        return coordinates
