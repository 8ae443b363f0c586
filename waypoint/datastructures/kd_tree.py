from __future__ import annotations
from typing import Iterable, List, NamedTuple, Optional, Tuple


class Point(NamedTuple):
    x: float
    y: float

    def distance_sq(self, other: "Point") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


class _KDNode:
    __slots__ = ("point", "axis", "left", "right")

    def __init__(self, point: Point, axis: int) -> None:
        self.point = point
        self.axis = axis  # 0 splits on x, 1 splits on y
        self.left: Optional[_KDNode] = None
        self.right: Optional[_KDNode] = None


class KDTree:
    """A 2-d tree answering Euclidean nearest-neighbour queries.

    Points passed to the constructor are built into a balanced tree by
    splitting on the median of alternating axes (x, y, x, ...). Points
    added later with :meth:`insert` descend from the root. Left subtrees
    hold strictly smaller coordinates on the split axis, right subtrees
    hold equal or larger ones. Equal points are stored once.
    """

    __slots__ = ("_root", "_size")

    def __init__(self, points: Optional[Iterable[Point]] = None) -> None:
        self._root: Optional[_KDNode] = None
        self._size = 0
        if points is not None:
            unique = list(dict.fromkeys(Point(float(p[0]), float(p[1])) for p in points))
            self._size = len(unique)
            self._root = self._build(unique, 0)  # Balanced bulk build instead of repeated inserts

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _build(self, points: List[Point], axis: int) -> Optional[_KDNode]:
        if not points:
            return None
        points.sort(key=lambda p: p[axis])
        mid = len(points) // 2
        # Equal coordinates belong on the right, so take the first of any run.
        while mid > 0 and points[mid - 1][axis] == points[mid][axis]:
            mid -= 1
        node = _KDNode(points[mid], axis)
        node.left = self._build(points[:mid], 1 - axis)
        node.right = self._build(points[mid + 1:], 1 - axis)
        return node

    # -----------------------------
    # Public API
    # -----------------------------
    def insert(self, point: Point) -> None:
        point = Point(float(point[0]), float(point[1]))
        if self._root is None:
            self._root = _KDNode(point, 0)
            self._size = 1
            return
        node = self._root
        while True:
            if node.point == point:
                return
            go_left = point[node.axis] < node.point[node.axis]
            child = node.left if go_left else node.right
            if child is None:
                child = _KDNode(point, 1 - node.axis)
                if go_left:
                    node.left = child
                else:
                    node.right = child
                self._size += 1
                return
            node = child

    def nearest(self, x: float, y: float) -> Point:
        """Return the stored point closest to ``(x, y)``."""
        if self._root is None:
            raise ValueError("nearest on empty tree")
        goal = Point(float(x), float(y))
        best = self._root.point
        best_d = best.distance_sq(goal)
        # (node, lower bound on the squared distance of anything below it)
        stack: List[Tuple[_KDNode, float]] = [(self._root, 0.0)]
        while stack:
            node, bound = stack.pop()
            if bound >= best_d:
                continue
            d = node.point.distance_sq(goal)
            if d < best_d:
                best, best_d = node.point, d
            diff = goal[node.axis] - node.point[node.axis]
            good, bad = (node.left, node.right) if diff < 0 else (node.right, node.left)
            # Push the far side first so the near side is searched first.
            if bad is not None:
                stack.append((bad, max(bound, diff * diff)))
            if good is not None:
                stack.append((good, bound))
        return best

    def points(self) -> List[Point]:
        out: List[Point] = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            out.append(node.point)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return out

    def __len__(self) -> int:
        return self._size
