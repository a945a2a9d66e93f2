import numpy as np
from typing import Sequence, Set


class KdTree:
    """
    KD-tree over 3D points for radius queries.
    Nodes live in flat lists and reference their children by slot index (-1 = empty).
    No rebalancing, so sorted input degrades to a linked list.
    """

    def __init__(self, dims: int = 3):
        self.dims = dims
        self._points: list[np.ndarray] = []
        self._ids: list[int] = []
        self._left: list[int] = []
        self._right: list[int] = []

    def __len__(self) -> int:
        return len(self._ids)

    @classmethod
    def from_points(cls, points: np.ndarray) -> "KdTree":
        """
        Build a tree from an (N, >=3) array, using row index as id.
        """
        tree = cls()
        for i, point in enumerate(points[:, : tree.dims]):
            tree.insert(point, i)
        return tree

    def _new_node(self, point: np.ndarray, point_id: int) -> int:
        self._points.append(point)
        self._ids.append(point_id)
        self._left.append(-1)
        self._right.append(-1)
        return len(self._ids) - 1

    def insert(self, point: Sequence[float], point_id: int) -> None:
        point = np.asarray(point, dtype=np.float64)[: self.dims]

        if not self._ids:
            self._new_node(point, point_id)
            return

        node = 0
        depth = 0
        while True:
            axis = depth % self.dims
            if point[axis] < self._points[node][axis]:
                child = self._left[node]
                if child == -1:
                    self._left[node] = self._new_node(point, point_id)
                    return
            else:
                child = self._right[node]
                if child == -1:
                    self._right[node] = self._new_node(point, point_id)
                    return
            node = child
            depth += 1

    def search(self, target: Sequence[float], radius: float) -> Set[int]:
        """
        Return ids of all points within Euclidean distance <= radius of target.
        """
        target = np.asarray(target, dtype=np.float64)[: self.dims]
        found = set()

        if not self._ids:
            return found

        # (node, depth) pairs
        stack = [(0, 0)]
        while stack:
            node, depth = stack.pop()
            node_point = self._points[node]

            deltas = np.abs(target - node_point)
            # Only do the exact check inside the cube around the target
            if np.all(deltas <= radius):
                if np.sqrt(np.dot(deltas, deltas)) <= radius:
                    found.add(self._ids[node])

            axis = depth % self.dims
            # Ties were inserted on the right, so the right test is inclusive
            if target[axis] + radius >= node_point[axis] and self._right[node] != -1:
                stack.append((self._right[node], depth + 1))
            if target[axis] - radius < node_point[axis] and self._left[node] != -1:
                stack.append((self._left[node], depth + 1))

        return found

    def depth(self) -> int:
        """Number of levels in the tree (0 when empty)."""
        if not self._ids:
            return 0

        deepest = 0
        stack = [(0, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            for child in (self._left[node], self._right[node]):
                if child != -1:
                    stack.append((child, level + 1))
        return deepest
