"""Bounded sliding window of derived poses."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator

from dunksense.core.types import DerivedPose, PhaseName

SignalKey = Callable[[DerivedPose], float | None]


class WindowBuffer:
    """Fixed-capacity FIFO history of derived poses.

    Appending at capacity evicts the oldest entry. The buffer is only
    mutated through append(); everything else is a read-only view.
    """

    def __init__(self, capacity: int = 300) -> None:
        """Initialize an empty buffer.

        Args:
            capacity: Maximum number of retained poses (300 is ~10s at 30fps)
        """
        if capacity <= 0:
            raise ValueError(f"Buffer capacity must be positive, got {capacity}")
        self._items: deque[DerivedPose] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    @property
    def is_full(self) -> bool:
        return len(self._items) == self.capacity

    @property
    def latest(self) -> DerivedPose | None:
        """Most recently appended pose."""
        return self._items[-1] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[DerivedPose]:
        return iter(self._items)

    def append(self, pose: DerivedPose) -> DerivedPose | None:
        """Add a pose, evicting the oldest one when full.

        Args:
            pose: Pose to retain

        Returns:
            The evicted pose, or None if nothing was evicted
        """
        evicted = self._items[0] if self.is_full else None
        self._items.append(pose)
        return evicted

    def values(self, key: SignalKey, phase: PhaseName | None = None) -> list[float]:
        """Defined values of a signal, optionally within one phase.

        Args:
            key: Extracts the signal from a pose (None = undefined)
            phase: Restrict to poses tagged with this phase

        Returns:
            Signal values in buffer order, undefined ones skipped
        """
        poses = self._items if phase is None else self.in_phase(phase)
        return [value for value in map(key, poses) if value is not None]

    def max_by(self, key: SignalKey) -> DerivedPose | None:
        """Pose with the largest defined signal value."""
        candidates = [pose for pose in self._items if key(pose) is not None]
        if not candidates:
            return None
        return max(candidates, key=key)  # type: ignore[arg-type]

    def min_by(self, key: SignalKey) -> DerivedPose | None:
        """Pose with the smallest defined signal value."""
        candidates = [pose for pose in self._items if key(pose) is not None]
        if not candidates:
            return None
        return min(candidates, key=key)  # type: ignore[arg-type]

    def in_phase(self, phase: PhaseName) -> list[DerivedPose]:
        """Poses tagged with the given phase, in buffer order."""
        return [pose for pose in self._items if pose.phase is phase]

    def count(self, key: SignalKey) -> int:
        """Number of poses where the signal is defined."""
        return sum(1 for pose in self._items if key(pose) is not None)


def hip_height_of(pose: DerivedPose) -> float | None:
    return pose.hip_height


def velocity_of(pose: DerivedPose) -> float | None:
    return pose.vertical_velocity
