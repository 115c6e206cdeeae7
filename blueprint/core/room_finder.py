"""Room detection: minimal cycles in the corner/wall graph."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from blueprint.core import utils

if TYPE_CHECKING:
    from blueprint.core.corner import Corner

logger = logging.getLogger(__name__)


@dataclass
class _Step:
    corner: Corner
    previous_corners: list[Corner]


class RoomFinder:
    """
    Finds the rooms of a planar straight-line graph.

    Rooms are the smallest (by area) cycles of the graph. For every ordered
    pair of adjacent corners a depth-first search looks for the tightest
    cycle returning to the first corner, greedily turning by the smallest
    angle. The collected cycles are deduplicated up to rotation, and the
    clockwise ones (the exterior faces) are dropped.
    """

    def find_rooms(self, corners: list[Corner]) -> list[list[Corner]]:
        loops: list[list[Corner]] = []
        for first_corner in corners:
            for second_corner in first_corner.adjacent_corners():
                loops.append(self._find_tightest_cycle(first_corner, second_corner))

        unique_loops = self._remove_duplicate_rooms(loops)
        rooms = [loop for loop in unique_loops if not utils.is_clockwise(loop)]
        logger.debug(
            "Room search: %d candidate loops, %d unique, %d rooms",
            len(loops), len(unique_loops), len(rooms),
        )
        return rooms

    @staticmethod
    def _calculate_theta(previous: Corner, current: Corner, candidate: Corner) -> float:
        return utils.angle2pi(
            previous.x - current.x, previous.y - current.y,
            candidate.x - current.x, candidate.y - current.y,
        )

    def _find_tightest_cycle(self, first_corner: Corner, second_corner: Corner) -> list[Corner]:
        stack: list[_Step] = []
        step: _Step | None = _Step(corner=second_corner, previous_corners=[first_corner])
        visited: set[str] = {first_corner.id}

        while step is not None:
            current = step.corner
            visited.add(current.id)

            # back at the start, by a route other than the first wall
            if current is first_corner and current is not second_corner:
                return step.previous_corners

            candidates: list[Corner] = []
            for candidate in current.adjacent_corners():
                closes_loop = candidate is first_corner and current is not second_corner
                if candidate.id in visited and not closes_loop:
                    continue
                candidates.append(candidate)

            previous_corners = step.previous_corners + [current]
            if len(candidates) > 1:
                # largest angle pushed first, so the smallest is popped first
                previous = step.previous_corners[-1]
                candidates.sort(
                    key=lambda c: self._calculate_theta(previous, current, c),
                    reverse=True,
                )

            for candidate in candidates:
                stack.append(_Step(corner=candidate, previous_corners=previous_corners))

            step = stack.pop() if stack else None

        return []

    @staticmethod
    def _remove_duplicate_rooms(loops: list[list[Corner]]) -> list[list[Corner]]:
        """Keep the first of every set of loops that are rotations of each other."""
        results: list[list[Corner]] = []
        lookup: set[str] = set()
        for loop in loops:
            keys = [
                "-".join(corner.id for corner in utils.cycle(loop, shift))
                for shift in range(len(loop))
            ]
            if not keys:
                continue
            if any(key in lookup for key in keys):
                continue
            results.append(loop)
            lookup.add(keys[-1])
        return results
