from __future__ import annotations

import math
import random
from collections.abc import Sequence

import structlog
from src.domain.models import EnrollmentRecord, Group, GroupAssignment

logger = structlog.get_logger()


class GroupAssigner:
    """Split a snapshot of records into two near-equal random groups.

    Group A receives ``ceil(n / 2)`` records and group B the rest. Runs are
    intentionally not repeatable unless the caller injects a seeded ``rng``.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.SystemRandom()

    def run(self, snapshot: Sequence[EnrollmentRecord]) -> GroupAssignment:
        if not snapshot:
            logger.info("groups_nothing_to_assign")
            return GroupAssignment(empty=True)

        shuffled = list(snapshot)
        self.rng.shuffle(shuffled)
        split = math.ceil(len(shuffled) / 2)

        assignment = GroupAssignment(
            group_a=tuple(record.tagged(Group.A) for record in shuffled[:split]),
            group_b=tuple(record.tagged(Group.B) for record in shuffled[split:]),
        )
        logger.info(
            "groups_randomized",
            group_a=len(assignment.group_a),
            group_b=len(assignment.group_b),
        )
        return assignment
