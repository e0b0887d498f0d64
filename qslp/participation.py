# qslp/participation.py
# SIMULATED display data. Random numbers for the "company participation"
# card; nothing here is measured and nothing here feeds the calculator.
import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParticipationSnapshot:
    participants: int
    total_employees: int
    participation_rate: float  # percent
    simulated: bool = True


def simulate_participation(rng: Optional[random.Random] = None) -> ParticipationSnapshot:
    """
    participants in [10, 59], employees in [100, 299].
    Pass a seeded random.Random for repeatable output.
    """
    rng = rng or random.Random()
    participants = rng.randint(10, 59)
    employees = rng.randint(100, 299)
    return ParticipationSnapshot(
        participants=participants,
        total_employees=employees,
        participation_rate=participants / employees * 100.0,
    )
