"""
Single Monty Hall game.

[T1] Classic formulation: three doors, one car, the host opens a goat door the
player did not pick, and the player either stays or switches to the remaining
closed door. Staying wins with probability 1/3, switching with 2/3.

Two implementations of the same game:
- play_round: one game at a time with rejection sampling for door choices
- play_rounds: vectorized NumPy block using direct index arithmetic
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

N_DOORS = 3

#: Safety cap on rejection-sampling draws before falling back to direct indexing
MAX_REJECTION_DRAWS = 64


class Door(Enum):
    """What stands behind a door."""

    GOAT = 0
    CAR = 1


@dataclass(frozen=True)
class GameOutcome:
    """
    Result of one game under both strategies.

    Attributes
    ----------
    won_by_staying : bool
        Player's first pick hid the car
    won_by_switching : bool
        The door switched to hid the car
    """

    won_by_staying: bool = False
    won_by_switching: bool = False

    def __post_init__(self) -> None:
        """Staying and switching pick different doors, so both cannot win."""
        if self.won_by_staying and self.won_by_switching:
            raise ValueError("CRITICAL: a game cannot be won by both staying and switching")


def set_doors(car_door: int) -> list[Door]:
    """Lay out the three doors with the car behind car_door."""
    doors = [Door.GOAT] * N_DOORS
    doors[car_door] = Door.CAR
    return doors


def pick_door_excluding(rng: np.random.Generator, excluded: set[int]) -> int:
    """
    Draw a door uniformly from those not in excluded.

    Rejection sampling: redraw from all doors until an eligible one comes up.
    After MAX_REJECTION_DRAWS misses, index directly into the eligible set,
    which has the same uniform distribution.
    """
    for _ in range(MAX_REJECTION_DRAWS):
        door = int(rng.integers(N_DOORS))
        if door not in excluded:
            return door

    eligible = [door for door in range(N_DOORS) if door not in excluded]
    if not eligible:
        raise ValueError(f"CRITICAL: no door left to pick, excluded={sorted(excluded)}")
    return eligible[int(rng.integers(len(eligible)))]


def play_round(rng: np.random.Generator) -> GameOutcome:
    """
    Play one game and score both strategies.

    Parameters
    ----------
    rng : np.random.Generator
        Generator owned by the calling thread

    Returns
    -------
    GameOutcome
        Exactly one of the two strategies wins
    """
    car_door = int(rng.integers(N_DOORS))
    doors = set_doors(car_door)

    first_pick = int(rng.integers(N_DOORS))

    # Host opens a goat door the player did not pick
    revealed = pick_door_excluding(rng, {car_door, first_pick})

    # Only one door is left once the first pick and the revealed door are out
    switch_pick = pick_door_excluding(rng, {first_pick, revealed})

    return GameOutcome(
        won_by_staying=doors[first_pick] is Door.CAR,
        won_by_switching=doors[switch_pick] is Door.CAR,
    )


def play_rounds(rng: np.random.Generator, n_games: int) -> tuple[int, int]:
    """
    Play n_games games in one vectorized block.

    [T1] Door indices sum to 0 + 1 + 2 = 3, so with two doors known the third
    is 3 - a - b. When the first pick hides the car the host chooses between
    the other two doors with equal probability.

    Parameters
    ----------
    rng : np.random.Generator
        Generator owned by the calling thread
    n_games : int
        Games to play; the caller bounds this to keep allocations small

    Returns
    -------
    tuple[int, int]
        (wins by staying, wins by switching)
    """
    if n_games < 0:
        raise ValueError(f"CRITICAL: n_games must be >= 0, got {n_games}")
    if n_games == 0:
        return 0, 0

    car = rng.integers(N_DOORS, size=n_games)
    first_pick = rng.integers(N_DOORS, size=n_games)
    offset = rng.integers(1, N_DOORS, size=n_games)

    picked_car = first_pick == car
    revealed = np.where(
        picked_car,
        (first_pick + offset) % N_DOORS,
        N_DOORS - first_pick - car,
    )
    switch_pick = N_DOORS - first_pick - revealed

    wins_stay = int(np.count_nonzero(picked_car))
    wins_switch = int(np.count_nonzero(switch_pick == car))
    return wins_stay, wins_switch
