"""Joint trajectory generation.

Trajectory state is kept per joint type; each update call writes the next
desired position or velocity into the joint.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .defines import (
    ELBOW_GOLD,
    MAX_DOF_PER_MECH,
    MAX_MECH,
    ONE_MS,
    SHOULDER_GOLD,
    Z_INS_GOLD,
)
from .structs import DOF

_SINUSOID_MAX_SPEED = math.radians(15)
_SINUSOID_VELOCITY_PERIOD = 2000.0

_LINEAR_SINUSOID_PERIOD = 2.0
_LINEAR_SINUSOID_MAX_SPEED = {
    SHOULDER_GOLD: math.radians(-4),
    ELBOW_GOLD: math.radians(4),
    Z_INS_GOLD: 0.02,
}


@dataclass
class Trajectory:
    """Parameters of one joint's trajectory."""

    start_time: float = 0.0
    end_pos: float = 0.0
    magnitude: float = 0.0
    period: float = 0.0
    start_pos: float = 0.0
    start_vel: float = 0.0


class TrajectoryGenerator:
    """Tracks trajectory state for every joint and produces set points."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self.clock = clock if clock is not None else time.monotonic
        self.trajectories: List[Trajectory] = [
            Trajectory() for _ in range(MAX_MECH * MAX_DOF_PER_MECH)
        ]

    def _traj(self, joint: DOF) -> Trajectory:
        if not 0 <= joint.type < len(self.trajectories):
            raise IndexError(f"no trajectory slot for joint type {joint.type}")
        return self.trajectories[joint.type]

    def _elapsed(self, traj: Trajectory) -> float:
        return self.clock() - traj.start_time

    def _begin(self, joint: DOF, magnitude: float, period: float) -> Trajectory:
        traj = self._traj(joint)
        traj.start_time = self.clock()
        traj.start_pos = joint.jpos
        traj.start_vel = joint.jvel
        joint.jpos_d = joint.jpos
        joint.jvel_d = joint.jvel
        traj.magnitude = magnitude
        traj.period = period
        return traj

    def start(self, joint: DOF, end_pos: float = 0.0, period: float = 0.0) -> Trajectory:
        """Start a trajectory from the current state towards ``end_pos``."""
        return self._begin(joint, end_pos - joint.jpos, period)

    def start_mag(self, joint: DOF, mag: float = 0.0, period: float = 0.0) -> Trajectory:
        """Start a trajectory from the current state with magnitude ``mag``."""
        return self._begin(joint, mag, period)

    def stop(self, joint: DOF) -> None:
        """Hold the current position with zero velocity and zero torque."""
        traj = self._traj(joint)
        traj.start_time = self.clock()
        traj.start_pos = joint.jpos
        traj.start_vel = 0.0
        joint.jpos_d = joint.jpos
        joint.jvel_d = 0.0
        joint.tau_d = 0.0
        joint.current_cmd = 0

    def update_sinusoid_velocity(self, joint: DOF) -> None:
        """Sinusoidal velocity on the gold shoulder; zero velocity elsewhere."""
        t = self._elapsed(self._traj(joint))
        if joint.type == SHOULDER_GOLD:
            joint.jvel_d = -_SINUSOID_MAX_SPEED * math.sin(
                2 * math.pi * (1 / _SINUSOID_VELOCITY_PERIOD) * t
            )
        else:
            joint.jvel_d = 0.0

    def update_linear_sinusoid_velocity(self, joint: DOF) -> bool:
        """Ramp the velocity of the first gold joints up sinusoidally.

        Returns True once the ramp is over; the velocity is then left as is.
        """
        t = self._elapsed(self._traj(joint))
        if t >= _LINEAR_SINUSOID_PERIOD / 2:
            return True
        max_speed = _LINEAR_SINUSOID_MAX_SPEED.get(joint.type)
        if max_speed is None:
            joint.jvel_d = 0.0
        else:
            joint.jvel_d = max_speed * (
                1 - math.cos(2 * math.pi * (1 / _LINEAR_SINUSOID_PERIOD) * t)
            )
        return False

    def update_sinusoid_position(self, joint: DOF) -> None:
        """Sinusoidal position about the start, eased in over the first quarter period."""
        traj = self._traj(joint)
        if traj.period == 0:
            raise ValueError("sinusoidal position trajectory needs a non-zero period")
        t = self._elapsed(traj)
        if t < traj.period / 4:
            joint.jpos_d = (
                -traj.magnitude * 0.5 * (1 - math.cos(4 * math.pi * t / traj.period))
                + traj.start_pos
            )
        else:
            joint.jpos_d = -traj.magnitude * math.sin(2 * math.pi * t / traj.period) + traj.start_pos

    def update_linear_sinusoid_position(self, joint: DOF) -> None:
        """Advance the position with a sinusoidal ramp, then at constant rate."""
        traj = self._traj(joint)
        t = self._elapsed(traj)
        if t < traj.period / 2:
            joint.jpos_d += (
                ONE_MS * traj.magnitude * (1 - math.cos(2 * math.pi * (1 / traj.period) * t))
            )
        else:
            joint.jpos_d += ONE_MS * traj.magnitude

    def update_position(self, joint: DOF) -> bool:
        """Move through a half-cosine to start plus magnitude over one period.

        Returns True while the move is in progress, False once it is over.
        """
        traj = self._traj(joint)
        t = self._elapsed(traj)
        if t < traj.period:
            joint.jpos_d = (
                0.5 * traj.magnitude * (1 - math.cos(2 * math.pi * (1 / (2 * traj.period)) * t))
                + traj.start_pos
            )
            return True
        return False