"""Run-level state machine driven by the PLC state bits on the control boards."""

from __future__ import annotations

import logging

from .atmel_io import PIN_PS0, PIN_PS1
from .defines import RL_E_STOP
from .structs import ControllerState, ParamPass, RobotDevice

logger = logging.getLogger(__name__)

# Sentinel larger than any run level the PLC can report.
_NO_RUNLEVEL = 9

# Cycles to wait before accepting a new run level; works around a PLC
# switching transient.
_RUNLEVEL_DELAY = 3


class StateMachine:
    """Selects the run level from the PLC inputs of every active mechanism."""

    def __init__(self) -> None:
        self.delay_counter = 0

    @staticmethod
    def desired_runlevel(device: RobotDevice, num_mech: int) -> int:
        """Return the lowest run level reported by the active mechanisms."""
        return min(
            (
                (mech.inputs & (PIN_PS0 | PIN_PS1)) >> 6
                for mech in device.mech[:num_mech]
            ),
            default=_NO_RUNLEVEL,
        )

    def step(
        self, device: RobotDevice, curr_params: ParamPass, state: ControllerState
    ) -> int:
        """Advance one control cycle and return the current run level.

        When the PLCs ask for a different run level, the change takes effect
        only after it has been requested for several consecutive cycles.
        Entering e-stop clears the initialized flag and the sub level.
        """
        desired = self.desired_runlevel(device, state.num_mech)

        if curr_params.runlevel == desired:
            return curr_params.runlevel
        if self.delay_counter < _RUNLEVEL_DELAY:
            self.delay_counter += 1
            return curr_params.runlevel

        self.delay_counter = 0
        curr_params.runlevel = desired
        device.runlevel = desired
        logger.info("Entered runlevel %d", desired)

        if desired == RL_E_STOP:
            if state.soft_estopped:
                logger.error("Software e-stop.")
                state.soft_estopped = False
            logger.error("*** ENTERED E-STOP STATE ***")
            state.initialized = False
            curr_params.sublevel = 0

        return curr_params.runlevel