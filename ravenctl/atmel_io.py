"""Digital I/O pins on the control boards: PLC state in, status bits out."""

from __future__ import annotations

from .defines import WD_PERIOD
from .structs import ControllerState, RobotDevice

BIT0 = 0x01
BIT1 = 0x02
BIT2 = 0x04
BIT3 = 0x08
BIT4 = 0x10
BIT5 = 0x20
BIT6 = 0x40
BIT7 = 0x80

# Output pins
PIN_LS0 = BIT0
PIN_LS1 = BIT1
PIN_FP = BIT2
PIN_READY = BIT3
PIN_WD = BIT4

# Input pins
PIN_PS0 = BIT6  # state bit 0 (LSB)
PIN_PS1 = BIT7  # state bit 1 (MSB)


class AtmelOutputs:
    """Builds the output byte each cycle, driving the watchdog square wave."""

    def __init__(self) -> None:
        self.counter = 0

    def update(self, device: RobotDevice, runlevel: int, state: ControllerState) -> int:
        """Compute the output pins, write them to each active mechanism and return them."""
        outputs = 0

        if runlevel > 1 and device.surgeon_mode:
            outputs |= PIN_FP

        if state.initialized:
            outputs |= PIN_READY

        outputs |= runlevel & (PIN_LS0 | PIN_LS1)

        if not state.soft_estopped:
            if self.counter <= WD_PERIOD // 2:
                outputs |= PIN_WD
            elif self.counter >= WD_PERIOD:
                self.counter = 0

        for mech in device.mech[: state.num_mech]:
            mech.outputs = outputs

        self.counter += 1
        return outputs


def plc_state(device: RobotDevice) -> int:
    """Return the run level reported by the PLC on the first mechanism's inputs."""
    return (device.mech[0].inputs & (PIN_PS0 | PIN_PS1)) >> 6