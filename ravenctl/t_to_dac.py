"""Conversion of desired joint torques into DAC commands for the amplifiers."""

from __future__ import annotations

from .defines import MAX_DOF_PER_MECH, NO_CONNECTION_GOLD, NO_CONNECTION_GREEN
from .structs import DOF, ControllerState, DOFType, RobotDevice
from .utils import to_short

_DAC_TEST_INITIAL = 0x4000
_DAC_MIDRANGE = 0x8000
_DAC_TEST_HIGH = 0xA000
_DAC_TEST_LOW = 0x6000


def _as_signed16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


def torque_to_dac_value(joint: DOF, dof_type: DOFType) -> int:
    """Return the saturated DAC count that produces the joint's desired torque."""
    tf_motor = 1 / dof_type.tau_per_amp
    tf_amplifier = dof_type.dac_per_amp
    dac_val = int(joint.tau_d * tf_motor * tf_amplifier)
    result, _ = to_short(dac_val)
    return result


def torque_to_dac(device: RobotDevice, state: ControllerState) -> None:
    """Set ``current_cmd`` on every connected joint of the active mechanisms."""
    for mech in device.mech[: state.num_mech]:
        for joint in mech.joint[:MAX_DOF_PER_MECH]:
            if joint.type in (NO_CONNECTION_GOLD, NO_CONNECTION_GREEN):
                continue
            joint.current_cmd = torque_to_dac_value(joint, state.dof_type(joint))
            if state.soft_estopped:
                joint.current_cmd = 0


def clear_dacs(device: RobotDevice, num_mech: int) -> None:
    """Command zero output on every joint of the active mechanisms."""
    for mech in device.mech[:num_mech]:
        for joint in mech.joint[:MAX_DOF_PER_MECH]:
            joint.current_cmd = 0


class DacTestPattern:
    """Square-wave DAC output used to validate the control boards."""

    def __init__(self) -> None:
        self.output = _DAC_TEST_INITIAL
        self.count = 0

    def apply(self, device: RobotDevice, num_mech: int) -> int:
        """Toggle the square wave, write it to every joint and return the command."""
        self.output = _DAC_TEST_HIGH if self.output < _DAC_MIDRANGE else _DAC_TEST_LOW
        self.count += 1
        command = _as_signed16(self.output)
        for mech in device.mech[:num_mech]:
            for joint in mech.joint[:MAX_DOF_PER_MECH]:
                joint.current_cmd = command
        return command