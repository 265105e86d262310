"""Position and velocity estimation: low-pass filtering of encoder readings."""

from __future__ import annotations

from .defines import (
    ELBOW_GOLD,
    ENC_CNTS_PER_REV,
    GRASP1_GOLD,
    GRASP1_GREEN,
    GRASP2_GOLD,
    GRASP2_GREEN,
    MAX_DOF_PER_MECH,
    PI,
    SHOULDER_GOLD,
    STEP_PERIOD,
    TOOL_ROT_GOLD,
    TOOL_ROT_GREEN,
    WRIST_GOLD,
    WRIST_GREEN,
    Z_INS_GOLD,
)
from .structs import DOF, ControllerState, DOFType, RobotDevice, ToolType

# 120 Hz third-order Butterworth low-pass filter.
_B = (0.02864, 0.08591, 0.08591, 0.02864)
_A = (1.0000, 1.5189, -0.9600, 0.2120)

_GOLD_POSITIONING = frozenset({SHOULDER_GOLD, ELBOW_GOLD, Z_INS_GOLD})
_GOLD_TOOL = frozenset({TOOL_ROT_GOLD, WRIST_GOLD, GRASP1_GOLD, GRASP2_GOLD})
_GREEN_TOOL = frozenset({TOOL_ROT_GREEN, WRIST_GREEN, GRASP1_GREEN, GRASP2_GREEN})

_REVERSED_ENCODERS = {
    ToolType.RII_SQUARE: _GOLD_POSITIONING | _GREEN_TOOL,
    ToolType.DV_ADAPTER: _GOLD_POSITIONING,
}
_DEFAULT_REVERSED = _GOLD_POSITIONING | _GOLD_TOOL | _GREEN_TOOL


def _encoder_reversed(joint_type: int, tool_type: int) -> bool:
    reversed_types = _REVERSED_ENCODERS.get(tool_type, _DEFAULT_REVERSED)
    return joint_type in reversed_types


def get_state_lpf(joint: DOF, tool_type: int, dof_type: DOFType) -> None:
    """Filter the joint's motor position and derive its velocity.

    Sets ``joint.mpos`` and ``joint.mvel`` and advances the filter history
    held in ``dof_type``. The first call primes the filter at steady state.
    """
    enc_val = float(joint.enc_val)
    if _encoder_reversed(joint.type, tool_type):
        enc_val = -enc_val

    motor_pos = (2.0 * PI) * (1.0 / ENC_CNTS_PER_REV) * (enc_val - joint.enc_offset)

    old_pos = dof_type.old_mpos
    old_filt = dof_type.old_filtered_mpos

    if not dof_type.filter_rdy:
        old_pos[0:3] = [motor_pos] * 3
        old_filt[0:3] = [motor_pos] * 3
        dof_type.filter_rdy = True

    filt_pos = (
        _B[0] * motor_pos
        + _B[1] * old_pos[0]
        + _B[2] * old_pos[1]
        + _B[3] * old_pos[2]
        + _A[1] * old_filt[0]
        + _A[2] * old_filt[1]
        + _A[3] * old_filt[2]
    )

    # First difference is safe here: the low-pass filter removed the noise.
    joint.mvel = (filt_pos - old_filt[0]) / STEP_PERIOD
    joint.mpos = filt_pos

    old_pos[0:3] = [motor_pos, old_pos[0], old_pos[1]]
    old_filt[0:3] = [filt_pos, old_filt[0], old_filt[1]]


def state_estimate(device: RobotDevice, state: ControllerState) -> None:
    """Update motor position and velocity of every joint of the active mechanisms."""
    for mech in device.mech[: state.num_mech]:
        for joint in mech.joint[:MAX_DOF_PER_MECH]:
            get_state_lpf(joint, mech.tool_type, state.dof_type(joint))


def reset_filter(joint: DOF, dof_type: DOFType) -> None:
    """Fill the filter history with the joint's desired motor position."""
    dof_type.old_mpos[0:3] = [joint.mpos_d] * 3
    dof_type.old_filtered_mpos[0:3] = [joint.mpos_d] * 3