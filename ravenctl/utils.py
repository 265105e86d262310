"""Helpers shared by the control loop: saturation, joint iteration and small conversions."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterator, List, Tuple

from .defines import (
    GRASP1,
    GRASP1_GOLD,
    GRASP1_GREEN,
    GRASP2,
    GRASP2_GOLD,
    GRASP2_GREEN,
    MAX_DOF_PER_MECH,
    NO_CONNECTION,
    NSEC_PER_SEC,
    SHORT_MAX,
    SHORT_MIN,
    TOOL_ROT,
    TOOL_ROT_GOLD,
    TOOL_ROT_GREEN,
    WRIST,
    WRIST_GOLD,
    WRIST_GREEN,
)
from .structs import DOF, JointState, Mechanism, RobotDevice

TimeSpec = Tuple[int, int]

_TOOL_DOF_TYPES = frozenset(
    {
        TOOL_ROT_GOLD,
        TOOL_ROT_GREEN,
        WRIST_GOLD,
        WRIST_GREEN,
        GRASP1_GOLD,
        GRASP1_GREEN,
        GRASP2_GOLD,
        GRASP2_GREEN,
    }
)


class ShortStatus(IntEnum):
    """Outcome of saturating an integer to the signed 16-bit range."""

    UNDERFLOW = -1
    OK = 0
    OVERFLOW = 1


def to_short(value: int) -> Tuple[int, ShortStatus]:
    """Clamp ``value`` to a signed short and report whether it saturated."""
    if value > SHORT_MAX:
        return SHORT_MAX, ShortStatus.OVERFLOW
    if value < SHORT_MIN:
        return SHORT_MIN, ShortStatus.UNDERFLOW
    return value, ShortStatus.OK


def iter_mech_joints(mech: Mechanism) -> Iterator[DOF]:
    """Yield the connected joints of one mechanism, skipping the unused slot."""
    for index, joint in enumerate(mech.joint[:MAX_DOF_PER_MECH]):
        if index != NO_CONNECTION:
            yield joint


def iter_joints(device: RobotDevice, num_mech: int) -> Iterator[Tuple[Mechanism, DOF]]:
    """Yield ``(mechanism, joint)`` for every connected joint of the active mechanisms."""
    for mech in device.mech[:num_mech]:
        for joint in iter_mech_joints(mech):
            yield mech, joint


def is_tool_dof(joint_type: DOF | int) -> bool:
    """Return True if the joint (or joint type index) belongs to the tool."""
    index = joint_type.type if isinstance(joint_type, DOF) else joint_type
    return index in _TOOL_DOF_TYPES


def tools_ready(mech: Mechanism) -> bool:
    """Return True when every tool joint of the mechanism has finished homing."""
    return all(
        mech.joint[index].state == JointState.READY
        for index in (TOOL_ROT, WRIST, GRASP1, GRASP2)
    )


def robot_ready(device: RobotDevice, num_mech: int) -> bool:
    """Return True when every connected joint of the active mechanisms is ready."""
    return all(joint.state == JointState.READY for _, joint in iter_joints(device, num_mech))


def tokenize(text: str, delim: str) -> List[str]:
    """Split ``text`` on a single-character delimiter, keeping empty tokens."""
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    text = text.split("\0", 1)[0]
    return text.split(delim)


def ts_normalize(sec: int, nsec: int) -> TimeSpec:
    """Roll whole seconds out of the nanosecond field."""
    while nsec >= NSEC_PER_SEC:
        nsec -= NSEC_PER_SEC
        sec += 1
    return sec, nsec


def is_before(a: TimeSpec, b: TimeSpec) -> bool:
    """Return True if time ``a`` is strictly earlier than time ``b``."""
    return a[0] < b[0] or (a[0] == b[0] and a[1] < b[1])


def ts_subtract(time1: TimeSpec, time2: TimeSpec) -> TimeSpec:
    """Return ``time1 - time2`` as ``(sec, nsec)``, or ``(0, 0)`` if ``time1 <= time2``."""
    sec1, nsec1 = time1
    sec2, nsec2 = time2
    if sec1 < sec2 or (sec1 == sec2 and nsec1 <= nsec2):
        return 0, 0
    sec = sec1 - sec2
    if nsec1 < nsec2:
        return sec - 1, nsec1 + NSEC_PER_SEC - nsec2
    return sec, nsec1 - nsec2


def get_quaternion(mat: List[List[float]]) -> Tuple[float, float, float, float]:
    """Convert a 3x3 rotation matrix to ``(x, y, z, w)`` the way the controller does.

    The vector components take their magnitudes from the following slot
    of the intermediate result, so only ``w`` is a true quaternion term.
    """
    if len(mat) != 3 or any(len(row) != 3 for row in mat):
        raise ValueError("rotation matrix must be 3x3")
    m = mat
    w = math.sqrt(max(0.0, 1 + m[0][0] + m[1][1] + m[2][2])) / 2
    x = math.sqrt(max(0.0, 1 + m[0][0] - m[1][1] - m[2][2])) / 2
    y = math.sqrt(max(0.0, 1 - m[0][0] + m[1][1] - m[2][2])) / 2
    z = math.sqrt(max(0.0, 1 - m[0][0] - m[1][1] + m[2][2])) / 2
    del x
    q_x = math.copysign(y, m[2][1] - m[1][2])
    q_y = math.copysign(z, m[0][2] - m[2][0])
    q_z = math.copysign(w, m[1][0] - m[0][1])
    return q_x, q_y, q_z, w


def set_posd_to_pos(device: RobotDevice, num_mech: int) -> None:
    """Make the desired pose of each active mechanism coincide with its current pose."""
    for mech in device.mech[:num_mech]:
        mech.pos_d.x = mech.pos.x
        mech.pos_d.y = mech.pos.y
        mech.pos_d.z = mech.pos.z
        mech.ori_d.yaw = mech.ori.yaw
        mech.ori_d.pitch = mech.ori.pitch
        mech.ori_d.roll = mech.ori.roll
        mech.ori_d.grasp = mech.ori.grasp
        mech.ori_d.R = [list(row) for row in mech.ori.R]