import math

import pytest

from ravenctl.defines import (
    ELBOW_GOLD,
    GRASP1,
    GRASP1_GREEN,
    GRASP2_GOLD,
    MAX_DOF_PER_MECH,
    NO_CONNECTION,
    NSEC_PER_SEC,
    SHORT_MAX,
    SHORT_MIN,
    SHOULDER_GOLD,
    TOOL_ROT_GOLD,
    WRIST_GREEN,
    Z_INS_GREEN,
)
from ravenctl.structs import DOF, JointState, Mechanism, RobotDevice
from ravenctl.utils import (
    ShortStatus,
    get_quaternion,
    is_before,
    is_tool_dof,
    iter_joints,
    iter_mech_joints,
    robot_ready,
    set_posd_to_pos,
    to_short,
    tokenize,
    tools_ready,
    ts_normalize,
    ts_subtract,
)


def _ready_device():
    device = RobotDevice()
    for mech in device.mech:
        for index, joint in enumerate(mech.joint):
            if index != NO_CONNECTION:
                joint.state = JointState.READY
    return device


def test_to_short_in_range():
    assert to_short(123) == (123, ShortStatus.OK)


def test_to_short_saturates():
    assert to_short(SHORT_MAX + 1) == (SHORT_MAX, ShortStatus.OVERFLOW)
    assert to_short(SHORT_MIN - 1) == (SHORT_MIN, ShortStatus.UNDERFLOW)
    assert to_short(SHORT_MAX) == (SHORT_MAX, ShortStatus.OK)


def test_iter_mech_joints_skips_unused_slot():
    mech = Mechanism()
    joints = list(iter_mech_joints(mech))
    assert len(joints) == MAX_DOF_PER_MECH - 1
    assert all(j is not mech.joint[NO_CONNECTION] for j in joints)
    assert joints[0] is mech.joint[0]
    assert joints[-1] is mech.joint[MAX_DOF_PER_MECH - 1]


def test_iter_joints_covers_active_mechs_in_order():
    device = RobotDevice()
    pairs = list(iter_joints(device, 2))
    assert len(pairs) == 2 * (MAX_DOF_PER_MECH - 1)
    assert pairs[0][0] is device.mech[0]
    assert pairs[-1][0] is device.mech[1]
    assert pairs[-1][1] is device.mech[1].joint[MAX_DOF_PER_MECH - 1]


def test_iter_joints_single_mech():
    device = RobotDevice()
    assert all(mech is device.mech[0] for mech, _ in iter_joints(device, 1))


@pytest.mark.parametrize("jtype", [TOOL_ROT_GOLD, WRIST_GREEN, GRASP1_GREEN, GRASP2_GOLD])
def test_is_tool_dof_true(jtype):
    assert is_tool_dof(jtype) is True
    assert is_tool_dof(DOF(type=jtype)) is True


@pytest.mark.parametrize("jtype", [SHOULDER_GOLD, ELBOW_GOLD, Z_INS_GREEN, NO_CONNECTION])
def test_is_tool_dof_false(jtype):
    assert is_tool_dof(jtype) is False


def test_tools_ready():
    device = _ready_device()
    mech = device.mech[0]
    assert tools_ready(mech) is True
    mech.joint[GRASP1].state = JointState.HOMING1
    assert tools_ready(mech) is False


def test_robot_ready_ignores_unconnected_slot():
    device = _ready_device()
    assert device.mech[0].joint[NO_CONNECTION].state == JointState.NOT_READY
    assert robot_ready(device, 2) is True


def test_robot_ready_detects_unready_joint():
    device = _ready_device()
    device.mech[1].joint[0].state = JointState.WAIT
    assert robot_ready(device, 2) is False
    assert robot_ready(device, 1) is True


def test_tokenize():
    assert tokenize("a,b,c", ",") == ["a", "b", "c"]
    assert tokenize("a,,b", ",") == ["a", "", "b"]
    assert tokenize("", ",") == [""]


def test_tokenize_rejects_long_delimiter():
    with pytest.raises(ValueError):
        tokenize("a--b", "--")


def test_ts_normalize():
    assert ts_normalize(1, NSEC_PER_SEC + 5) == (1 + 1, 5)
    assert ts_normalize(3, 7) == (3, 7)


def test_ts_subtract_borrow():
    assert ts_subtract((5, 100), (3, 200)) == (5 - 3 - 1, NSEC_PER_SEC + 100 - 200)


def test_ts_subtract_non_positive():
    assert ts_subtract((3, 200), (5, 100)) == (0, 0)
    assert ts_subtract((4, 4), (4, 4)) == (0, 0)


def test_ts_subtract_no_borrow():
    assert ts_subtract((9, 500), (4, 100)) == (9 - 4, 500 - 100)


def test_is_before():
    assert is_before((1, 5), (1, 6)) is True
    assert is_before((1, 6), (1, 5)) is False
    assert is_before((0, 999), (1, 0)) is True
    assert is_before((2, 2), (2, 2)) is False


def test_get_quaternion_w_component():
    identity = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    assert get_quaternion(identity)[3] == 1.0
    half_turn = [[-1.0, 0.0, 0.0], [0.0, -1.0, 0.0], [0.0, 0.0, 1.0]]
    assert get_quaternion(half_turn)[3] == 0.0


def test_get_quaternion_components_bounded():
    angle = 0.7
    c, s = math.cos(angle), math.sin(angle)
    rot = [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]
    assert all(-1.0 <= q <= 1.0 for q in get_quaternion(rot))


def test_get_quaternion_rejects_bad_shape():
    with pytest.raises(ValueError):
        get_quaternion([[1.0, 0.0], [0.0, 1.0]])


def test_set_posd_to_pos_copies_pose():
    device = RobotDevice()
    mech = device.mech[0]
    mech.pos.x, mech.pos.y, mech.pos.z = 10, 20, 30
    mech.ori.yaw, mech.ori.pitch, mech.ori.roll, mech.ori.grasp = 1, 2, 3, 4
    mech.ori.R[0][1] = 0.5
    set_posd_to_pos(device, 2)
    assert (mech.pos_d.x, mech.pos_d.y, mech.pos_d.z) == (10, 20, 30)
    assert (mech.ori_d.yaw, mech.ori_d.pitch, mech.ori_d.roll, mech.ori_d.grasp) == (1, 2, 3, 4)
    assert mech.ori_d.R == mech.ori.R
    mech.ori.R[0][1] = 0.25
    assert mech.ori_d.R[0][1] == 0.5


def test_set_posd_to_pos_respects_num_mech():
    device = RobotDevice()
    device.mech[1].pos.x = 99
    set_posd_to_pos(device, 1)
    assert device.mech[1].pos_d.x == 0