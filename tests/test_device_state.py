import pytest

from ravenctl.defines import MAX_DOF_PER_MECH, RL_E_STOP, RL_PEDAL_DN, RL_PEDAL_UP
from ravenctl.device_state import DeviceStateUpdater
from ravenctl.structs import ControlMode, ParamPass, Position, RobotDevice


def _received():
    rcvd = ParamPass(last_sequence=42, surgeon_mode=1)
    rcvd.xd[0] = Position(1, 2, 3)
    rcvd.xd[1] = Position(4, 5, 6)
    for k, rd in enumerate(rcvd.rd):
        rd.yaw, rd.pitch, rd.roll, rd.grasp = 7 + k, 10, 11 + k, 500 + k
        rd.R = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    return rcvd


def test_copies_setpoints_and_scales_pitch():
    updater = DeviceStateUpdater(2)
    curr = ParamPass(runlevel=RL_PEDAL_UP)
    rcvd = _received()
    updater.update(curr, rcvd, RobotDevice())
    assert curr.last_sequence == 42
    assert curr.xd[1] == Position(4, 5, 6)
    assert curr.rd[0].pitch == 15
    assert curr.rd[1].yaw == rcvd.rd[1].yaw
    assert curr.rd[1].grasp == rcvd.rd[1].grasp


def test_only_active_mechanisms_copied():
    updater = DeviceStateUpdater(1)
    curr = ParamPass()
    updater.update(curr, _received(), RobotDevice())
    assert curr.xd[0] == Position(1, 2, 3)
    assert curr.xd[1] == Position(0, 0, 0)


def test_pedal_down_sets_desired_pose():
    updater = DeviceStateUpdater(2)
    device = RobotDevice()
    rcvd = _received()
    updater.update(ParamPass(runlevel=RL_PEDAL_DN), rcvd, device)
    assert device.mech[0].pos_d == rcvd.xd[0]
    assert device.mech[1].ori_d.grasp == rcvd.rd[1].grasp
    assert device.mech[0].ori_d.R == rcvd.rd[0].R
    rcvd.rd[0].R[0][0] = -1.0
    assert device.mech[0].ori_d.R[0][0] == 1.0


def test_pedal_up_leaves_desired_pose():
    updater = DeviceStateUpdater(2)
    device = RobotDevice()
    updater.update(ParamPass(runlevel=RL_PEDAL_UP), _received(), device)
    assert device.mech[0].pos_d == Position()
    assert device.mech[0].ori_d.grasp == 0


def test_default_mode_is_homing_applied_in_estop():
    updater = DeviceStateUpdater(2)
    curr = ParamPass(runlevel=RL_E_STOP)
    updater.update(curr, _received(), RobotDevice())
    assert curr.robot_control_mode == ControlMode.HOMING_MODE


def test_mode_change_waits_for_estop():
    updater = DeviceStateUpdater(2)
    updater.set_robot_control_mode(ControlMode.MOTOR_PD_CONTROL)
    assert updater.is_updated is True
    curr = ParamPass(runlevel=RL_PEDAL_UP)
    updater.update(curr, _received(), RobotDevice())
    assert curr.robot_control_mode == ControlMode.NO_CONTROL
    curr.runlevel = RL_E_STOP
    updater.update(curr, _received(), RobotDevice())
    assert curr.robot_control_mode == ControlMode.MOTOR_PD_CONTROL


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        DeviceStateUpdater(2).set_robot_control_mode(99)


def test_dof_torque_sets_one_joint():
    updater = DeviceStateUpdater(2)
    assert updater.set_dof_torque(1, 2, 250) is True
    curr = ParamPass()
    curr.torque_vals = [9] * len(curr.torque_vals)
    updater.update(curr, _received(), RobotDevice())
    target = MAX_DOF_PER_MECH * 1 + 2
    assert curr.torque_vals[target] == 250
    assert all(v == 0 for i, v in enumerate(curr.torque_vals) if i != target)
    assert updater.pending_torque is None


def test_dof_torque_applied_once():
    updater = DeviceStateUpdater(2)
    updater.set_dof_torque(0, 1, 100)
    curr = ParamPass()
    updater.update(curr, _received(), RobotDevice())
    curr.torque_vals[1] = 7
    updater.update(curr, _received(), RobotDevice())
    assert curr.torque_vals[1] == 7


@pytest.mark.parametrize("mech,dof", [(2, 0), (0, MAX_DOF_PER_MECH), (-1, 0)])
def test_dof_torque_out_of_range_ignored(mech, dof):
    updater = DeviceStateUpdater(2)
    assert updater.set_dof_torque(mech, dof, 100) is False
    assert updater.pending_torque is None
    assert updater.is_updated is True


def test_dof_torque_respects_num_mech():
    assert DeviceStateUpdater(1).set_dof_torque(1, 0, 5) is False


def test_surgeon_mode_copied():
    device = RobotDevice()
    DeviceStateUpdater(2).update(ParamPass(), _received(), device)
    assert device.surgeon_mode == 1


def test_bad_num_mech():
    with pytest.raises(ValueError):
        DeviceStateUpdater(3)