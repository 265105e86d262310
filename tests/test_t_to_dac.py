import pytest

from ravenctl.defines import (
    K_DAC_PER_AMP_LOW_CURRENT,
    MAX_DOF_PER_MECH,
    NO_CONNECTION,
    SHORT_MAX,
    SHORT_MIN,
)
from ravenctl.structs import DOF, ControllerState, DOFType, RobotDevice
from ravenctl.t_to_dac import (
    DacTestPattern,
    clear_dacs,
    torque_to_dac,
    torque_to_dac_value,
)

SENTINEL = 4242


def _device():
    device = RobotDevice()
    for m, mech in enumerate(device.mech):
        for j, joint in enumerate(mech.joint):
            joint.type = m * MAX_DOF_PER_MECH + j
            joint.tau_d = 7.0
            joint.current_cmd = SENTINEL
    return device


def _state(**kwargs):
    state = ControllerState(**kwargs)
    for dof_type in state.dof_types:
        dof_type.tau_per_amp = 1.0
        dof_type.dac_per_amp = 1.0
    return state


def test_value_scales_by_amplifier_gain():
    dof_type = DOFType(tau_per_amp=1.0, dac_per_amp=K_DAC_PER_AMP_LOW_CURRENT)
    assert torque_to_dac_value(DOF(tau_d=1.0), dof_type) == K_DAC_PER_AMP_LOW_CURRENT


def test_value_truncates_toward_zero():
    dof_type = DOFType(tau_per_amp=1.0, dac_per_amp=1.0)
    assert torque_to_dac_value(DOF(tau_d=0.9999), dof_type) == 0
    assert torque_to_dac_value(DOF(tau_d=-0.9999), dof_type) == 0


def test_value_saturates():
    dof_type = DOFType(tau_per_amp=1.0, dac_per_amp=K_DAC_PER_AMP_LOW_CURRENT)
    assert torque_to_dac_value(DOF(tau_d=1000.0), dof_type) == SHORT_MAX
    assert torque_to_dac_value(DOF(tau_d=-1000.0), dof_type) == SHORT_MIN


def test_value_zero_torque_per_amp_raises():
    with pytest.raises(ZeroDivisionError):
        torque_to_dac_value(DOF(tau_d=1.0), DOFType(tau_per_amp=0.0, dac_per_amp=1.0))


def test_torque_to_dac_sets_commands_and_skips_unconnected():
    device = _device()
    torque_to_dac(device, _state())
    for mech in device.mech:
        for j, joint in enumerate(mech.joint):
            if j == NO_CONNECTION:
                assert joint.current_cmd == SENTINEL
            else:
                assert joint.current_cmd == 7


def test_torque_to_dac_soft_estop_zeroes_output():
    device = _device()
    torque_to_dac(device, _state(soft_estopped=True))
    assert device.mech[0].joint[0].current_cmd == 0
    assert device.mech[1].joint[MAX_DOF_PER_MECH - 1].current_cmd == 0
    assert device.mech[0].joint[NO_CONNECTION].current_cmd == SENTINEL


def test_torque_to_dac_respects_num_mech():
    device = _device()
    torque_to_dac(device, _state(num_mech=1))
    assert device.mech[0].joint[0].current_cmd == 7
    assert all(j.current_cmd == SENTINEL for j in device.mech[1].joint)


def test_clear_dacs():
    device = _device()
    clear_dacs(device, 1)
    assert all(j.current_cmd == 0 for j in device.mech[0].joint)
    assert all(j.current_cmd == SENTINEL for j in device.mech[1].joint)


def test_dac_test_pattern_alternates():
    device = _device()
    pattern = DacTestPattern()
    first = pattern.apply(device, 2)
    assert first == 0xA000 - 0x10000
    assert all(j.current_cmd == first for m in device.mech for j in m.joint)
    second = pattern.apply(device, 2)
    assert second == 0x6000
    assert device.mech[1].joint[0].current_cmd == second
    assert pattern.apply(device, 2) == first
    assert pattern.count == 3