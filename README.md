# ravenctl

Pure-Python building blocks for the 1 kHz control loop of a two-arm,
cable-driven surgical robot. The package models the robot's state and
computes what the loop needs on each cycle. It has no dependencies
outside the standard library.

## Modules

| Module | Purpose |
| --- | --- |
| `ravenctl.defines` | Constants: runlevels (`RL_E_STOP` … `RL_PEDAL_DN`), joint indices for both arms, motor constants, gear and transmission ratios, DAC limits, tool limits, timing values and USB packet codes |
| `ravenctl.structs` | Dataclasses `Position`, `Orientation`, `DOF`, `Mechanism`, `RobotDevice`, `ParamPass`, `DOFType`, the teleoperation packets `MasterPacket` and `SlavePacket`, the enums `JointState`, `ToolType` and `ControlMode`, and `ControllerState`, which holds the number of active mechanisms, the `initialized` / `soft_estopped` flags, a time counter and the per-joint `DOFType` parameters (looked up with `ControllerState.dof_type`) |
| `ravenctl.atmel_io` | `AtmelOutputs.update` builds the output pin byte (foot pedal, ready, runlevel bits, watchdog square wave), writes it to each active mechanism and returns it; `plc_state` reads the PLC runlevel from the first mechanism's input pins |
| `ravenctl.utils` | `to_short` (saturate to a signed 16-bit value, returning the value and a `ShortStatus`), the joint iterators `iter_joints` and `iter_mech_joints` (which skip the unconnected slot), `is_tool_dof`, `tools_ready`, `robot_ready`, `tokenize`, timespec helpers `ts_normalize`, `ts_subtract`, `is_before`, `get_quaternion` and `set_posd_to_pos` |
| `ravenctl.t_to_dac` | `torque_to_dac_value` converts one joint's desired torque into saturated DAC counts; `torque_to_dac` sets `current_cmd` on every connected joint (zero when soft e-stopped); `clear_dacs`; `DacTestPattern`, a square-wave output for board checks |
| `ravenctl.state_estimate` | `get_state_lpf` runs a 120 Hz third-order Butterworth low-pass filter on motor position and takes velocity from the first difference; `state_estimate` does so for every joint; `reset_filter` refills the filter history |
| `ravenctl.trajectory` | `TrajectoryGenerator` keeps a `Trajectory` per joint type and produces sinusoidal and linear position and velocity set points, driven by an injectable clock (default `time.monotonic`) |
| `ravenctl.state_machine` | `StateMachine.step` picks the lowest runlevel reported by the PLC inputs, accepts a change only after it has been requested for several cycles, and on e-stop clears `initialized` and the sublevel |
| `ravenctl.device_state` | `DeviceStateUpdater.update` copies received set points into the current parameters and the device; `set_robot_control_mode` and `set_dof_torque` queue console requests applied on the next update |

Run-level changes and console requests are reported through the standard
`logging` module.

## Install

```
pip install .
pip install ".[test]"   # adds pytest
```

## Example

```python
from ravenctl.defines import K_DAC_PER_AMP_LOW_CURRENT, MAX_DOF_PER_MECH, T_PER_AMP_RE40
from ravenctl.structs import ControllerState, RobotDevice
from ravenctl.state_estimate import state_estimate
from ravenctl.t_to_dac import torque_to_dac
from ravenctl.trajectory import TrajectoryGenerator

device = RobotDevice()
state = ControllerState()

# Give every joint its type index and every joint type its motor parameters.
for m, mech in enumerate(device.mech):
    for j, joint in enumerate(mech.joint):
        joint.type = m * MAX_DOF_PER_MECH + j
for params in state.dof_types:
    params.tau_per_amp = T_PER_AMP_RE40
    params.dac_per_amp = K_DAC_PER_AMP_LOW_CURRENT

state_estimate(device, state)          # fill mpos / mvel from encoder values

now = [0.0]
traj = TrajectoryGenerator(clock=lambda: now[0])
joint = device.mech[0].joint[0]
traj.start(joint, 0.5, 2.0)
now[0] = 0.25
traj.update_sinusoid_position(joint)   # sets joint.jpos_d

joint.tau_d = 0.1
torque_to_dac(device, state)           # sets current_cmd on each connected joint
```

## What this package does not do

It performs no hardware input or output: it does not talk to the USB
control boards or any port, it only reads and writes the fields of
`RobotDevice`. It contains no forward or inverse kinematics, cable
coupling, PD/PI control laws or gravity compensation, no networking to a
master console, and no command-line program or real-time loop; the caller
runs the cycle and calls these functions in order.

## Tests

```
pytest
```