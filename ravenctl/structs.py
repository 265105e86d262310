"""Data structures shared by the control loop.

Devices contain mechanisms and mechanisms contain degrees of freedom.
Parameter sets passed in from user space, the static per-joint
parameters and the master/slave teleoperation packets live here too,
together with the controller-wide state that the control loop shares.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, List, TypeVar

from .defines import MAX_DOF_PER_MECH, MAX_MECH, MAX_MECH_PER_DEV

HISTORY_SIZE = 10
MAX_WINDOW_SIZE = 1000  # ms
DAC_STORE_SIZE = 10  # s
CMD_STR_SIZE = 200
NUM_JOINT_SLOTS = MAX_MECH_PER_DEV * MAX_DOF_PER_MECH

T = TypeVar("T")


def _list_of(count: int, factory: Callable[[], T]) -> Callable[[], List[T]]:
    return lambda: [factory() for _ in range(count)]


def _check_length(name: str, values: list, count: int) -> None:
    if len(values) != count:
        raise ValueError(f"{name} must hold {count} items, got {len(values)}")


def _identity3() -> List[List[float]]:
    return [[0.0] * 3 for _ in range(3)]


class JointState(IntEnum):
    """Homing and readiness state of a joint."""

    NOT_READY = 0
    POS_UNKNOWN = 1
    HOMING1 = 2
    HOMING2 = 3
    READY = 4
    WAIT = 5
    HARD_STOP = 6


class ToolType(IntEnum):
    """Kind of tool mounted on a mechanism."""

    NONE = 0
    GRASPER_10MM = 1
    GRASPER_8MM = 2
    RII_SQUARE = 3
    DAVINCI_SQUARE = 4
    RICKS_TOOLS = 5
    DV_ADAPTER = 6


class ControlMode(IntEnum):
    """Control law the robot runs."""

    NO_CONTROL = 0
    END_EFFECTOR_CONTROL = 1
    JOINT_VELOCITY_CONTROL = 2
    APPLY_ARBITRARY_TORQUE = 3
    HOMING_MODE = 4
    MOTOR_PD_CONTROL = 5
    CARTESIAN_SPACE_CONTROL = 6
    MULTI_DOF_SINUSOID = 7


@dataclass
class Position:
    """Cartesian position in integer units (microns)."""

    x: int = 0
    y: int = 0
    z: int = 0


@dataclass
class Orientation:
    """Rotation matrix plus fixed-frame angles and grasp (milliradians)."""

    R: List[List[float]] = field(default_factory=_identity3)
    yaw: int = 0
    pitch: int = 0
    roll: int = 0
    grasp: int = 0

    def __post_init__(self) -> None:
        _check_length("R", self.R, 3)
        for row in self.R:
            _check_length("R row", row, 3)


@dataclass
class DOF:
    """State of one mechanical degree of freedom."""

    type: int = 0
    state: JointState = JointState.NOT_READY
    enc_val: int = 0
    current_cmd: int = 0
    jpos: float = 0.0
    mpos: float = 0.0
    jvel: float = 0.0
    mvel: float = 0.0
    tau: float = 0.0
    tau_d: float = 0.0
    tau_g: float = 0.0
    jpos_d: float = 0.0
    mpos_d: float = 0.0
    jpos_d_old: float = 0.0
    mpos_d_old: float = 0.0
    jvel_d: float = 0.0
    mvel_d: float = 0.0
    enc_offset: int = 0
    perror_int: float = 0.0


@dataclass
class Mechanism:
    """One arm: its cartesian state, joints and I/O pins."""

    type: int = 0
    tool_type: ToolType = ToolType.NONE
    pos: Position = field(default_factory=Position)
    pos_d: Position = field(default_factory=Position)
    base_pos: Position = field(default_factory=Position)
    ori: Orientation = field(default_factory=Orientation)
    ori_d: Orientation = field(default_factory=Orientation)
    base_ori: Orientation = field(default_factory=Orientation)
    joint: List[DOF] = field(default_factory=_list_of(MAX_DOF_PER_MECH, DOF))
    inputs: int = 0
    outputs: int = 0

    def __post_init__(self) -> None:
        _check_length("joint", self.joint, MAX_DOF_PER_MECH)


@dataclass
class RobotDevice:
    """The whole robot: run level, surgeon mode and its mechanisms."""

    type: int = 0
    timestamp: int = 0
    runlevel: int = 0
    sublevel: int = 0
    surgeon_mode: int = 0
    mech: List[Mechanism] = field(default_factory=_list_of(MAX_MECH_PER_DEV, Mechanism))
    grav_mag: float = 0.0
    grav_dir: Position = field(default_factory=Position)

    def __post_init__(self) -> None:
        _check_length("mech", self.mech, MAX_MECH_PER_DEV)


@dataclass
class ParamPass:
    """Control parameters passed to the device-control loop."""

    runlevel: int = 0
    sublevel: int = 0
    enc_d: List[int] = field(default_factory=lambda: [0] * NUM_JOINT_SLOTS)
    dac_d: List[int] = field(default_factory=lambda: [0] * NUM_JOINT_SLOTS)
    jpos_d: List[float] = field(default_factory=lambda: [0.0] * NUM_JOINT_SLOTS)
    jvel_d: List[float] = field(default_factory=lambda: [0.0] * NUM_JOINT_SLOTS)
    kp: List[float] = field(default_factory=lambda: [0.0] * NUM_JOINT_SLOTS)
    kd: List[float] = field(default_factory=lambda: [0.0] * NUM_JOINT_SLOTS)
    xd: List[Position] = field(default_factory=_list_of(MAX_MECH_PER_DEV, Position))
    rd: List[Orientation] = field(default_factory=_list_of(MAX_MECH_PER_DEV, Orientation))
    torque_vals: List[int] = field(default_factory=lambda: [0] * NUM_JOINT_SLOTS)
    grav_mag: float = 0.0
    grav_dir: Position = field(default_factory=Position)
    cmd_str: str = ""
    surgeon_mode: int = 0
    robot_control_mode: int = 0
    last_sequence: int = 0

    def __post_init__(self) -> None:
        for name in ("enc_d", "dac_d", "jpos_d", "jvel_d", "kp", "kd", "torque_vals"):
            _check_length(name, getattr(self, name), NUM_JOINT_SLOTS)
        _check_length("xd", self.xd, MAX_MECH_PER_DEV)
        _check_length("rd", self.rd, MAX_MECH_PER_DEV)
        if len(self.cmd_str) >= CMD_STR_SIZE:
            raise ValueError(f"cmd_str must be shorter than {CMD_STR_SIZE} characters")


@dataclass
class DOFType:
    """Per-joint parameters that stay fixed while the robot is powered."""

    max_position: float = 0.0
    max_limit: float = 0.0
    min_limit: float = 0.0
    home_position: float = 0.0
    enc_cnts: int = 0
    dac_max: int = 0
    i_max: float = 0.0
    i_cont: float = 0.0
    tr: float = 0.0
    tau_per_amp: float = 0.0
    dac_per_amp: float = 0.0
    kp: float = 0.0
    kd: float = 0.0
    ki: float = 0.0
    filter_rdy: bool = False
    old_mpos: List[float] = field(default_factory=lambda: [0.0] * HISTORY_SIZE)
    old_filtered_mpos: List[float] = field(default_factory=lambda: [0.0] * HISTORY_SIZE)
    old_mpos_d: List[float] = field(default_factory=lambda: [0.0] * HISTORY_SIZE)
    old_mvel: List[float] = field(default_factory=lambda: [0.0] * HISTORY_SIZE)
    old_mvel_d: List[float] = field(default_factory=lambda: [0.0] * HISTORY_SIZE)
    overdrive_time: int = 0

    def __post_init__(self) -> None:
        for name in ("old_mpos", "old_filtered_mpos", "old_mpos_d", "old_mvel", "old_mvel_d"):
            _check_length(name, getattr(self, name), HISTORY_SIZE)


@dataclass
class MasterPacket:
    """Incremental motion packet sent from master to slave."""

    sequence: int = 0
    pactyp: int = 0
    version: int = 0
    delx: List[int] = field(default_factory=lambda: [0, 0])
    dely: List[int] = field(default_factory=lambda: [0, 0])
    delz: List[int] = field(default_factory=lambda: [0, 0])
    Qx: List[float] = field(default_factory=lambda: [0.0, 0.0])
    Qy: List[float] = field(default_factory=lambda: [0.0, 0.0])
    Qz: List[float] = field(default_factory=lambda: [0.0, 0.0])
    Qw: List[float] = field(default_factory=lambda: [0.0, 0.0])
    buttonstate: List[int] = field(default_factory=lambda: [0, 0])
    grasp: List[int] = field(default_factory=lambda: [0, 0])
    surgeon_mode: int = 0
    checksum: int = 0

    def __post_init__(self) -> None:
        for name in ("delx", "dely", "delz", "Qx", "Qy", "Qz", "Qw", "buttonstate", "grasp"):
            _check_length(name, getattr(self, name), 2)


@dataclass
class SlavePacket:
    """Status packet returned from slave to master."""

    sequence: int = 0
    last_sequence: int = 0
    pactyp: int = 0
    version: int = 0
    fx: List[int] = field(default_factory=lambda: [0, 0])
    fy: List[int] = field(default_factory=lambda: [0, 0])
    fz: List[int] = field(default_factory=lambda: [0, 0])
    runlevel: int = 0
    jointflags: int = 0
    checksum: int = 0

    def __post_init__(self) -> None:
        for name in ("fx", "fy", "fz"):
            _check_length(name, getattr(self, name), 2)


@dataclass
class ControllerState:
    """State shared across the control loop: mechanism count, flags and joint parameters."""

    num_mech: int = MAX_MECH
    initialized: bool = False
    soft_estopped: bool = False
    g_time: int = 0
    dof_types: List[DOFType] = field(default_factory=_list_of(MAX_MECH * MAX_DOF_PER_MECH, DOFType))

    def __post_init__(self) -> None:
        if not 0 <= self.num_mech <= MAX_MECH_PER_DEV:
            raise ValueError(f"num_mech must be between 0 and {MAX_MECH_PER_DEV}")
        _check_length("dof_types", self.dof_types, MAX_MECH * MAX_DOF_PER_MECH)

    def dof_type(self, joint: DOF | int) -> DOFType:
        """Return the static parameters for a joint or joint type index."""
        index = joint if isinstance(joint, int) else joint.type
        if not 0 <= index < len(self.dof_types):
            raise IndexError(f"no joint parameters for type {index}")
        return self.dof_types[index]