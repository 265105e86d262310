"""Applies parameters received from user space to the controller state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .defines import (
    MAX_DOF_PER_MECH,
    MAX_MECH_PER_DEV,
    RL_E_STOP,
    RL_PEDAL_DN,
    WRIST_SCALE_FACTOR,
)
from .structs import ControlMode, ParamPass, RobotDevice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TorqueRequest:
    mech: int
    dof: int
    torque: int  # mNm


class DeviceStateUpdater:
    """Holds pending console requests and merges received parameters each cycle."""

    def __init__(self, num_mech: int) -> None:
        if not 0 <= num_mech <= MAX_MECH_PER_DEV:
            raise ValueError(f"num_mech must be between 0 and {MAX_MECH_PER_DEV}")
        self.num_mech = num_mech
        self.new_robot_control_mode = ControlMode.HOMING_MODE
        self.pending_torque: Optional[_TorqueRequest] = None
        self.is_updated = False

    def update(
        self, curr_params: ParamPass, rcvd_params: ParamPass, device: RobotDevice
    ) -> None:
        """Copy received set points into the current parameters and the device."""
        curr_params.last_sequence = rcvd_params.last_sequence

        for curr_xd, rcvd_xd in zip(
            curr_params.xd[: self.num_mech], rcvd_params.xd[: self.num_mech]
        ):
            curr_xd.x, curr_xd.y, curr_xd.z = rcvd_xd.x, rcvd_xd.y, rcvd_xd.z

        for curr_rd, rcvd_rd in zip(
            curr_params.rd[: self.num_mech], rcvd_params.rd[: self.num_mech]
        ):
            curr_rd.yaw = rcvd_rd.yaw
            curr_rd.pitch = int(rcvd_rd.pitch * WRIST_SCALE_FACTOR)
            curr_rd.roll = rcvd_rd.roll
            curr_rd.grasp = rcvd_rd.grasp

        # Desired mechanism pose follows the master only with the pedal down.
        if curr_params.runlevel == RL_PEDAL_DN:
            for mech, xd, rd in zip(
                device.mech[: self.num_mech],
                rcvd_params.xd[: self.num_mech],
                rcvd_params.rd[: self.num_mech],
            ):
                mech.pos_d.x, mech.pos_d.y, mech.pos_d.z = xd.x, xd.y, xd.z
                mech.ori_d.grasp = rd.grasp
                mech.ori_d.R = [list(row) for row in rd.R]

        # Control mode changes take effect only in e-stop.
        if (
            curr_params.runlevel == RL_E_STOP
            and curr_params.robot_control_mode != int(self.new_robot_control_mode)
        ):
            curr_params.robot_control_mode = int(self.new_robot_control_mode)
            logger.info("Control mode updated")

        request = self.pending_torque
        if request is not None:
            target = MAX_DOF_PER_MECH * request.mech + request.dof
            curr_params.torque_vals = [
                request.torque if idx == target else 0
                for idx in range(len(curr_params.torque_vals))
            ]
            self.pending_torque = None
            logger.info("DOF Torque updated")

        if device.surgeon_mode != rcvd_params.surgeon_mode:
            device.surgeon_mode = rcvd_params.surgeon_mode

    def set_robot_control_mode(self, mode: ControlMode | int) -> None:
        """Request a new control mode; it is applied on the next e-stop cycle."""
        mode = ControlMode(mode)
        logger.info("Robot control mode: %d", mode)
        self.new_robot_control_mode = mode
        self.is_updated = True

    def set_dof_torque(self, mech: int, dof: int, torque: int) -> bool:
        """Request a torque (mNm) on one joint, all others zero.

        Out-of-range joints are ignored; returns whether the request was taken.
        """
        accepted = 0 <= mech < self.num_mech and 0 <= dof < MAX_DOF_PER_MECH
        if accepted:
            self.pending_torque = _TorqueRequest(mech, dof, torque)
        self.is_updated = True
        return accepted