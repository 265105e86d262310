"""Constants for the surgical robot controller.

Covers the global configuration, motor and tool parameters, transmission
ratios, run levels, joint indices and the USB packet protocol codes.
"""

import math

# ---------------------------------------------------------------------------
# Build configuration
# ---------------------------------------------------------------------------

SURGICAL_ROBOT = 1
RAVEN_II = 1

# Board serial numbers identifying each arm.
GREEN_ARM_SERIAL = 29
GOLD_ARM_SERIAL = 37
GREEN_ARM = GREEN_ARM_SERIAL
GOLD_ARM = GOLD_ARM_SERIAL

# Optional behaviour switches.
CURRENT_CLIPPING = True
PLC_RUNLEVELS = True
SOFTWARE_RUNLEVELS = False

# ---------------------------------------------------------------------------
# Run levels and sub levels
# ---------------------------------------------------------------------------

RL_E_STOP = 0
RL_INIT = 1
RL_PEDAL_UP = 2
RL_PEDAL_DN = 3

SL_PD_CTRL = 0
SL_DAC_CTRL = 1
SL_AUTO_INIT = 3

STOP = 0

# ---------------------------------------------------------------------------
# Joint indices
# ---------------------------------------------------------------------------

SHOULDER = 0
ELBOW = 1
Z_INS = 2
NO_CONNECTION = 3
TOOL_ROT = 4
WRIST = 5
GRASP1 = 6
GRASP2 = 7

SHOULDER_GOLD = 0
ELBOW_GOLD = 1
Z_INS_GOLD = 2
NO_CONNECTION_GOLD = 3
TOOL_ROT_GOLD = 4
WRIST_GOLD = 5
GRASP1_GOLD = 6
GRASP2_GOLD = 7

SHOULDER_GREEN = 8
ELBOW_GREEN = 9
Z_INS_GREEN = 10
NO_CONNECTION_GREEN = 11
TOOL_ROT_GREEN = 12
WRIST_GREEN = 13
GRASP1_GREEN = 14
GRASP2_GREEN = 15

# ---------------------------------------------------------------------------
# Device layout
# ---------------------------------------------------------------------------

MAX_MECH = 2
MAX_DOF_PER_MECH = 8
MAX_MECH_PER_DEV = 2

STATE_OFF = 0
STATE_UNINIT = 1
STATE_READY = 2
STATE_I_OVERLOAD = 3

# ---------------------------------------------------------------------------
# Motors
# ---------------------------------------------------------------------------

# EC 40 / EC 32 motors (first generation robot)
T_PER_AMP_EC40 = 0.0764  # Nm/A
I_CONT_EC40 = 2.5  # A
I_MAX_EC40 = 10  # A
T_PER_AMP_EC32 = 0.040  # Nm/A
I_CONT_EC32 = 1.667  # A
I_MAX_EC32 = 10  # A
ENC_CNTS_PER_REV_R_I = 2000.0

# RE 40 / RE 30 motors
T_PER_AMP_RE40 = 0.0603  # Nm/A
I_CONT_RE40 = 3.12  # A
I_MAX_RE40 = 10  # A
T_PER_AMP_RE30 = 0.0538  # Nm/A
I_CONT_RE30 = 1.72  # A
I_MAX_RE30 = 10  # A
ENC_CNTS_PER_REV_R_II = 4000.0

T_PER_AMP_BIG_MOTOR = T_PER_AMP_RE40
I_CONT_BIG_MOTOR = I_CONT_RE40
I_MAX_BIG_MOTOR = I_MAX_RE40

T_PER_AMP_SMALL_MOTOR = T_PER_AMP_RE30
I_CONT_SMALL_MOTOR = I_CONT_RE30
I_MAX_SMALL_MOTOR = I_MAX_RE30

ENC_CNTS_PER_REV = ENC_CNTS_PER_REV_R_II
ENC_CNT_PER_DEG = ENC_CNTS_PER_REV / 360
ENC_CNT_PER_RAD = ENC_CNTS_PER_REV / (2 * math.pi)

# ---------------------------------------------------------------------------
# Amplifiers
# ---------------------------------------------------------------------------

K_DAC_PER_AMP_LOW_CURRENT = 5461
K_DAC_PER_AMP_HIGH_CURRENT = 2730

DAC_OFFSET = 0x8000
DAC_STEPS = 65536

# ---------------------------------------------------------------------------
# Gear boxes and transmissions
# ---------------------------------------------------------------------------

GEAR_BOX_GP42_TR = 49.0 / 4.0
GEAR_BOX_GP32_TR = 26.0 / 7.0

GEAR_BOX_TR_BIG_MOTOR = GEAR_BOX_GP42_TR
GEAR_BOX_TR_SMALL_MOTOR = GEAR_BOX_GP32_TR

CABLE_RADIUS_1050 = 1.19 / 2.0
CABLE_RADIUS_1024 = 0.61 / 2.0

PARTIAL_PULLEY_LINK1_RADIUS = 62.5 + CABLE_RADIUS_1050
PARTIAL_PULLEY_LINK2_RADIUS = 40.85 + CABLE_RADIUS_1050
CAPSTAN_LINK2_LARGE_RADIUS = 7.82 + CABLE_RADIUS_1050
CAPSTAN_LINK2_SMALL_RADIUS = 5.60 + CABLE_RADIUS_1050

CAPSTAN_RADIUS_GP42 = 11.35 / 2
CAPSTAN_RADIUS_GP32 = 4.7 + CABLE_RADIUS_1024
CAPSTAN_TOOL_RADIUS = 10.6 + CABLE_RADIUS_1024

SHOULDER_TR_GREEN_ARM = (
    PARTIAL_PULLEY_LINK1_RADIUS / CAPSTAN_RADIUS_GP42
) * GEAR_BOX_GP42_TR
ELBOW_TR_GREEN_ARM = (
    (PARTIAL_PULLEY_LINK2_RADIUS / CAPSTAN_LINK2_SMALL_RADIUS)
    * (CAPSTAN_LINK2_LARGE_RADIUS / CAPSTAN_RADIUS_GP42)
    * GEAR_BOX_GP42_TR
)
# rad/meter
Z_INS_TR_GREEN_ARM = (
    (1.0 / ((2 * math.pi * CAPSTAN_RADIUS_GP42) / 1000.0))
    * GEAR_BOX_GP42_TR
    * 2
    * math.pi
)
TOOL_ROT_TR_GREEN_ARM = (
    CAPSTAN_TOOL_RADIUS / CAPSTAN_RADIUS_GP32 * GEAR_BOX_GP32_TR * 120.0 / 180.0
)
WRIST_TR_GREEN_ARM = (
    CAPSTAN_TOOL_RADIUS / CAPSTAN_RADIUS_GP32 * GEAR_BOX_GP32_TR * 200.0 / 180.0
)
GRASP1_TR_GREEN_ARM = (
    CAPSTAN_TOOL_RADIUS / CAPSTAN_RADIUS_GP32 * GEAR_BOX_GP32_TR * 100.0 / 90.0
)
GRASP2_TR_GREEN_ARM = (
    CAPSTAN_TOOL_RADIUS / CAPSTAN_RADIUS_GP32 * GEAR_BOX_GP32_TR * 100.0 / 90.0
)

SHOULDER_TR_GOLD_ARM = SHOULDER_TR_GREEN_ARM
ELBOW_TR_GOLD_ARM = ELBOW_TR_GREEN_ARM
Z_INS_TR_GOLD_ARM = Z_INS_TR_GREEN_ARM
TOOL_ROT_TR_GOLD_ARM = TOOL_ROT_TR_GREEN_ARM
WRIST_TR_GOLD_ARM = WRIST_TR_GREEN_ARM
GRASP1_TR_GOLD_ARM = GRASP1_TR_GREEN_ARM
GRASP2_TR_GOLD_ARM = GRASP2_TR_GREEN_ARM

WRIST_SCALE_FACTOR = 1.5

# ---------------------------------------------------------------------------
# Kinematics
# ---------------------------------------------------------------------------

A12 = 1.30899694  # link 1, 75 deg
A23 = 0.907571211  # link 2, 52 deg

SHOULDER_GOLD_KIN_OFFSET = 0.0
ELBOW_GOLD_KIN_OFFSET = 0.0
Z_INS_GOLD_KIN_OFFSET = 0.0

SHOULDER_GREEN_KIN_OFFSET = SHOULDER_GOLD_KIN_OFFSET
ELBOW_GREEN_KIN_OFFSET = ELBOW_GOLD_KIN_OFFSET
Z_INS_GREEN_KIN_OFFSET = Z_INS_GOLD_KIN_OFFSET

SHOULDER_MIN_LIMIT = math.radians(0.0)
SHOULDER_MAX_LIMIT = math.radians(90.0)
ELBOW_MIN_LIMIT = math.radians(45.0)
ELBOW_MAX_LIMIT = math.radians(135.0)

# ---------------------------------------------------------------------------
# Current limits (DAC counts)
# ---------------------------------------------------------------------------

MAX_INST_DAC = 20000

SHOULDER_MAX_DAC = 5000
ELBOW_MAX_DAC = 5000
Z_INS_MAX_DAC = 4000
TOOL_ROT_MAX_DAC = 3000
WRIST_MAX_DAC = 1900
GRASP1_MAX_DAC = 2400
GRASP2_MAX_DAC = 2400

# ---------------------------------------------------------------------------
# Joint angles
# ---------------------------------------------------------------------------

SHOULDER_MAX_ANGLE = 0.0
ELBOW_MAX_ANGLE = 3 * math.pi / 4 + (2.5 * math.pi / 180)

SHOULDER_HOME_ANGLE = math.pi / 6
ELBOW_HOME_ANGLE = math.pi / 2
Z_INS_HOME_ANGLE = 0.4
TOOL_ROT_HOME_ANGLE = 0
WRIST_HOME_ANGLE = 0
GRASP1_HOME_ANGLE = math.pi / 4
GRASP2_HOME_ANGLE = math.pi / 4

# ---------------------------------------------------------------------------
# Tool limits
# ---------------------------------------------------------------------------

Z_INS_MIN_LIMIT = 0.23
Z_INS_MAX_LIMIT = 0.56

TOOL_ROT_MIN_LIMIT = math.radians(-182.0)
TOOL_ROT_MAX_LIMIT = math.radians(182.0)
WRIST_MIN_LIMIT = math.radians(-75.0)
WRIST_MAX_LIMIT = math.radians(75.0)

GRASP1_MIN_LIMIT = math.radians(-89.0)
GRASP1_MAX_LIMIT = math.radians(89.0)
GRASP2_MIN_LIMIT = math.radians(-89.0)
GRASP2_MAX_LIMIT = math.radians(89.0)

# Tools without orientation
Z_INS_MAX_ANGLE_GREEN_RICK = 0.2
Z_INS_MAX_ANGLE_GOLD_RICK = 0.15
TOOL_ROT_MAX_ANGLE_RICK = math.radians(330)
WRIST_MAX_ANGLE_RICK = math.radians(115)
GRASP1_MAX_ANGLE_RICK = math.radians(120)
GRASP2_MAX_ANGLE_RICK = math.radians(130)

# Square tool carriage
Z_INS_MAX_ANGLE_RII_SQUARE = 0.1
TOOL_ROT_MAX_ANGLE_RII_SQUARE = math.radians(-330)
WRIST_MAX_ANGLE_RII_SQUARE = math.radians(115)
GRASP1_MAX_ANGLE_RII_SQUARE = math.radians(135)
GRASP2_MAX_ANGLE_RII_SQUARE = math.radians(135)

# Square carriage with third-party tools
Z_INS_MAX_ANGLE_DAVINCI_SQUARE = 0.562
Z_INS_MIN_LIMIT_DAVINCI_SQUARE = 0.18
Z_INS_MAX_LIMIT_DAVINCI_SQUARE = 0.53
TOOL_ROT_MAX_ANGLE_DAVINCI_SQUARE = math.radians(-260)
WRIST_MAX_ANGLE_DAVINCI_SQUARE = math.radians(90)
GRASP1_MAX_ANGLE_DAVINCI_SQUARE = math.radians(120)
GRASP2_MAX_ANGLE_DAVINCI_SQUARE = math.radians(120)

# Third-party tools through an adapter
Z_INS_MAX_ANGLE_DAVINCI_ADAPT = 0.562
Z_INS_MIN_LIMIT_DAVINCI_ADAPT = 0.23
Z_INS_MAX_LIMIT_DAVINCI_ADAPT = 0.56
TOOL_ROT_MAX_ANGLE_DAVINCI_ADAPT = math.radians(260)
WRIST_MAX_ANGLE_DAVINCI_ADAPT = math.radians(90)
GRASP1_MAX_ANGLE_DAVINCI_ADAPT = math.radians(120)
GRASP2_MAX_ANGLE_DAVINCI_ADAPT = math.radians(120)

# Default grasper (10 mm, diamond)
Z_INS_MAX_ANGLE = 0.562
TOOL_ROT_MAX_ANGLE = math.radians(330)
WRIST_MAX_ANGLE = math.radians(115)
GRASP1_MAX_ANGLE = math.radians(120)
GRASP2_MAX_ANGLE = math.radians(130)

# ---------------------------------------------------------------------------
# Units, timing and limits
# ---------------------------------------------------------------------------

MICRON_PER_M = 1000000.0
MICRORADS_PER_RAD = 1000000.0

PI = 3.1415926535
ZERO_THRESHOLD = 0.000001

ONE_MS = 0.001
STEP_PERIOD = ONE_MS
SECOND = 1000

V_MAX = 3.0  # rad/s
A_MAX = 1.0  # rad/s^2

GRASP_OPEN = 1
GRASP_CLOSE = 0

PEDAL_UP = 0
PEDAL_DN = 1

SURGEON_ENGAGED = 1
SURGEON_DISENGAGED = 0

WD_PERIOD = 50
MASTER_CONN_TIMEOUT = 5000

# ---------------------------------------------------------------------------
# USB packet protocol
# ---------------------------------------------------------------------------

USB_BUSY_WAIT = 1000
CYPRESS_ENABLED = 1

MAX_IN_LENGTH = 512
MAX_OUT_LENGTH = 512

PACKET_ID = 0x00
PACKET_NUM_CH = 0x01

E_STOP = 0x00
RST_ENC = 0x01
REQ_ENC = 0x02
ENC = 0x03
ENC_VEL = 0x04
RST_DAC = 0x05
DAC = 0x06
RST_ENC_DAC = 0x07
ACK_ESTOP = 0x08
ACK_RST_ENC = 0x09
ACK_RST_DAC = 0x0A
ACK_RST_ENC_DAC = 0x0B

# ---------------------------------------------------------------------------
# Short integer range
# ---------------------------------------------------------------------------

SHORT_MAX = 32767
SHORT_MIN = -32768

NSEC_PER_SEC = 1000000000