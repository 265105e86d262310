"""Control-loop building blocks for a two-arm cable-driven surgical robot."""

__version__ = "0.1.0"

__all__ = [
    "defines",
    "structs",
    "atmel_io",
    "utils",
    "t_to_dac",
    "state_estimate",
    "trajectory",
    "state_machine",
    "device_state",
]