"""
Behavior Module

Shared output vocabulary of the simulator and the validator, together with
the fixed grouping of motor neurons that decides which behavior a circuit
produces.

Classes:
    BehaviorLabel: Enumeration of the behaviors a circuit can produce
    MotorGroup:    Enumeration of the motor-neuron groups

Functions:
    motor_group(neuron_id): The motor group a motor neuron belongs to, if any
"""

from enum import Enum

class BehaviorLabel(Enum):
    MOVE_FORWARD  = "move_forward"
    MOVE_BACKWARD = "move_backward"
    HEAD_WIGGLE   = "head_wiggle"
    CURL          = "curl"
    RESTING       = "resting"

class MotorGroup(Enum):
    """
    Motor neurons are grouped by class: A-type motor neurons drive backward
    locomotion, B-type motor neurons drive forward locomotion, and the head
    motor neurons (SMB, SMD, RMD) move the head.
    """
    BACKWARD = "backward"
    FORWARD  = "forward"
    HEAD     = "head"

# Neuron-id prefixes of each motor group
MOTOR_GROUP_PREFIXES: dict[MotorGroup, tuple[str, ...]] = {
    MotorGroup.BACKWARD: ("DA", "VA"),
    MotorGroup.FORWARD : ("DB", "VB"),
    MotorGroup.HEAD    : ("SMB", "SMD", "RMD"),
}

# The behavior produced when a single motor group fires
GROUP_BEHAVIOR: dict[MotorGroup, BehaviorLabel] = {
    MotorGroup.BACKWARD: BehaviorLabel.MOVE_BACKWARD,
    MotorGroup.FORWARD : BehaviorLabel.MOVE_FORWARD,
    MotorGroup.HEAD    : BehaviorLabel.HEAD_WIGGLE,
}

def motor_group(neuron_id: str) -> MotorGroup | None:
    """
    Return the motor group of a motor neuron, or None when the id belongs to
    none of the known groups.
    """
    neuron_id = neuron_id.upper()
    for group, prefixes in MOTOR_GROUP_PREFIXES.items():
        if neuron_id.startswith(prefixes):
            return group
    return None
