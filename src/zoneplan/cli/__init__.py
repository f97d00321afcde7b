#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Zone planner CLI
"""

from .base import \
    add_install_config_arg, \
    add_metadata_arg, \
    UsesInstallConfig, \
    SubCommandBase, \
    CLIBase

from .plan import \
    format_plan, \
    PlanNetwork, \
    ShowZones, \
    ClassifySubnets, \
    InstanceTypes

COMMAND_CLASSES = tuple(
    [ cls
      for cls in globals().values()
      if getattr(cls, 'sub_command', '') ])

class CLI(CLIBase):
    """ Run zone planner CLI
    """
    command_classes = COMMAND_CLASSES


__all__ = [
    'add_install_config_arg',
    'add_metadata_arg',
    'UsesInstallConfig',
    'SubCommandBase',
    'CLIBase',

    'format_plan',
    'PlanNetwork',
    'ShowZones',
    'ClassifySubnets',
    'InstanceTypes',

    'CLI',
]
