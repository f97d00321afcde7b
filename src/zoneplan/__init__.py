#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""Plan the zone and subnet layout of a cluster VPC

The planner either relays pre-existing (bring-your-own) subnets after
classifying them as public or private, or carves the cluster machine
network into per-zone private, public and edge subnets, leaving free
blocks for later expansion.
"""

from .placer.planner import plan, PlannerOptions

__all__ = [
    'plan',
    'PlannerOptions',
]
