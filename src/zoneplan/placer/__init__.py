#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""Place zones and subnets in the cluster VPC

Placement is deterministic: zones are always walked in sorted order, so the
same inputs produce the same layout.
"""

from .cidr import \
    find_overlaps, \
    find_unallocated_subnets, \
    split_into_subnets

from .zones import ZoneSet, extract_zones

from .planner import \
    PlannerOptions, \
    plan, \
    plan_byo_vpc, \
    plan_managed_vpc, \
    subnet_id, \
    validate_plan

__all__ = [
    'find_overlaps',
    'find_unallocated_subnets',
    'split_into_subnets',
    'ZoneSet',
    'extract_zones',
    'PlannerOptions',
    'plan',
    'plan_byo_vpc',
    'plan_managed_vpc',
    'subnet_id',
    'validate_plan',
]
