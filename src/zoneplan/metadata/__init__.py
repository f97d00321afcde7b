#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Cloud metadata: providers and the subnet classifier
"""

from ..common import zone_kind

from .classifier import \
    classify, \
    find_route_table, \
    is_subnet_public

from .provider import \
    MetadataProvider, \
    StaticMetadata, \
    gather_subnets

__all__ = [
    'classify',
    'find_route_table',
    'is_subnet_public',
    'zone_kind',
    'MetadataProvider',
    'StaticMetadata',
    'gather_subnets',
]
