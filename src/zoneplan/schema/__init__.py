#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Install configuration and metadata schemas
"""

from .jstypes import \
    JSIPNetwork, \
    JSZoneName

from .schema import InstallConfigSchema, MetadataSchema

__all__ = [
    'JSIPNetwork',
    'JSZoneName',
    'InstallConfigSchema',
    'MetadataSchema',
]
