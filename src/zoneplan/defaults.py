#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Platform defaults

Default instance types, in decreasing priority order. c5d.2xlarge is offered
in most local zones, so it closes the AMD64 list for edge pools.
"""
import dataclasses
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class Architecture(Enum):
    AMD64 = "amd64"
    ARM64 = "arm64"


_DEFAULT_INSTANCE_TYPES = MappingProxyType({
    Architecture.AMD64: ("m6i.xlarge", "m5.xlarge", "c5d.2xlarge"),
    Architecture.ARM64: ("m6g.xlarge",),
})


@dataclasses.dataclass(frozen=True)
class PlatformDefaults:
    # per architecture, region to instance types overriding the defaults
    region_instance_types: Mapping[Architecture, Mapping[str, Tuple[str, ...]]] = dataclasses.field(
        default_factory=lambda: MappingProxyType({}))
    instance_types_by_arch: Mapping[Architecture, Tuple[str, ...]] = dataclasses.field(
        default_factory=lambda: _DEFAULT_INSTANCE_TYPES)

    def instance_types(self, region: str = "", arch: Architecture = Architecture.AMD64) -> Tuple[str, ...]:
        """ Return the instance types to try for a region, a region override wins over the defaults """
        override = self.region_instance_types.get(arch, {}).get(region)
        if override:
            return tuple(override)
        return self.instance_types_by_arch.get(arch, _DEFAULT_INSTANCE_TYPES[Architecture.AMD64])
