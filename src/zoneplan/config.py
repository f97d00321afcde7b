#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Install configuration

Typed, immutable view of the install-config document. Only the fields the
planner reads are kept; everything else in the document is ignored.
"""
import dataclasses
import ipaddress
import logging
from typing import Optional, Tuple

from .common import POOL_CONTROL_PLANE, POOL_EDGE, PublishStrategy
from .schema import InstallConfigSchema

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class MachinePool:
    name: str
    zones: Tuple[str, ...] = ()

    @property
    def is_edge(self) -> bool:
        return self.name == POOL_EDGE

    @classmethod
    def fromdict(cls, data: dict):
        aws = (data.get("platform") or {}).get("aws") or {}
        return cls(
            name=data["name"],
            zones=tuple(aws.get("zones") or ()),
        )


@dataclasses.dataclass(frozen=True)
class InstallConfig:
    cluster_name: str = ""
    publish: PublishStrategy = PublishStrategy.EXTERNAL
    machine_networks: Tuple[ipaddress.IPv4Network, ...] = ()
    control_plane: Optional[MachinePool] = None
    compute: Tuple[MachinePool, ...] = ()
    region: str = ""
    vpc: str = ""
    subnets: Tuple[str, ...] = ()
    default_zones: Tuple[str, ...] = ()

    @property
    def is_external(self) -> bool:
        return self.publish == PublishStrategy.EXTERNAL

    @property
    def is_byo_vpc(self) -> bool:
        """ Pre-existing subnets switch the planner to bring-your-own VPC mode """
        return len(self.subnets) > 0

    @property
    def machine_cidr(self) -> Optional[ipaddress.IPv4Network]:
        """ The first machine network is the VPC base CIDR """
        return self.machine_networks[0] if self.machine_networks else None

    @classmethod
    def fromdict(cls, data: dict, validate: bool = True):
        if validate:
            InstallConfigSchema().validate(data)

        aws = (data.get("platform") or {}).get("aws") or {}
        default_platform = aws.get("defaultMachinePlatform") or {}
        control_plane = data.get("controlPlane")
        if control_plane is not None:
            control_plane = MachinePool.fromdict({"name": POOL_CONTROL_PLANE, **control_plane})

        return cls(
            cluster_name=(data.get("metadata") or {}).get("name", ""),
            publish=PublishStrategy(data.get("publish", PublishStrategy.EXTERNAL.value)),
            machine_networks=tuple(
                ipaddress.IPv4Network(n["cidr"]) for n in (data.get("networking") or {}).get("machineNetwork", [])
            ),
            control_plane=control_plane,
            compute=tuple(MachinePool.fromdict(p) for p in data.get("compute") or ()),
            region=aws.get("region", ""),
            vpc=aws.get("vpc", ""),
            subnets=tuple(aws.get("subnets") or ()),
            default_zones=tuple(default_platform.get("zones") or ()),
        )

    @classmethod
    def load(cls, filename) -> 'InstallConfig':
        data = InstallConfigSchema().load(filename)
        logger.debug(f"loaded install config from {filename}")
        return cls.fromdict(data, validate=False)


@dataclasses.dataclass(frozen=True)
class ClusterMetadata:
    """ Cluster identity, the infra ID prefixes every generated resource name """
    infra_id: str
    cluster_name: str = ""
