#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""Zone and CIDR planner

Builds the subnet layout of the cluster VPC. In bring-your-own VPC mode the
pre-existing subnets are classified and relayed unchanged. In managed mode
the machine network is split into equal power-of-two blocks:

    [private zone 0] .. [private zone N-1] [public] [edge] [free ...]

The public block is split again into N per-zone public subnets and the edge
block into private and public edge subnets plus one free block. The block at
index N stays free when the cluster is internal, and unused trailing blocks
are left for day-2 expansion.
"""
import dataclasses
import ipaddress
import logging
from typing import List, Optional

from .cidr import find_overlaps, find_unallocated_subnets, split_into_subnets
from .zones import extract_zones
from ..common import MAX_SUBNET_PREFIXLEN, ZoneType
from ..common.errors import InsufficientCIDRSpace, MissingClusterMetadata, MissingInstallConfig, \
    MissingZoneSubnet, MultipleVPCsDetected, OverlappingSubnets, PlanningError
from ..common.models import NetworkPlan, Subnet, VPCSpec, Zone
from ..config import ClusterMetadata, InstallConfig
from ..metadata.provider import MetadataProvider, gather_subnets

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PlannerOptions:
    # longest prefix a generated subnet may have
    max_subnet_prefixlen: int = MAX_SUBNET_PREFIXLEN


def subnet_id(infra_id: str, zone: str, public: bool) -> str:
    return f"{infra_id}-subnet-{'public' if public else 'private'}-{zone}"


def plan(
        install_config: Optional[InstallConfig],
        cluster: Optional[ClusterMetadata],
        provider: MetadataProvider,
        options: PlannerOptions = PlannerOptions(),
) -> NetworkPlan:
    """
    Compute the network plan of the cluster.
    Arguments:
        install_config: The install configuration
        cluster: The cluster identity
        provider: Source of zone, subnet and route table facts
        options: Planner limits
    Returns:
        The NetworkPlan. Any failure raises a PlanningError and no plan is returned.
    """
    if install_config is None:
        raise MissingInstallConfig("failed to get install config")
    if cluster is None or not cluster.infra_id:
        raise MissingClusterMetadata("failed to get cluster infra ID")

    if install_config.is_byo_vpc:
        logger.info(f"planning subnets for existing VPC from {len(install_config.subnets)} subnets")
        try:
            return plan_byo_vpc(install_config, provider)
        except PlanningError as e:
            raise e.with_stage("planning subnets for existing VPC") from e

    logger.info("planning subnets for managed VPC")
    try:
        return plan_managed_vpc(install_config, cluster, provider, options)
    except PlanningError as e:
        raise e.with_stage("planning subnets for managed VPC") from e


def plan_byo_vpc(install_config: InstallConfig, provider: MetadataProvider) -> NetworkPlan:
    """ Relay the pre-existing subnets, no CIDR arithmetic is performed """
    groups = gather_subnets(provider, list(install_config.subnets))
    if install_config.vpc and groups.vpc_id != install_config.vpc:
        raise MultipleVPCsDetected(
            f"subnets belong to {groups.vpc_id} but the install config requests VPC {install_config.vpc}"
        )

    # zones the pools ask for explicitly must be served by the existing subnets
    declared = set()
    if install_config.control_plane is not None:
        declared.update(install_config.control_plane.zones)
    for pool in install_config.compute:
        if not pool.is_edge:
            declared.update(pool.zones)

    out = NetworkPlan(vpc=VPCSpec(id=groups.vpc_id), subnets=groups.all_subnets())
    validate_plan(out, required_zones=sorted(declared), public_required=install_config.is_external)
    return out


def plan_managed_vpc(
        install_config: InstallConfig,
        cluster: ClusterMetadata,
        provider: MetadataProvider,
        options: PlannerOptions = PlannerOptions(),
) -> NetworkPlan:
    main_cidr = install_config.machine_cidr
    if main_cidr is None:
        raise MissingInstallConfig("install config has no machine network CIDR")

    try:
        zones = extract_zones(install_config, provider.availability_zones())
    except PlanningError as e:
        raise e.with_stage("failed to get availability zones") from e
    availability_zones = zones.availability_zones()
    edge_zones = zones.edge_zones()
    is_external = install_config.is_external
    if not availability_zones:
        raise InsufficientCIDRSpace(f"no availability zones to place subnets in {main_cidr}")

    # private blocks plus one free block for expansion
    num_blocks = len(availability_zones) + 1
    if is_external:
        num_blocks += 1
    if edge_zones:
        num_blocks += 1
    logger.debug(
        f"splitting {main_cidr} into {num_blocks} blocks for {len(availability_zones)} zones, "
        f"{len(edge_zones)} edge zones, external={is_external}"
    )

    try:
        private_cidrs = split_into_subnets(main_cidr, num_blocks, options.max_subnet_prefixlen)
    except InsufficientCIDRSpace as e:
        raise e.with_stage("computing private subnets") from e

    public_cidrs = []
    if is_external:
        try:
            public_cidrs = split_into_subnets(
                private_cidrs[len(availability_zones)], len(availability_zones), options.max_subnet_prefixlen)
        except InsufficientCIDRSpace as e:
            raise e.with_stage("computing public subnets") from e

    known_zones = {z.name: z for z in provider.zones()}

    def _zone(name: str, zone_type: ZoneType) -> Zone:
        return known_zones.get(name) or Zone(name, zone_type, provider.region)

    subnets = []
    for idx, name in enumerate(availability_zones):
        zone = _zone(name, ZoneType.REGULAR)
        subnets.append(Subnet(subnet_id(cluster.infra_id, name, False), private_cidrs[idx], zone, False))
        if is_external:
            subnets.append(Subnet(subnet_id(cluster.infra_id, name, True), public_cidrs[idx], zone, True))

    if edge_zones:
        # edge block follows the public block, private edge subnets first then public ones, plus one free block
        num_edge_subnets = len(edge_zones) * (2 if is_external else 1) + 1
        try:
            edge_cidrs = split_into_subnets(
                private_cidrs[len(availability_zones) + 1], num_edge_subnets, options.max_subnet_prefixlen)
        except InsufficientCIDRSpace as e:
            raise e.with_stage("computing edge subnets") from e

        for idx, name in enumerate(edge_zones):
            zone = _zone(name, ZoneType.LOCAL)
            subnets.append(Subnet(subnet_id(cluster.infra_id, name, False), edge_cidrs[idx], zone, False))
            if is_external:
                subnets.append(
                    Subnet(subnet_id(cluster.infra_id, name, True), edge_cidrs[len(edge_zones) + idx], zone, True))

    out = NetworkPlan(vpc=VPCSpec(cidr_block=main_cidr), subnets=subnets)
    validate_plan(out, base_cidr=main_cidr, required_zones=availability_zones, public_required=is_external)

    free = find_unallocated_subnets(main_cidr, [s.cidr for s in subnets])
    logger.info(
        f"planned {len(subnets)} subnets in {main_cidr}, free blocks: {', '.join(str(f) for f in free) or 'none'}"
    )
    return out


def validate_plan(
        network_plan: NetworkPlan,
        base_cidr: Optional[ipaddress.IPv4Network] = None,
        required_zones: Optional[List[str]] = None,
        public_required: bool = False,
):
    """
    Check the plan invariants: subnets never overlap, every subnet is inside the base CIDR when one is given, and
    every required zone has a private subnet, plus a public one when public subnets are required.
    """
    overlaps = find_overlaps([s.cidr for s in network_plan.subnets])
    if overlaps:
        pairs = ", ".join(f"{a} and {b}" for a, b in overlaps)
        raise OverlappingSubnets(f"overlapping subnets: {pairs}")

    if base_cidr is not None:
        for subnet in network_plan.subnets:
            if not subnet.cidr.subnet_of(base_cidr):
                raise InsufficientCIDRSpace(f"subnet {subnet.id} {subnet.cidr} is outside of {base_cidr}")

    for zone in required_zones or ():
        if zone not in network_plan.subnets_by_zone(public=False):
            raise MissingZoneSubnet(f"no private subnet for zone {zone}")
        if public_required and zone not in network_plan.subnets_by_zone(public=True):
            raise MissingZoneSubnet(f"no public subnet for zone {zone}")
