#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved

"""
Cloud metadata providers

A provider answers the three questions the planner asks the cloud: which
zones exist in the region, what are these subnets, and which route tables
belong to a VPC. Result sets must be fully drained before they are returned;
the planner never sees a partial snapshot.
"""
import ipaddress
import logging
from abc import ABCMeta, abstractmethod
from typing import List

import yaml

from .classifier import classify
from ..common.errors import InvalidEdgeSubnet, MultipleVPCsDetected, SubnetNotFound
from ..common.models import RouteTable, Subnet, SubnetGroups, Zone
from ..schema import MetadataSchema

logger = logging.getLogger(__name__)


class MetadataProvider(metaclass=ABCMeta):
    """ Read-only view of the cloud region
    """

    @property
    @abstractmethod
    def region(self) -> str:
        """ Return the region name
        """

    @abstractmethod
    def zones(self) -> List[Zone]:
        """ Return every zone of the region, regular and edge
        """

    @abstractmethod
    def describe_subnets(self, ids: List[str]) -> List[Subnet]:
        """ Return the subnets matching the IDs. Only the zone name of each subnet is known at this point and the
        public flag is unset. Unknown IDs are omitted.
        """

    @abstractmethod
    def route_tables(self, vpc_id: str) -> List[RouteTable]:
        """ Return every route table of the VPC
        """

    def availability_zones(self) -> List[str]:
        """ Sorted names of the regular zones in the region """
        return sorted(z.name for z in self.zones() if not z.is_edge)

    def edge_zones(self) -> List[str]:
        """ Sorted names of the local and wavelength zones in the region """
        return sorted(z.name for z in self.zones() if z.is_edge)


def gather_subnets(provider: MetadataProvider, ids: List[str]) -> SubnetGroups:
    """
    Describe and classify pre-existing subnets, grouping them into private, public and edge subnets. All subnets must
    share one VPC; the VPC of the first subnet described is the baseline.
    Returns:
        SubnetGroups with each group in the order the IDs were requested
    """
    ids = list(dict.fromkeys(ids))
    groups = SubnetGroups()
    if not ids:
        return groups

    described = {}
    vpc_from_subnet = ""
    for subnet in provider.describe_subnets(ids):
        if not groups.vpc_id:
            groups.vpc_id = subnet.vpc_id
            vpc_from_subnet = subnet.id
        elif subnet.vpc_id != groups.vpc_id:
            raise MultipleVPCsDetected(
                f"all subnets must belong to the same VPC: {subnet.id} is from {subnet.vpc_id}, "
                f"but {vpc_from_subnet} is from {groups.vpc_id}"
            )
        described[subnet.id] = subnet

    for subnet_id in ids:
        if subnet_id not in described:
            raise SubnetNotFound(f"failed to find {subnet_id}")

    route_tables = provider.route_tables(groups.vpc_id)
    zones = {zone.name: zone for zone in provider.zones()}

    for subnet in classify([described[i] for i in ids], route_tables, zones):
        if subnet.zone.is_edge:
            # edge zones only support subnets on public route tables
            if not subnet.public:
                raise InvalidEdgeSubnet(
                    f"edge zone subnets must be associated with public route tables: subnet {subnet.id} from zone "
                    f"{subnet.zone.name}[{subnet.zone.zone_type.value}] is private"
                )
            groups.edge.append(subnet)
        elif subnet.public:
            groups.public.append(subnet)
        else:
            groups.private.append(subnet)

    logger.info(
        f"found {len(groups.private)} private, {len(groups.public)} public and {len(groups.edge)} edge subnets "
        f"in {groups.vpc_id}"
    )
    return groups


class StaticMetadata(MetadataProvider):
    """ Metadata provider backed by a snapshot document

    The document mirrors the EC2 describe APIs::

        region: us-east-1
        zones:
          - {name: us-east-1a, type: availability-zone, group: us-east-1}
        subnets:
          - {id: subnet-1, vpc: vpc-1, zone: us-east-1a, cidr: 10.0.1.0/24}
        routeTables:
          - RouteTableId: rtb-1
            VpcId: vpc-1
            Associations: [{SubnetId: subnet-1}]
            Routes: [{DestinationCidrBlock: 0.0.0.0/0, GatewayId: igw-1}]
    """

    def __init__(self, doc: dict, validate: bool = True):
        if validate:
            MetadataSchema().validate(doc)
        self._region = doc.get("region", "")
        self._zones = [Zone.fromdict(z) for z in doc.get("zones", [])]
        self._subnets = [
            Subnet(
                id=s["id"],
                cidr=ipaddress.IPv4Network(s["cidr"]),
                zone=Zone(s["zone"]),
                vpc_id=s["vpc"],
            )
            for s in doc.get("subnets", [])
        ]
        self._route_tables = [RouteTable.fromdict(rt) for rt in doc.get("routeTables", [])]

    @classmethod
    def load(cls, filename) -> 'StaticMetadata':
        """ Load a YAML or JSON snapshot
        """
        with open(filename) as input_data:
            doc = yaml.safe_load(input_data)
        return cls(doc or {})

    @property
    def region(self) -> str:
        return self._region

    def zones(self) -> List[Zone]:
        return list(self._zones)

    def describe_subnets(self, ids: List[str]) -> List[Subnet]:
        wanted = set(ids)
        return [s for s in self._subnets if s.id in wanted]

    def route_tables(self, vpc_id: str) -> List[RouteTable]:
        return [rt for rt in self._route_tables if not rt.vpc_id or rt.vpc_id == vpc_id]
