#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved

"""
Subnet classifier

Cloud APIs expose no "is public" attribute for a subnet, so publicness is
inferred from the route table that applies to it: the explicitly associated
table, or else the VPC main table. A subnet is public when that table routes
to an internet gateway. Virtual private gateways (vgw-), peering connections
(pcx-) and the in-VPC "local" target do not count.
"""
import dataclasses
import logging
from typing import Dict, List, Optional

from ..common import INTERNET_GATEWAY_PREFIX
from ..common.errors import RoutingTableNotFound, ZoneNotFound
from ..common.models import RouteTable, Subnet, Zone

logger = logging.getLogger(__name__)


def find_route_table(route_tables: List[RouteTable], subnet_id: str) -> Optional[RouteTable]:
    """ Return the route table applying to the subnet, explicit association first, then the main table
    """
    for table in route_tables:
        for assoc in table.associations:
            if assoc.subnet_id == subnet_id:
                return table

    # without an explicit association the subnet implicitly uses the VPC's main table
    for table in route_tables:
        for assoc in table.associations:
            if assoc.main:
                logger.debug(f"assuming implicit use of main routing table {table.id} for {subnet_id}")
                return table

    return None


def is_subnet_public(route_tables: List[RouteTable], subnet_id: str) -> bool:
    table = find_route_table(route_tables, subnet_id)
    if table is None:
        raise RoutingTableNotFound(f"could not locate routing table for {subnet_id}")

    for route in table.routes:
        if route.gateway_id.startswith(INTERNET_GATEWAY_PREFIX):
            return True
    return False


def classify(subnets: List[Subnet], route_tables: List[RouteTable], zones: Dict[str, Zone]) -> List[Subnet]:
    """
    Resolve the public flag and the zone metadata of each subnet.
    Arguments:
        subnets: subnets as described by the metadata provider, zone carrying only its name
        route_tables: every route table of the subnets' VPC
        zones: zone metadata of the region keyed by zone name
    Returns:
        New subnet records in the same order
    """
    rv = []
    for subnet in subnets:
        zone = zones.get(subnet.zone.name)
        if zone is None:
            raise ZoneNotFound(f"subnet {subnet.id} is in zone {subnet.zone.name} which is not in the region")
        public = is_subnet_public(route_tables, subnet.id)
        logger.debug(f"classified {subnet.id} in {zone.name}[{zone.zone_type.value}] public={public}")
        rv.append(dataclasses.replace(subnet, zone=zone, public=public))
    return rv
