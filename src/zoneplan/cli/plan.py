#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved

"""
Planning subcommands
"""
import json
import logging

import yaml
from tabulate import tabulate

from .base import \
    SubCommandBase, \
    UsesInstallConfig
from ..common.models import NetworkPlan
from ..config import ClusterMetadata
from ..defaults import Architecture, PlatformDefaults
from ..metadata import gather_subnets
from ..placer import extract_zones, plan

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('json', 'yaml', 'table')


def format_plan(network_plan: NetworkPlan, output_format: str = 'json') -> str:
    """ Render the plan descriptor
    """
    doc = network_plan.todict()
    if output_format == 'json':
        return json.dumps(doc, sort_keys=True, indent=4, separators=(',', ': ')) + "\n"
    if output_format == 'yaml':
        return yaml.safe_dump(doc, default_flow_style=False)
    if output_format == 'table':
        vpc = doc["vpc"].get("id") or doc["vpc"].get("cidrBlock")
        rows = [[s["id"], s["availabilityZone"], s["cidrBlock"], s["isPublic"]] for s in doc["subnets"]]
        return f"VPC: {vpc}\n" + tabulate(rows, headers=["ID", "Zone", "CIDR", "Public"]) + "\n"
    raise ValueError(f'invalid output format: {output_format}')


@UsesInstallConfig()
class PlanNetwork(SubCommandBase):
    """ Compute the VPC and subnet layout of the cluster
    """
    sub_command = 'plan'

    @staticmethod
    def build_parser(parser):
        parser.add_argument('-i', '--infra-id', required=True,
                            help='Cluster infra ID used to name the subnets')

        parser.add_argument('-o', '--output',
                            help='Write the plan to this file instead of stdout')

        parser.add_argument('-f', '--format', default='json',
                            choices=OUTPUT_FORMATS,
                            help='Output format')

    def __call__(self, args):
        cluster = ClusterMetadata(infra_id=args.infra_id,
                                  cluster_name=args.install_config.cluster_name)
        network_plan = plan(args.install_config, cluster, args.provider)
        output = format_plan(network_plan, args.format)

        if args.output:
            with open(args.output, 'w') as out:
                out.write(output)
            logger.info(f"wrote network plan to {args.output}")
        else:
            print(output, end='')
        return 0


@UsesInstallConfig()
class ShowZones(SubCommandBase):
    """ Show the effective zones per machine pool role
    """
    sub_command = 'zones'

    @staticmethod
    def build_parser(parser):
        pass

    def __call__(self, args):
        zones = extract_zones(args.install_config, args.provider.availability_zones())
        rows = [
            ["control-plane", ", ".join(zones.control_plane_zones())],
            ["compute", ", ".join(zones.compute_zones())],
            ["edge", ", ".join(zones.edge_zones())],
        ]
        print(tabulate(rows, headers=["Role", "Zones"]))
        return 0


@UsesInstallConfig(config=False)
class ClassifySubnets(SubCommandBase):
    """ Classify existing subnets as public or private
    """
    sub_command = 'classify'

    @staticmethod
    def build_parser(parser):
        parser.add_argument('subnet_ids', nargs='+',
                            help='Subnet IDs to classify')

    def __call__(self, args):
        groups = gather_subnets(args.provider, args.subnet_ids)
        rows = []
        for role, subnets in (("private", groups.private), ("public", groups.public), ("edge", groups.edge)):
            for s in subnets:
                rows.append([s.id, role, s.zone.name, s.zone.zone_type.value, s.cidr, s.public])
        print(f"VPC: {groups.vpc_id}")
        print(tabulate(rows, headers=["ID", "Group", "Zone", "Zone Type", "CIDR", "Public"]))
        return 0


class InstanceTypes(SubCommandBase):
    """ Show the default instance types for a region
    """
    sub_command = 'instance_types'

    @staticmethod
    def build_parser(parser):
        parser.add_argument('-r', '--region', default='',
                            help='Region to look up overrides for')

        parser.add_argument('-a', '--arch', default=Architecture.AMD64.value,
                            choices=[a.value for a in Architecture],
                            help='CPU architecture')

    def __call__(self, args):
        for instance_type in PlatformDefaults().instance_types(args.region, Architecture(args.arch)):
            print(instance_type)
        return 0
