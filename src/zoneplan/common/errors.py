#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Planning errors

Every error is fatal to the planning run. Callers that add context re-raise
the same class with a stage prefix so the failing stage stays visible.
"""


class PlanningError(Exception):
    """ Base class for all planning failures
    """

    def with_stage(self, stage: str) -> 'PlanningError':
        """ Return a copy of this error with the stage prepended to the message
        """
        return self.__class__(f"{stage}: {self}")


class InvalidConfig(PlanningError):
    """ An input document does not match its schema """


class MissingInstallConfig(PlanningError):
    """ The install configuration, or a required field of it, is absent """


class MissingClusterMetadata(PlanningError):
    """ The cluster identity (infra ID) is absent """


class MultipleVPCsDetected(PlanningError):
    """ Pre-existing subnets do not share exactly one VPC """


class ZoneRoleConflict(PlanningError):
    """ A zone is declared both as an edge zone and as a regular zone """


class ZoneNotFound(PlanningError):
    """ A subnet references a zone unknown to the region metadata """


class SubnetNotFound(PlanningError):
    """ A requested subnet was not returned by the metadata provider """


class InvalidEdgeSubnet(PlanningError):
    """ An edge zone subnet is not associated with a public route table """


class RoutingTableNotFound(PlanningError):
    """ Neither an explicit nor a main route table applies to a subnet """


class InsufficientCIDRSpace(PlanningError):
    """ A CIDR block is too small to hold the requested subnets """


class OverlappingSubnets(PlanningError):
    """ Two subnets of a plan share addresses """


class MissingZoneSubnet(PlanningError):
    """ A zone used by a machine pool has no subnet of the required visibility """
