#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Zone bookkeeping

Zones are tracked per machine pool role and always consumed in sorted order
so the CIDR assignment derived from them is reproducible.
"""
import logging
from typing import Iterable, List, Set

from ..common import POOL_COMPUTE, POOL_CONTROL_PLANE
from ..common.errors import ZoneRoleConflict
from ..config import InstallConfig

logger = logging.getLogger(__name__)


class ZoneSet:
    """ Zones per role: control plane, compute and edge
    """

    def __init__(self):
        self._control_plane: Set[str] = set()
        self._compute: Set[str] = set()
        self._edge: Set[str] = set()

    def _role_zones(self, pool: str):
        if pool == POOL_CONTROL_PLANE:
            return self._control_plane
        if pool == POOL_COMPUTE:
            return self._compute
        return None

    def set_zones(self, pool: str, zones: Iterable[str]):
        """ Insert the zones of a control plane or compute pool, other pool names are ignored
        """
        role_zones = self._role_zones(pool)
        if role_zones is not None:
            role_zones.update(zones)

    def set_default_zones(self, pool: str, platform_default: Iterable[str], region_default: Iterable[str]):
        """ Fill an empty role from the platform default zones, or from the region zones when the platform sets none
        """
        role_zones = self._role_zones(pool)
        if role_zones is None or role_zones:
            return
        platform_default = list(platform_default)
        if platform_default:
            role_zones.update(platform_default)
        else:
            role_zones.update(region_default)

    def add_edge_zones(self, zones: Iterable[str]):
        self._edge.update(zones)

    def control_plane_zones(self) -> List[str]:
        return sorted(self._control_plane)

    def compute_zones(self) -> List[str]:
        return sorted(self._compute)

    def availability_zones(self) -> List[str]:
        """ Sorted union of the control plane and compute zones """
        return sorted(self._control_plane | self._compute)

    def edge_zones(self) -> List[str]:
        return sorted(self._edge)

    def check_conflicts(self):
        conflicts = sorted(self._edge & (self._control_plane | self._compute))
        if conflicts:
            raise ZoneRoleConflict(f"zones used both as edge and regular zones: {', '.join(conflicts)}")


def extract_zones(install_config: InstallConfig, zones_in_region: List[str]) -> ZoneSet:
    """
    Resolve the effective zones per role. Pool zones take precedence, then the platform default machine pool zones,
    then every regular zone of the region. The edge pool only ever contributes edge zones.
    """
    out = ZoneSet()
    default_zones = list(install_config.default_zones)

    if install_config.control_plane is not None:
        out.set_zones(POOL_CONTROL_PLANE, install_config.control_plane.zones)
    out.set_default_zones(POOL_CONTROL_PLANE, default_zones, zones_in_region)

    for pool in install_config.compute:
        if pool.is_edge:
            out.add_edge_zones(pool.zones)
            continue
        out.set_zones(POOL_COMPUTE, pool.zones)
        out.set_default_zones(POOL_COMPUTE, default_zones, zones_in_region)

    out.check_conflicts()
    logger.debug(
        f"effective zones: control plane {out.control_plane_zones()}, compute {out.compute_zones()}, "
        f"edge {out.edge_zones()}"
    )
    return out
