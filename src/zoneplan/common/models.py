import dataclasses
import ipaddress
from typing import Dict, List, Optional

from . import ZoneKind, ZoneType, zone_kind


@dataclasses.dataclass(frozen=True)
class Zone:
    name: str
    zone_type: ZoneType = ZoneType.REGULAR
    # region name for regular zones, the local zone group otherwise
    group: str = ""

    @property
    def kind(self) -> ZoneKind:
        return zone_kind(self.zone_type)

    @property
    def is_edge(self) -> bool:
        return self.kind == ZoneKind.EDGE

    def todict(self) -> dict:
        return {
            "name": self.name,
            "type": self.zone_type.value,
            "group": self.group,
        }

    @classmethod
    def fromdict(cls, data: dict):
        return cls(
            name=data["name"],
            zone_type=ZoneType(data.get("type", ZoneType.REGULAR.value)),
            group=data.get("group", ""),
        )


@dataclasses.dataclass(frozen=True)
class Subnet:
    id: str
    cidr: ipaddress.IPv4Network
    zone: Zone
    public: bool = False
    vpc_id: str = ""

    def todict(self) -> dict:
        """ Subnet descriptor consumed by the manifest generators """
        return {
            "id": self.id,
            "availabilityZone": self.zone.name,
            "cidrBlock": str(self.cidr),
            "isPublic": self.public,
        }


@dataclasses.dataclass(frozen=True)
class RouteTableAssociation:
    subnet_id: Optional[str] = None
    main: bool = False


@dataclasses.dataclass(frozen=True)
class Route:
    destination: str = ""
    gateway_id: str = ""


@dataclasses.dataclass(frozen=True)
class RouteTable:
    id: str
    vpc_id: str = ""
    associations: List[RouteTableAssociation] = dataclasses.field(default_factory=list)
    routes: List[Route] = dataclasses.field(default_factory=list)

    @classmethod
    def fromdict(cls, data: dict):
        """ Build from a DescribeRouteTables entry """
        return cls(
            id=data.get("RouteTableId", ""),
            vpc_id=data.get("VpcId", ""),
            associations=[
                RouteTableAssociation(subnet_id=assoc.get("SubnetId"), main=bool(assoc.get("Main", False)))
                for assoc in data.get("Associations", [])
            ],
            routes=[
                Route(destination=route.get("DestinationCidrBlock", ""), gateway_id=route.get("GatewayId") or "")
                for route in data.get("Routes", [])
            ],
        )


@dataclasses.dataclass
class SubnetGroups:
    vpc_id: str = ""
    private: List[Subnet] = dataclasses.field(default_factory=list)
    public: List[Subnet] = dataclasses.field(default_factory=list)
    edge: List[Subnet] = dataclasses.field(default_factory=list)

    def all_subnets(self) -> List[Subnet]:
        return self.private + self.public + self.edge


@dataclasses.dataclass(frozen=True)
class VPCSpec:
    # exactly one of these is set, id for existing VPCs
    id: str = ""
    cidr_block: Optional[ipaddress.IPv4Network] = None

    def todict(self) -> dict:
        if self.id:
            return {"id": self.id}
        return {"cidrBlock": str(self.cidr_block)}


@dataclasses.dataclass(frozen=True)
class NetworkPlan:
    vpc: VPCSpec
    subnets: List[Subnet] = dataclasses.field(default_factory=list)

    def todict(self) -> dict:
        return {
            "vpc": self.vpc.todict(),
            "subnets": [subnet.todict() for subnet in self.subnets],
        }

    def private_subnets(self) -> List[Subnet]:
        return [s for s in self.subnets if not s.public]

    def public_subnets(self) -> List[Subnet]:
        return [s for s in self.subnets if s.public]

    def subnets_by_zone(self, public: bool = False) -> Dict[str, str]:
        """
        Map zone name to subnet ID for the requested visibility. Machine pools use this to place machines; the first
        subnet seen in a zone wins.
        """
        rv = {}
        for subnet in self.subnets:
            if subnet.public == public and subnet.zone.name not in rv:
                rv[subnet.zone.name] = subnet.id
        return rv
