import ipaddress

import pytest

from zoneplan.common import ZoneKind, ZoneType, zone_kind
from zoneplan.common.errors import RoutingTableNotFound, ZoneNotFound
from zoneplan.common.models import RouteTable, Subnet, Zone
from zoneplan.metadata.classifier import classify, find_route_table, is_subnet_public
from zoneplan.tests.builders import route_table


def _tables(*docs):
    return [RouteTable.fromdict(d) for d in docs]


@pytest.mark.parametrize("gateway_id,expected", [
    ("igw-0123456789", True),
    ("vgw-0123456789", False),   # virtual private gateway
    ("pcx-0123456789", False),   # vpc peering
    (None, False),               # local route only
])
def test_explicit_association(gateway_id, expected):
    tables = _tables(
        route_table("rtb-main", main=True, gateway_id="igw-main"),
        route_table("rtb-1", ["subnet-1"], gateway_id=gateway_id),
    )
    assert is_subnet_public(tables, "subnet-1") is expected


def test_fallback_to_main_route_table():
    tables = _tables(
        route_table("rtb-1", ["subnet-other"], gateway_id="igw-1"),
        route_table("rtb-main", main=True),
    )
    assert find_route_table(tables, "subnet-1").id == "rtb-main"
    assert is_subnet_public(tables, "subnet-1") is False

    tables = _tables(route_table("rtb-main", main=True, gateway_id="igw-1"))
    assert is_subnet_public(tables, "subnet-1") is True


def test_explicit_association_wins_over_main():
    # a main table can also be explicitly associated with other subnets
    tables = _tables(
        route_table("rtb-main", ["subnet-2"], main=True, gateway_id="igw-1"),
        route_table("rtb-1", ["subnet-1"]),
    )
    assert find_route_table(tables, "subnet-1").id == "rtb-1"
    assert is_subnet_public(tables, "subnet-1") is False
    assert is_subnet_public(tables, "subnet-2") is True


def test_no_route_table():
    tables = _tables(route_table("rtb-1", ["subnet-other"], gateway_id="igw-1"))
    with pytest.raises(RoutingTableNotFound) as e:
        is_subnet_public(tables, "subnet-1")
    assert "subnet-1" in str(e.value)

    with pytest.raises(RoutingTableNotFound):
        is_subnet_public([], "subnet-1")


def test_route_table_fromdict_tolerates_missing_fields():
    table = RouteTable.fromdict({
        "RouteTableId": "rtb-1",
        "Associations": [{"SubnetId": "subnet-1"}, {"Main": False}],
        "Routes": [{"DestinationCidrBlock": "0.0.0.0/0", "NatGatewayId": "nat-1"}],
    })
    assert table.associations[1].subnet_id is None
    assert table.routes[0].gateway_id == ""
    assert is_subnet_public([table], "subnet-1") is False


def test_zone_kind():
    assert zone_kind(ZoneType.REGULAR) == ZoneKind.REGULAR
    assert zone_kind(ZoneType.LOCAL) == ZoneKind.EDGE
    assert zone_kind(ZoneType.WAVELENGTH) == ZoneKind.EDGE
    for zone_type in ZoneType:
        assert Zone("z", zone_type).kind == zone_kind(zone_type)


def test_classify_resolves_zone_and_visibility():
    zones = {
        "us-east-1a": Zone("us-east-1a", ZoneType.REGULAR, "us-east-1"),
        "us-east-1-nyc-1a": Zone("us-east-1-nyc-1a", ZoneType.LOCAL, "us-east-1-nyc-1"),
    }
    subnets = [
        Subnet("subnet-1", ipaddress.ip_network("10.0.1.0/24"), Zone("us-east-1a"), vpc_id="vpc-1"),
        Subnet("subnet-2", ipaddress.ip_network("10.0.2.0/24"), Zone("us-east-1-nyc-1a"), vpc_id="vpc-1"),
    ]
    tables = _tables(
        route_table("rtb-main", main=True),
        route_table("rtb-public", ["subnet-2"], gateway_id="igw-1"),
    )

    val = classify(subnets, tables, zones)
    assert [s.id for s in val] == ["subnet-1", "subnet-2"]
    assert val[0].public is False
    assert val[0].zone.group == "us-east-1"
    assert val[1].public is True
    assert val[1].zone.is_edge
    # the input records are untouched
    assert subnets[1].public is False

    with pytest.raises(ZoneNotFound):
        classify(subnets, tables, {})
