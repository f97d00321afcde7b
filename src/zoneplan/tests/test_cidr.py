import ipaddress

import pytest

from zoneplan.common.errors import InsufficientCIDRSpace
from zoneplan.placer.cidr import split_into_subnets, find_overlaps, find_unallocated_subnets


def _nets(*cidrs):
    return [ipaddress.ip_network(c) for c in cidrs]


def test_split_rounds_up_to_power_of_two():
    val = split_into_subnets("10.0.0.0/16", 5)
    assert val == _nets("10.0.0.0/19", "10.0.32.0/19", "10.0.64.0/19", "10.0.96.0/19", "10.0.128.0/19")


def test_split_exact_power_of_two():
    val = split_into_subnets(ipaddress.ip_network("10.0.96.0/19"), 4)
    assert val == _nets("10.0.96.0/21", "10.0.104.0/21", "10.0.112.0/21", "10.0.120.0/21")


def test_split_single_block_is_the_block():
    assert split_into_subnets("10.0.128.0/19", 1) == _nets("10.0.128.0/19")


@pytest.mark.parametrize("cidr,count,max_prefixlen", [
    ("10.0.0.0/26", 5, 28),    # /29 is below the smallest subnet
    ("10.0.0.0/30", 8, 32),    # would need /33
    ("10.0.0.0/16", 0, 28),
])
def test_split_insufficient_space(cidr, count, max_prefixlen):
    with pytest.raises(InsufficientCIDRSpace):
        split_into_subnets(cidr, count, max_prefixlen)


def test_split_respects_max_prefixlen():
    assert len(split_into_subnets("10.0.0.0/24", 16, max_prefixlen=28)) == 16
    with pytest.raises(InsufficientCIDRSpace) as e:
        split_into_subnets("10.0.0.0/24", 17, max_prefixlen=28)
    assert "10.0.0.0/24" in str(e.value)


def test_find_overlaps():
    assert find_overlaps(_nets("10.0.0.0/24", "10.0.1.0/24", "10.0.2.0/23")) == []

    nested = find_overlaps(_nets("10.0.0.0/16", "10.0.5.0/24"))
    assert nested == [(ipaddress.ip_network("10.0.0.0/16"), ipaddress.ip_network("10.0.5.0/24"))]

    # the wide block keeps overlapping later subnets even past a smaller one
    val = find_overlaps(_nets("10.0.4.0/24", "10.0.0.0/21", "10.0.6.0/24"))
    assert len(val) == 2
    assert all(a == ipaddress.ip_network("10.0.0.0/21") for a, _ in val)

    duplicate = find_overlaps(_nets("10.0.1.0/24", "10.0.1.0/24"))
    assert len(duplicate) == 1


def test_find_unallocated_subnets():
    supernet = ipaddress.ip_network("10.0.0.0/24")
    allocated_subnets = _nets("10.0.0.176/28", "10.0.0.64/26", "10.0.0.128/27")
    unallocated = find_unallocated_subnets(supernet, allocated_subnets)

    expected_unallocated = _nets("10.0.0.0/26", "10.0.0.160/28", "10.0.0.192/26")
    assert unallocated == expected_unallocated, f"Expected {expected_unallocated}, but got {unallocated}"

    # test no unallocated subnets
    assert find_unallocated_subnets(supernet, []) == [supernet]

    # test fully allocated supernet
    assert find_unallocated_subnets(supernet, allocated_subnets + expected_unallocated) == []
