import ipaddress
import logging
import math
from typing import List, Tuple, Union

from ..common import MAX_SUBNET_PREFIXLEN
from ..common.errors import InsufficientCIDRSpace

logger = logging.getLogger(__name__)

NetworkLike = Union[str, ipaddress.IPv4Network]


def split_into_subnets(
        cidr: NetworkLike,
        count: int,
        max_prefixlen: int = MAX_SUBNET_PREFIXLEN,
) -> List[ipaddress.IPv4Network]:
    """
    Split a CIDR block into `count` equal sized subnets. The prefix length grows by ceil(log2(count)) bits so the
    block is divided into the next power of two parts; only the first `count` parts, in address order, are returned.
    The remaining trailing parts are left free.
    Arguments:
        cidr: The IPv4 block to split
        count: The number of subnets required
        max_prefixlen: The longest prefix length a resulting subnet may have
    Returns:
        A list of exactly `count` subnets
    """
    network = ipaddress.IPv4Network(cidr)
    if count < 1:
        raise InsufficientCIDRSpace(f"cannot split {network} into {count} subnets")

    new_prefix = network.prefixlen + math.ceil(math.log2(count))
    if new_prefix > min(max_prefixlen, 32):
        raise InsufficientCIDRSpace(
            f"cannot split {network} into {count} subnets: /{new_prefix} is smaller than the minimum subnet "
            f"size /{min(max_prefixlen, 32)}"
        )

    rv = []
    for subnet in network.subnets(new_prefix=new_prefix):
        rv.append(subnet)
        if len(rv) == count:
            break
    logger.debug(f"split {network} into {count} subnets of /{new_prefix}")
    return rv


def find_overlaps(subnets: List[ipaddress.IPv4Network]) -> List[Tuple[ipaddress.IPv4Network, ipaddress.IPv4Network]]:
    """
    Find pairs of overlapping subnets. Each subnet is compared against the widest block seen so far in address
    order, so nested and partially overlapping subnets are both reported.
    """
    rv = []
    ordered = sorted(subnets, key=lambda s: (s.network_address, s.prefixlen))
    widest = None
    for subnet in ordered:
        if widest is not None and subnet.network_address <= widest.broadcast_address:
            rv.append((widest, subnet))
        if widest is None or subnet.broadcast_address > widest.broadcast_address:
            widest = subnet
    return rv


def find_unallocated_subnets(
        supernet: ipaddress.IPv4Network,
        allocated_subnets: List[ipaddress.IPv4Network],
) -> List[ipaddress.IPv4Network]:
    """
    Find unallocated subnets between the allocated subnets and the supernet. Assumes that the allocated subnets are
    non-overlapping. The supernet must contain all the allocated subnets.
    Think of it as supernet - allocated_subnets.
    Returns
        A list of unallocated subnets from the supernet
    """
    allocated_subnets = sorted(allocated_subnets)
    if not allocated_subnets:
        return [supernet]

    unallocated_subnets = []

    if allocated_subnets[0].network_address != supernet.network_address:
        unallocated_subnets.extend(
            ipaddress.summarize_address_range(supernet.network_address, allocated_subnets[0].network_address - 1))

    for i in range(len(allocated_subnets) - 1):
        start = allocated_subnets[i].broadcast_address + 1
        end = allocated_subnets[i + 1].network_address - 1
        if start <= end:
            unallocated_subnets.extend(ipaddress.summarize_address_range(start, end))

    if allocated_subnets[-1].broadcast_address != supernet.broadcast_address:
        unallocated_subnets.extend(ipaddress.summarize_address_range(allocated_subnets[-1].broadcast_address + 1,
                                                                     supernet.broadcast_address))

    return unallocated_subnets
