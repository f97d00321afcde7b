from enum import Enum


class ZoneType(Enum):
    REGULAR = "availability-zone"
    LOCAL = "local-zone"
    WAVELENGTH = "wavelength-zone"


class ZoneKind(Enum):
    REGULAR = "regular"
    EDGE = "edge"


class PublishStrategy(Enum):
    EXTERNAL = "External"
    INTERNAL = "Internal"


# machine pool names from the install config
POOL_CONTROL_PLANE = "master"
POOL_COMPUTE = "worker"
POOL_EDGE = "edge"

# route targets starting with this prefix are internet gateways
INTERNET_GATEWAY_PREFIX = "igw"

# AWS accepts subnet sizes between /16 and /28
MAX_SUBNET_PREFIXLEN = 28

_ZONE_KINDS = {
    ZoneType.REGULAR: ZoneKind.REGULAR,
    ZoneType.LOCAL: ZoneKind.EDGE,
    ZoneType.WAVELENGTH: ZoneKind.EDGE,
}


def zone_kind(zone_type: ZoneType) -> ZoneKind:
    """ Local and wavelength zones are edge zones """
    return _ZONE_KINDS[zone_type]
