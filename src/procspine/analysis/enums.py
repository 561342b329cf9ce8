"""
Integer enums shared by analysis records.

Records store these as plain ints: a peer or agent running a newer build may
send a value this build has no member for, and it must survive the round
trip untouched.

Tags:
    enums, layer, detect-type, scope, procspine
"""

from enum import IntEnum


class Layer(IntEnum):
    """Technology stratum of the owning service."""

    UNDEFINED = 0
    MESH = 1
    GENERAL = 2
    OS_LINUX = 3
    K8S = 4
    FAAS = 5
    MESH_CP = 6
    MESH_DP = 7
    DATABASE = 8
    CACHE = 9
    BROWSER = 10
    SO11Y_OAP = 11
    SO11Y_SATELLITE = 12
    MQ = 13
    VIRTUAL_DATABASE = 14
    VIRTUAL_MQ = 15
    VIRTUAL_GATEWAY = 16
    K8S_SERVICE = 17


class ProcessDetectType(IntEnum):
    """How an agent discovered a process. Positive values are concrete detectors."""

    UNDEFINED = 0
    VM = 1
    KUBERNETES = 2
    VIRTUAL = 3


class ScopeDefine(IntEnum):
    """Scope IDs stream definitions are registered under."""

    SERVICE = 1
    SERVICE_INSTANCE = 2
    ENDPOINT = 3
    PROCESS = 44
