"""Process Spine -- process-traffic registry records for an observability backend.

Layers::

    core/       constants, string guards, errors, hashing, logging, settings
    analysis/   metric base, enums, logical IDs, stream registry, ProcessTraffic
    remote/     RemoteData wire tuple for peer forwarding
    storage/    column descriptors, storage builder protocol, JSON codec

Tags:
    procspine, observability, process-traffic
"""

__version__ = "0.1.0"
