"""Process records."""

from procspine.analysis.process.process_traffic import ProcessTraffic, PropertyUtil

__all__ = ["ProcessTraffic", "PropertyUtil"]
