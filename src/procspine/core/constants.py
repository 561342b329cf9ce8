"""Framework-wide constants."""

# Joins identity components into a logical ID. A control character never
# appears in instance IDs or process names.
ID_CONNECTOR = "\u001f"

EMPTY_STRING = ""

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
