"""
Parsers for record sets held outside the provider.
"""

from .zone_file import ZoneFileParser, dump_zone_file, parse_zone_file

__all__ = ["ZoneFileParser", "dump_zone_file", "parse_zone_file"]
