#!/usr/bin/env python3
"""
Tests for zone file import and export.
"""

import os
import shutil
import tempfile
import unittest

from dns_migration_manager.core.exceptions import ValidationError, ZoneFileParseError
from dns_migration_manager.core.models import DnsRecordDescriptor, RecordType
from dns_migration_manager.parsers.zone_file import ZoneFileParser, dump_zone_file, parse_zone_file


class TestDumpZoneFile(unittest.TestCase):
    """Test zone file export."""

    def test_header_and_relative_names(self):
        text = dump_zone_file(
            [
                DnsRecordDescriptor(type="A", name="example.com", content="192.0.2.1", ttl=600),
                DnsRecordDescriptor(type="A", name="www.example.com", content="192.0.2.2"),
                DnsRecordDescriptor(type="CNAME", name="cdn.example.net", content="example.com."),
            ],
            "example.com.",
        )

        lines = text.splitlines()
        self.assertEqual(lines[:3], ["$ORIGIN example.com.", "$TTL 300", ""])
        self.assertEqual(lines[3], "@\t600\tIN\tA\t192.0.2.1")
        self.assertEqual(lines[4], "www\t300\tIN\tA\t192.0.2.2")
        self.assertEqual(lines[5], "cdn.example.net.\t300\tIN\tCNAME\texample.com.")

    def test_priority_column_only_for_mx(self):
        text = dump_zone_file(
            [
                DnsRecordDescriptor(type="MX", name="example.com", content="mail.example.com.", priority=10),
                DnsRecordDescriptor(type="SRV", name="_sip._tcp.example.com", content="5 0 5060 sip.example.com.", priority=5),
            ],
            "example.com",
        )

        self.assertIn("@\t300\tIN\tMX\t10 mail.example.com.", text)
        self.assertIn("_sip._tcp\t300\tIN\tSRV\t5 0 5060 sip.example.com.", text)


class TestParseZoneFile(unittest.TestCase):
    """Test zone file import."""

    def test_parse_basic_zone(self):
        content = """
; example zone
$ORIGIN example.com.
$TTL 3600

@       IN  A     192.0.2.1
@   300 IN  MX    10 mail.example.com.
www 600 IN  A     192.0.2.2
txt 300 IN  TXT   "v=spf1 include:_spf.example.com -all"
"""
        records = parse_zone_file(content)

        self.assertEqual(len(records), 3)
        self.assertEqual(records[1].type, RecordType.MX)
        self.assertEqual(records[1].name, "example.com")
        self.assertEqual(records[1].priority, 10)
        self.assertEqual(records[1].content, "mail.example.com.")
        self.assertEqual(records[2].name, "www.example.com")
        self.assertEqual(records[2].ttl, 600)

    def test_short_lines_are_skipped(self):
        # No TTL column, so the type is not in the fourth field
        records = parse_zone_file("$ORIGIN example.com.\n@ IN A\n@ IN A 192.0.2.1\n")
        self.assertEqual(records, [])

    def test_ttl_directive_applies_to_later_lines(self):
        content = """
$ORIGIN example.com.
a  -  IN A 192.0.2.1
$TTL 900
b  -  IN A 192.0.2.2
"""
        records = parse_zone_file(content)
        self.assertEqual([r.ttl for r in records], [300, 900])

    def test_at_before_origin_is_empty_name(self):
        content = """
@ 300 IN TXT "before"
$ORIGIN example.com.
@ 300 IN TXT "after"
"""
        records = parse_zone_file(content)
        self.assertEqual([r.name for r in records], ["", "example.com"])

    def test_absolute_names_are_kept(self):
        records = parse_zone_file("$ORIGIN example.com.\nhost.example.org. 300 IN A 192.0.2.9\n")
        self.assertEqual(records[0].name, "host.example.org")

    def test_unknown_types_are_skipped(self):
        content = """
$ORIGIN example.com.
@ 300 IN SOA ns1.example.com. hostmaster.example.com. 1 7200 3600 1209600 300
@ 300 IN HTTPS 1 . alpn=h2
@ 300 IN A 192.0.2.1
"""
        records = parse_zone_file(content)
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].type, RecordType.A)

    def test_bad_mx_priority(self):
        with self.assertRaises(ZoneFileParseError) as ctx:
            parse_zone_file("$ORIGIN example.com.\n@ 300 IN MX high mail.example.com.\n")
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertIn("line 2", str(ctx.exception))

    def test_bare_origin(self):
        with self.assertRaises(ZoneFileParseError):
            parse_zone_file("$ORIGIN\n")


class TestZoneFileRoundTrip(unittest.TestCase):
    """Export followed by import preserves the record set."""

    def test_round_trip(self):
        records = [
            DnsRecordDescriptor(type="A", name="example.com", content="192.0.2.1", ttl=300),
            DnsRecordDescriptor(type="A", name="www.example.com", content="192.0.2.2", ttl=3600),
            DnsRecordDescriptor(type="AAAA", name="example.com", content="2001:db8::1", ttl=300),
            DnsRecordDescriptor(type="MX", name="example.com", content="mail.example.com.", ttl=300, priority=10),
            DnsRecordDescriptor(type="TXT", name="example.com", content='"v=spf1 -all"', ttl=300),
            DnsRecordDescriptor(type="CNAME", name="blog.example.com", content="example.com.", ttl=300),
        ]

        parsed = parse_zone_file(dump_zone_file(records, "example.com"))

        def key(record):
            return (record.type, record.name, record.content, record.ttl, record.priority)

        self.assertEqual(sorted(map(key, parsed)), sorted(map(key, records)))

    def test_mx_without_priority_cannot_be_exported(self):
        with self.assertRaises(ValidationError):
            DnsRecordDescriptor(type="MX", name="example.com", content="mail.example.com.")

        # Priority 0 is still written and read back
        text = dump_zone_file(
            [DnsRecordDescriptor(type="MX", name="example.com", content="mail.example.com.", priority=0)],
            "example.com",
        )
        parsed = parse_zone_file(text)
        self.assertEqual(parsed[0].priority, 0)
        self.assertEqual(parsed[0].content, "mail.example.com.")


class TestZoneFileParser(unittest.TestCase):
    """Test reading zone files from disk."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_parse_file(self):
        path = os.path.join(self.temp_dir, "example.com.zone")
        with open(path, "w") as f:
            f.write("$ORIGIN example.com.\n@ 300 IN A 192.0.2.1\nwww 300 IN A 192.0.2.2\n")

        records = ZoneFileParser(path).parse()

        self.assertEqual([r.name for r in records], ["example.com", "www.example.com"])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            ZoneFileParser(os.path.join(self.temp_dir, "missing.zone")).parse()


if __name__ == "__main__":
    unittest.main(verbosity=2)
