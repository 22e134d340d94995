"""
Unit tests for TXT record classification in com.skynetlabs.dnslink.resolve.records
"""

from com.skynetlabs.dnslink.resolve.records import ClassifiedRecords, classify_records

from conftest import SKYLINK


class TestClassifyRecords:
    """Test suite for classify_records."""

    def test_empty_records(self):
        """Test no records classify into two empty lists."""
        assert classify_records([]) == ClassifiedRecords()

    def test_skylink_record(self):
        """Test a dnslink record in the skynet namespace is a skylink record."""
        result = classify_records([f"dnslink=/skynet-ns/{SKYLINK}"])
        assert result.skylink_records == [f"dnslink=/skynet-ns/{SKYLINK}"]
        assert result.sponsor_records == []

    def test_skylink_record_value_is_not_validated(self):
        """Test any non-empty value classifies, validity is checked later."""
        result = classify_records(["dnslink=/skynet-ns/broken-skylink"])
        assert result.skylink_records == ["dnslink=/skynet-ns/broken-skylink"]

    def test_skylink_record_requires_value(self):
        """Test a dnslink record without value is dropped."""
        assert classify_records(["dnslink=/skynet-ns/"]).skylink_records == []

    def test_other_namespaces_are_dropped(self):
        """Test dnslink records of other namespaces are ignored."""
        result = classify_records(
            ["dnslink=/dummy-namespace/abcd-1234", "dnslink=/ipfs/QmHash", "v=spf1 -all"]
        )
        assert result == ClassifiedRecords()

    def test_matching_is_case_sensitive(self):
        """Test conventions are matched case-sensitively."""
        result = classify_records(
            [f"DNSLINK=/skynet-ns/{SKYLINK}", "Skynet-Sponsor-Key=abc"]
        )
        assert result == ClassifiedRecords()

    def test_matching_is_anchored(self):
        """Test records with leading text do not classify."""
        result = classify_records(
            [f" dnslink=/skynet-ns/{SKYLINK}", "x-skynet-sponsor-key=abc"]
        )
        assert result == ClassifiedRecords()

    def test_sponsor_record(self):
        """Test an alphanumeric sponsor key record is a sponsor record."""
        result = classify_records(["skynet-sponsor-key=dummySponsorKey1"])
        assert result.sponsor_records == ["skynet-sponsor-key=dummySponsorKey1"]
        assert result.skylink_records == []

    def test_sponsor_record_must_be_alphanumeric(self):
        """Test sponsor keys with other characters are dropped."""
        result = classify_records(
            [
                "skynet-sponsor-key=",
                "skynet-sponsor-key=dummy-key",
                "skynet-sponsor-key=dummy key",
                "skynet-sponsor-key=dummy\nkey",
            ]
        )
        assert result.sponsor_records == []

    def test_preserves_order(self):
        """Test both lists keep the original record order."""
        records = [
            "skynet-sponsor-key=second",
            "dnslink=/skynet-ns/first",
            "unrelated",
            "dnslink=/skynet-ns/second",
            "skynet-sponsor-key=first",
        ]
        result = classify_records(records)
        assert result.skylink_records == [
            "dnslink=/skynet-ns/first",
            "dnslink=/skynet-ns/second",
        ]
        assert result.sponsor_records == [
            "skynet-sponsor-key=second",
            "skynet-sponsor-key=first",
        ]
