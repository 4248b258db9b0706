"""
Tests for DomainParser.reload: atomic swap, failure handling and
behaviour under concurrent parsing.
"""

from concurrent.futures import ThreadPoolExecutor

from structlog.testing import capture_logs

from domain_suffix.models import SuffixSource
from domain_suffix.parser import DomainParser


class TestReload:
    def test_installs_new_set(self, parser):
        assert parser.try_parse("example.de") is None

        result = parser.reload(["de", "com"])

        assert result.ok
        assert result.count == 2
        assert result.source == SuffixSource.LINES
        assert parser.try_parse("example.de").registrable_domain == "example.de"
        assert parser.try_parse("dns.1.com.cn") is None

    def test_result_is_truthy_on_success(self, parser):
        assert parser.reload(["com"])
        assert bool(parser.reload(["com"])) is True

    def test_same_lines_twice_give_same_membership(self, sample_lines):
        parser = DomainParser()
        parser.reload(sample_lines)
        first = parser.suffixes
        parser.reload(sample_lines)
        second = parser.suffixes

        assert first is not second
        assert first == second

    def test_failure_keeps_previous_set(self, parser):
        before = parser.suffixes

        def broken():
            yield "de"
            raise OSError("connection reset")

        with capture_logs() as logs:
            result = parser.reload(broken(), source=SuffixSource.CACHE)

        assert not result
        assert result.source == SuffixSource.CACHE
        assert result.count == len(before)
        assert "connection reset" in result.error
        assert parser.suffixes is before
        assert parser.try_parse("dns.1.com.cn") is not None
        assert parser.try_parse("example.de") is None
        assert any(e["event"] == "suffix_reload_failed" for e in logs)

    def test_decode_failure_keeps_previous_set(self, parser):
        def undecodable():
            yield "de"
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        result = parser.reload(undecodable())

        assert not result.ok
        assert "com.cn" in parser.suffixes


    def test_producer_value_error_gives_failed_result(self, parser):
        before = parser.suffixes

        def broken():
            yield "de"
            raise ValueError("bad chunk")

        result = parser.reload(broken())

        assert not result
        assert "bad chunk" in result.error
        assert parser.suffixes is before


class TestConcurrentReload:
    def test_parses_see_old_or_new_set_only(self):
        old_lines = ["com", "uk"]
        new_lines = ["com", "uk", "co.uk"]
        parser = DomainParser()
        parser.reload(old_lines)

        expected = {
            ("www.example", "co.uk", "uk"),
            ("www", "example.co.uk", "co.uk"),
        }

        def parse_many():
            seen = set()
            for _ in range(500):
                parsed = parser.try_parse("www.example.co.uk")
                assert parsed is not None
                seen.add((parsed.subdomain, parsed.registrable_domain, parsed.suffix))
            return seen

        def reload_many():
            results = []
            for i in range(200):
                results.append(parser.reload(new_lines if i % 2 else old_lines))
            return results

        with ThreadPoolExecutor(max_workers=8) as pool:
            parse_futures = [pool.submit(parse_many) for _ in range(6)]
            reload_futures = [pool.submit(reload_many) for _ in range(2)]
            observed = set().union(*(f.result() for f in parse_futures))
            reloads = [r for f in reload_futures for r in f.result()]

        assert observed <= expected
        assert all(r.ok for r in reloads)
        assert len(parser.suffixes) in (len(old_lines), len(new_lines))
