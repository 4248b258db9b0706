"""
Pytest configuration and shared fixtures for domain_suffix tests.
"""

import logging
import sys

import pytest
import structlog

from domain_suffix.parser import DomainParser
from domain_suffix.suffix_set import SuffixSet
from domain_suffix.validator import reset_parser

# Keep stdout clean for CLI output assertions
structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)


SAMPLE_LINES = [
    "// ===BEGIN ICANN DOMAINS===",
    "",
    "com",
    "cn",
    "com.cn",
    "  uk  ",
    "co.uk",
    "us",
    "ak.us",
    "k12.ak.us",
    "*.ck",
    "!www.ck",
    "// ===END ICANN DOMAINS===",
]


@pytest.fixture
def sample_lines():
    """Raw list lines including comments, blanks and padded entries."""
    return list(SAMPLE_LINES)


@pytest.fixture
def suffix_set(sample_lines):
    return SuffixSet.load(sample_lines)


@pytest.fixture
def parser(suffix_set):
    """A parser owning its own suffix set, independent of the default one."""
    return DomainParser(suffix_set)


@pytest.fixture
def default_parser_reset():
    """Clear the lazily built default parser before and after a test."""
    reset_parser()
    yield
    reset_parser()
