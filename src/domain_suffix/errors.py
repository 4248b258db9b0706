class DomainSuffixError(Exception):
    """Base class for errors raised by domain_suffix."""


class LoadError(DomainSuffixError):
    """A suffix line source could not be read to completion."""
