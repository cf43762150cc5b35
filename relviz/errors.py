"""Exceptions raised by the physics core."""


class RelativityError(Exception):
    """Base class for every error the core raises."""


class DomainError(RelativityError):
    """A formula was evaluated outside the region where it is real and finite."""


class InvalidConfig(DomainError):
    """The field configuration itself is out of range (e.g. spin > mass)."""


class InvalidArgument(RelativityError, ValueError):
    """A caller-supplied argument such as dt, mass or a count is not positive."""
