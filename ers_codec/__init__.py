"""RFC 4998 Evidence Record Syntax (ERS) codec."""

__version__ = "0.1.0"
