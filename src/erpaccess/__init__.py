"""ERP access control - permission resolver, access audit log and admin API."""

__version__ = "0.1.0"
