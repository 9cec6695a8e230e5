"""Provider matching, dispatch, and outreach-SLA engine."""

__version__ = "0.4.0"
