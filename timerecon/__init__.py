"""Timesheet Recon - reconcile official and secondary timesheet records."""

__version__ = "0.3.0"
