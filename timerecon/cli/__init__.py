"""Timesheet Recon command-line interface."""
