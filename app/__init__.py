"""Workdesk: task approval service."""
