"""Portable, versioned backups of a live preference store."""
