"""Shared helpers for the PNGSECRET command line tool."""
