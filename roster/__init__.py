"""Roster lineup manager: persistence core and JSON API."""
