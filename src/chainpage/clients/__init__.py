"""Clients for the remote indexer and for the page API."""
