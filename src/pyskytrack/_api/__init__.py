"""Collaborator endpoints: traffic feed, photo lookup, geolocation."""
