"""Candidate enrollment: file records with their fingerprints, and the bucket index keyed by them."""
