"""HTTP interface for the vocabulary admin API."""
