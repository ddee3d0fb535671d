"""HTTP surface: auth pages, notifications API, error envelopes."""
