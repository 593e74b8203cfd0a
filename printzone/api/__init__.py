"""HTTP service exposing the constraint engine."""
