"""Core serialization model, independent of any concrete format."""
