"""Core configuration, identity and error primitives."""
