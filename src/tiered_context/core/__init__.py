"""Framework layer: settings, logging, shared types."""
