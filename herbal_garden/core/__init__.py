"""Application lifecycle and dependency wiring."""
