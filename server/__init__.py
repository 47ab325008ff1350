"""HTTP front-end for the bridge engine."""
