"""Chain transport clients."""
