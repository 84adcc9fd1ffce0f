"""Audio input and video output adapters."""
