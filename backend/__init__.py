"""HTTP surface for spot_check."""
