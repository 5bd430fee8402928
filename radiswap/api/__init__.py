"""HTTP service for Radiswap pools."""
