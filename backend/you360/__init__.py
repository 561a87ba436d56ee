"""You360 wellness backend."""
