"""Rate sources: upstream adapters and the today/historical selector."""
