"""Read-only query service over the Michelin guide restaurant dataset."""
