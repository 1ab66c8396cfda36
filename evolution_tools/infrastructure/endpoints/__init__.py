"""Static Evolution API endpoint descriptors, grouped by controller."""
