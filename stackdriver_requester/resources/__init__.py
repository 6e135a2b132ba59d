"""Static Cloud Monitoring reference data."""
