"""clustergate - client-side validation of cluster provisioning settings."""

__version__ = "0.1.0"
