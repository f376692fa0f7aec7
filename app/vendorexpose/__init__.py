"""vendorexpose - expose web folders of vendor packages under a public web root."""

__version__ = "0.1.0"
