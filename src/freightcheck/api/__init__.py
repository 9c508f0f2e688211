"""HTTP surface for compliance checks."""
