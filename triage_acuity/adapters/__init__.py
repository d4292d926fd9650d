"""Export adapters for acuity results."""
