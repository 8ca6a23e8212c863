"""Partner relationship resources."""
