"""OAuth start and callback resources."""
