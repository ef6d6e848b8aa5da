"""Configuration for Style Kits."""
