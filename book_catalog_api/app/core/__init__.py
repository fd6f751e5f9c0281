"""Configuration, logging, errors and MongoDB plumbing."""
