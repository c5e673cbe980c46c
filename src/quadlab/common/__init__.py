"""Configuration, constants and logging shared across QuadLab."""
