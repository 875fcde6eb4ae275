"""Core module for openxform."""
