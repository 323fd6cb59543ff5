"""Core configuration and logging helpers for the mock backend."""
