"""Building blocks for tests that run throwaway containers: images, sockets, archives, hooks and logs."""

__version__ = "0.20.0"

__all__ = ["archive", "docker_host", "images", "lifecycle", "logs", "processor", "session"]