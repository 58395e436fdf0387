from .orchestrator import CipherClient

__all__ = ["CipherClient"]
