from .pool import AdmissionController
from .server import CipherDaemon
from .session import SessionContext, SessionWorker

__all__ = ["AdmissionController", "CipherDaemon", "SessionContext", "SessionWorker"]
