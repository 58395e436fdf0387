from .cli import OtpArgumentParser, port_number
from .files import read_symbols
from .keygen import generate_key

__all__ = ["OtpArgumentParser", "port_number", "read_symbols", "generate_key"]
